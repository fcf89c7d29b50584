# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="contextmaker",
    version="0.1.0",
    description="Turn local files and folders into an LLM-ready text digest",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["contextmaker*"]),
    python_requires=">=3.9",
    install_requires=[
        "tiktoken",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'contextmaker=contextmaker.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
