from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the asynchronous QueueListener architecture, idempotency
of configuration, log file rotation and teardown.
"""

import logging
from pathlib import Path

import pytest

from contextmaker.infra.logging import LoggingConfig, configure_logging, shutdown_logging
from contextmaker.infra.logging.core import _QUEUE_LISTENER_ATTR
from contextmaker.infra.logging.handlers import _HANDLER_TAG_ATTR


def _our_handlers() -> list:
    return [h for h in logging.getLogger().handlers if getattr(h, _HANDLER_TAG_ATTR, False)]


@pytest.fixture(autouse=True)
def reset_logging():
    """Detach our handlers before and after each test."""
    shutdown_logging()
    yield
    shutdown_logging()


def test_logging_idempotency() -> None:
    """Repeated configuration does not duplicate handlers."""
    cfg = LoggingConfig(level="INFO", console=True)

    configure_logging(cfg)
    initial = len(_our_handlers())
    configure_logging(cfg)

    assert len(_our_handlers()) == initial == 1


def test_force_reconfigures() -> None:
    configure_logging(LoggingConfig(level="INFO"))
    first_listener = getattr(logging.getLogger(), _QUEUE_LISTENER_ATTR)

    configure_logging(LoggingConfig(level="DEBUG"), force=True)

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert getattr(root, _QUEUE_LISTENER_ATTR) is not first_listener
    assert len(_our_handlers()) == 1


def test_log_rotation(tmp_path: Path) -> None:
    """Rotation kicks in once the size limit is exceeded."""
    log_file = tmp_path / "rotate.log"
    cfg = LoggingConfig(level="DEBUG", console=False, log_file=str(log_file), max_bytes=100, backup_count=1)

    configure_logging(cfg)
    logger = logging.getLogger("test_rotate")
    for _ in range(10):
        logger.debug("This is a long log message to trigger rotation." * 5)

    # Stopping the listener drains the queue
    shutdown_logging()

    assert log_file.exists()
    assert (tmp_path / "rotate.log.1").exists()


def test_shutdown_detaches_everything() -> None:
    configure_logging(LoggingConfig(level="INFO"))
    shutdown_logging()

    root = logging.getLogger()
    assert _our_handlers() == []
    assert getattr(root, _QUEUE_LISTENER_ATTR) is None
