from __future__ import annotations

"""
Unit tests for the Main Entry Point supervisor.

Verifies that uncaught exceptions are routed to the global handler and
that the handler reports the traceback on stderr.
"""

import importlib
import sys

import pytest


@pytest.fixture
def supervisor(monkeypatch):
    """Import the entry module with the interpreter hook restored afterwards."""
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    import contextmaker.main as entry
    return importlib.reload(entry)


def test_handler_is_installed_as_excepthook(supervisor) -> None:
    assert sys.excepthook is supervisor.global_exception_handler


def test_handler_prints_trace(supervisor, capsys) -> None:
    try:
        raise RuntimeError("kaboom")
    except RuntimeError as e:
        supervisor.global_exception_handler(type(e), e, e.__traceback__)

    err = capsys.readouterr().err
    assert "CRITICAL ERROR (CONTEXTMAKER CLI)" in err
    assert "RuntimeError: kaboom" in err


def test_main_reports_crash_as_exit_code(supervisor, monkeypatch, capsys) -> None:
    import contextmaker.interface.cli.app as cli_app

    def _boom(argv=None):
        raise RuntimeError("unexpected")

    monkeypatch.setattr(cli_app, "main", _boom)

    assert supervisor.main() == 1
    assert "unexpected" in capsys.readouterr().err
