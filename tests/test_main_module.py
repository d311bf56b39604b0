"""Tests for `python -m stack_browser` entrypoint."""

from __future__ import annotations

import runpy
from unittest.mock import patch

import pytest


def test_main_module_calls_sys_exit_with_main_return_value():
    with (
        patch("stack_browser.app.main", return_value=7) as main_mock,
        patch("sys.exit", side_effect=SystemExit) as exit_mock,
        pytest.raises(SystemExit),
    ):
        runpy.run_module("stack_browser.__main__", run_name="__main__")

    main_mock.assert_called_once_with()
    exit_mock.assert_called_once_with(7)


def test_app_main_delegates_to_cli():
    from stack_browser import app as app_module

    with patch("stack_browser.app._cli_main", return_value=0) as cli_main:
        assert app_module.main() == 0

    kwargs = cli_main.call_args.kwargs
    assert kwargs["app_factory"] is app_module.StackBrowser
    assert kwargs["load_config_fn"] is app_module.load_config
