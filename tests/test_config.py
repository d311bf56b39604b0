"""Tests for config loading, validation and corrupt-file handling."""

from __future__ import annotations

import json
from unittest.mock import patch

from stack_browser.config import CONFIG_FILENAME, get_config_path, load_config
from stack_browser.models import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SITE,
    MAX_PAGE_SIZE,
    STACK_API_BASE_URL,
    UserConfig,
)


def test_get_config_path_uses_platformdirs(tmp_path):
    with patch("stack_browser.config.user_config_dir", return_value=str(tmp_path)) as dirs:
        path = get_config_path()
    dirs.assert_called_once_with("stack-browser")
    assert path == tmp_path / CONFIG_FILENAME


def test_missing_file_returns_defaults(tmp_path):
    config = load_config(tmp_path / CONFIG_FILENAME)
    assert config == UserConfig()
    assert config.config_defaulted is False


def test_default_path_is_used_when_none_given(tmp_path):
    path = tmp_path / CONFIG_FILENAME
    path.write_text(json.dumps({"site": "askubuntu"}), encoding="utf-8")
    with patch("stack_browser.config.get_config_path", return_value=path):
        assert load_config().site == "askubuntu"


def test_valid_file_is_loaded(tmp_path):
    path = tmp_path / CONFIG_FILENAME
    path.write_text(
        json.dumps(
            {
                "site": "superuser",
                "api_base_url": "https://example.test/",
                "page_size": 50,
                "request_timeout": 5,
                "start_page": 3,
                "theme_name": "solarized-dark",
            }
        ),
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.site == "superuser"
    assert config.api_base_url == "https://example.test/"
    assert config.page_size == 50
    assert config.request_timeout == 5
    assert config.start_page == 3
    assert config.theme_name == "solarized-dark"


def test_out_of_range_values_are_clamped(tmp_path):
    path = tmp_path / CONFIG_FILENAME
    path.write_text(
        json.dumps({"page_size": 1000, "request_timeout": 0, "start_page": -4}), encoding="utf-8"
    )
    config = load_config(path)
    assert config.page_size == MAX_PAGE_SIZE
    assert config.request_timeout == 1
    assert config.start_page == 1


def test_wrong_types_fall_back_to_defaults(tmp_path):
    path = tmp_path / CONFIG_FILENAME
    path.write_text(
        json.dumps(
            {
                "site": 42,
                "api_base_url": "   ",
                "page_size": "big",
                "request_timeout": True,
                "theme_name": "neon",
            }
        ),
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.site == DEFAULT_SITE
    assert config.api_base_url == STACK_API_BASE_URL
    assert config.page_size == DEFAULT_PAGE_SIZE
    assert config.request_timeout == DEFAULT_REQUEST_TIMEOUT
    assert config.theme_name == "monokai"


def test_invalid_json_is_backed_up(tmp_path):
    path = tmp_path / CONFIG_FILENAME
    path.write_text("{not json", encoding="utf-8")
    config = load_config(path)
    assert config.config_defaulted is True
    assert config.site == DEFAULT_SITE
    assert not path.exists()
    assert (tmp_path / "config.json.corrupt").read_text(encoding="utf-8") == "{not json"


def test_non_object_root_is_backed_up(tmp_path):
    path = tmp_path / CONFIG_FILENAME
    path.write_text("[1, 2, 3]", encoding="utf-8")
    config = load_config(path)
    assert config.config_defaulted is True
    assert (tmp_path / "config.json.corrupt").exists()


def test_failed_backup_still_returns_defaults(tmp_path):
    path = tmp_path / CONFIG_FILENAME
    path.write_text("{", encoding="utf-8")
    with patch("pathlib.Path.replace", side_effect=OSError("read-only")):
        config = load_config(path)
    assert config.config_defaulted is True
    assert path.exists()


def test_unreadable_file_returns_defaults(tmp_path):
    path = tmp_path / CONFIG_FILENAME
    path.write_text("{}", encoding="utf-8")
    with patch("pathlib.Path.read_text", side_effect=OSError("denied")):
        config = load_config(path)
    assert config == UserConfig()


def test_user_config_clamps_direct_construction():
    config = UserConfig(page_size=0, request_timeout=10_000, start_page=0)
    assert config.page_size == 1
    assert config.request_timeout == 120
    assert config.start_page == 1
