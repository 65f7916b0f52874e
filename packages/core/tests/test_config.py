"""Tests for raw input loading."""

import pytest

from prnote_core.config import get_input, load_config


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"), environ={})
    assert config["mode"] == "comment"
    assert config["message"] is None
    assert config["annotations"] is None


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".prnote.yml"
    cfg.write_text("mode: check\nname: lint\nconclusion: failure\n")
    config = load_config(config_path=str(cfg), environ={})
    assert config["mode"] == "check"
    assert config["name"] == "lint"
    assert config["conclusion"] == "failure"


def test_config_file_values_coerced_to_str(tmp_path):
    cfg = tmp_path / ".prnote.yml"
    cfg.write_text("message: 42\n")
    config = load_config(config_path=str(cfg), environ={})
    assert config["message"] == "42"


def test_unknown_config_keys_ignored(tmp_path):
    cfg = tmp_path / ".prnote.yml"
    cfg.write_text("model: anthropic\nprefix: '<!-- x -->'\n")
    config = load_config(config_path=str(cfg), environ={})
    assert "model" not in config
    assert config["prefix"] == "<!-- x -->"


def test_non_mapping_config_file_raises(tmp_path):
    cfg = tmp_path / ".prnote.yml"
    cfg.write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="must contain a mapping"):
        load_config(config_path=str(cfg), environ={})


def test_action_inputs_override_config_file(tmp_path):
    cfg = tmp_path / ".prnote.yml"
    cfg.write_text("mode: comment\nprefix: from-file\n")
    config = load_config(config_path=str(cfg), environ={"INPUT_MODE": "check", "INPUT_PREFIX": ""})
    assert config["mode"] == "check"
    # An empty action input does not clobber the file value.
    assert config["prefix"] == "from-file"


def test_cli_overrides_action_inputs(tmp_path):
    config = load_config(
        config_path=str(tmp_path / "nonexistent.yml"),
        cli_overrides={"message": "from cli"},
        environ={"INPUT_MESSAGE": "from env"},
    )
    assert config["message"] == "from cli"


def test_none_cli_overrides_ignored(tmp_path):
    config = load_config(
        config_path=str(tmp_path / "nonexistent.yml"),
        cli_overrides={"message": None},
        environ={"INPUT_MESSAGE": "from env"},
    )
    assert config["message"] == "from env"


def test_reads_os_environ_by_default(tmp_path, monkeypatch):
    monkeypatch.setenv("INPUT_TITLE", "From Actions")
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["title"] == "From Actions"


class TestGetInput:
    def test_strips_value(self):
        assert get_input("name", {"INPUT_NAME": "  lint  "}) == "lint"

    def test_empty_is_none(self):
        assert get_input("name", {"INPUT_NAME": "   "}) is None

    def test_missing_is_none(self):
        assert get_input("name", {}) is None

    def test_spaces_become_underscores(self):
        assert get_input("check name", {"INPUT_CHECK_NAME": "x"}) == "x"
