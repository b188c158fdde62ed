"""Tests for engine configuration."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from cdlatex.config import CONFIG_ENV_VAR, EngineConfig, load_config
from cdlatex.errors import ConfigError
from cdlatex.tables import BuiltinAction, CommandEntry


class TestEngineConfig:
    """Tests for the settings model."""

    def test_defaults(self):
        config = EngineConfig()
        assert config.paired_parens == "$[{"
        assert config.auto_help_delay == 1.5
        assert config.simplify_sub_super_scripts is True
        assert config.math_symbol_prefix == "`"
        assert config.math_modify_prefix == "'"
        assert config.insert_auto_labels is True
        assert config.modify_backwards is True
        assert config.help_page_size == 20

    def test_is_frozen(self):
        config = EngineConfig()
        with pytest.raises(ValidationError):
            config.paired_parens = "("

    def test_negative_delay_rejected(self):
        with pytest.raises(ValidationError):
            EngineConfig(auto_help_delay=-1)

    def test_prefix_must_be_one_key(self):
        with pytest.raises(ValidationError):
            EngineConfig(math_symbol_prefix="``")

    def test_unknown_binding_modifier_rejected(self):
        with pytest.raises(ValidationError):
            EngineConfig(symbol_direct_bindings=(("wiggle",),))

    def test_binding_prefix(self):
        config = EngineConfig(symbol_direct_bindings=(("alt",), None, ("control", "alt")))
        assert config.binding_prefix(1) == "A-"
        assert config.binding_prefix(2) is None
        assert config.binding_prefix(3) == "C-A-"
        assert config.binding_prefix(4) is None

    def test_base_directory_defaults_to_cwd(self):
        assert EngineConfig().base_directory == Path.cwd()
        assert EngineConfig(working_directory=Path("/tmp")).base_directory == Path("/tmp")

    def test_command_overrides_parse_from_dicts(self):
        """Overrides validate from plain data, actions by their kind tag."""
        config = EngineConfig.model_validate({
            "commands": [{
                "keyword": "bx",
                "replacement": "\\boxed{?}",
                "action": {"kind": "builtin", "op": "position_cursor"},
                "math_mode": True,
            }],
        })
        entry = config.commands[0]
        assert isinstance(entry, CommandEntry)
        assert entry.action == BuiltinAction(op="position_cursor")


class TestLoadConfig:
    """Tests for reading configuration files."""

    def test_no_path_gives_defaults(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        assert load_config() == EngineConfig()

    def test_reads_json_file(self, tmp_path):
        path = tmp_path / "cdlatex.json"
        path.write_text(json.dumps({"paired_parens": "$[{(", "auto_help_delay": 0.5}))
        config = load_config(path)
        assert config.paired_parens == "$[{("
        assert config.auto_help_delay == 0.5

    def test_reads_env_var(self, tmp_path, monkeypatch):
        path = tmp_path / "cdlatex.json"
        path.write_text(json.dumps({"modify_backwards": False}))
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert load_config().modify_backwards is False

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="not valid JSON"):
            load_config(path)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"auto_help_delay": -3}))
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path)
