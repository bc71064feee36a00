"""Tests for bandsync_lite.config_loader."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from bandsync_lite.config_loader import Config, load_config
from bandsync_lite.lite_exceptions import ConfigError

pytestmark = pytest.mark.unit


class TestConfigFromDict:
    def test_defaults(self):
        cfg = Config.from_dict(None)
        assert cfg == Config()
        assert cfg.display_months_back == 3
        assert cfg.display_months_ahead == 6
        assert cfg.max_occurrences_per_event is None
        assert cfg.log_level == "INFO"

    def test_numeric_strings_are_coerced(self):
        cfg = Config.from_dict({"display_months_back": "1", "max_occurrences_per_event": "50"})
        assert cfg.display_months_back == 1
        assert cfg.max_occurrences_per_event == 50

    def test_bad_int_falls_back_with_warning(self, caplog):
        with caplog.at_level("WARNING"):
            cfg = Config.from_dict({"display_months_ahead": "half a year"})
        assert cfg.display_months_ahead == 6
        assert "display_months_ahead" in caplog.text

    def test_negative_months_clamped(self):
        assert Config.from_dict({"display_months_back": -2}).display_months_back == 0

    @pytest.mark.parametrize("cap", [0, -1, "", "lots"])
    def test_unusable_cap_disables_it(self, cap):
        assert Config.from_dict({"max_occurrences_per_event": cap}).max_occurrences_per_event is None

    def test_log_level_upper_cased(self):
        assert Config.from_dict({"log_level": "debug"}).log_level == "DEBUG"


class TestLoadConfig:
    def test_missing_file_uses_defaults(self, tmp_path: Path):
        cfg = load_config(tmp_path / "absent.yaml", environ={})
        assert cfg == Config()

    def test_yaml_file(self, tmp_path: Path):
        path = tmp_path / "bandsync.yaml"
        path.write_text("display_months_back: 1\ndisplay_months_ahead: 12\nlog_level: warning\n")
        cfg = load_config(path, environ={})
        assert (cfg.display_months_back, cfg.display_months_ahead, cfg.log_level) == (1, 12, "WARNING")

    def test_json_file(self, tmp_path: Path):
        path = tmp_path / "bandsync.json"
        path.write_text(json.dumps({"max_occurrences_per_event": 100}))
        assert load_config(path, environ={}).max_occurrences_per_event == 100

    def test_empty_file_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "bandsync.yaml"
        path.write_text("")
        assert load_config(path, environ={}) == Config()

    def test_non_mapping_raises(self, tmp_path: Path):
        path = tmp_path / "bandsync.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError):
            load_config(path, environ={})

    def test_unparseable_file_raises(self, tmp_path: Path):
        path = tmp_path / "bandsync.yaml"
        path.write_text("display_months_back: [1, 2\n")
        with pytest.raises(ConfigError):
            load_config(path, environ={})

    def test_environment_overrides_file(self, tmp_path: Path):
        path = tmp_path / "bandsync.yaml"
        path.write_text("display_months_back: 1\n")
        environ = {"BANDSYNC_DISPLAY_MONTHS_BACK": "4", "BANDSYNC_MAX_OCCURRENCES": "25"}
        cfg = load_config(path, environ=environ)
        assert cfg.display_months_back == 4
        assert cfg.max_occurrences_per_event == 25

    def test_reads_process_environment_by_default(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("BANDSYNC_LOG_LEVEL", "error")
        assert load_config(tmp_path / "absent.yaml").log_level == "ERROR"
