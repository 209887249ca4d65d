"""Tests for configpanel.panel.saved_settings."""

from __future__ import annotations

import pytest

from configpanel.exceptions import SettingsLoadError
from configpanel.panel.saved_settings import load_saved_settings

pytestmark = [pytest.mark.unit]


class TestLoadSavedSettings:
    """Test the settings store."""

    def test_missing_file(self, tmp_path):
        """Test a missing file means no saved values."""
        assert load_saved_settings(tmp_path / "nope.yml") == {}

    def test_directory(self, tmp_path):
        """Test a directory at the settings path means no saved values."""
        directory = tmp_path / "settings.yml"
        directory.mkdir()

        assert load_saved_settings(directory) == {}

    def test_sample(self, settings_file):
        """Test values are keyed by bare option id, unknown keys kept."""
        saved = load_saved_settings(settings_file)

        assert saved["ssh_port"] == 2222
        assert saved["root_password"] == "hunter2"
        assert saved["unknown_setting"] == "ignored"

    def test_empty_file(self, write_file):
        """Test an empty document is an empty map."""
        assert load_saved_settings(write_file("empty.yml", "")) == {}

    def test_malformed(self, write_file):
        """Test invalid YAML is an error, not an empty map."""
        path = write_file("bad.yml", "ssh_port: [2222\n")

        with pytest.raises(SettingsLoadError):
            load_saved_settings(path)

    def test_not_a_mapping(self, write_file):
        """Test a YAML list is rejected."""
        path = write_file("list.yml", "- a\n- b\n")

        with pytest.raises(SettingsLoadError):
            load_saved_settings(path)

    def test_keys_are_strings(self, write_file):
        """Test non-string YAML keys are turned into strings."""
        saved = load_saved_settings(write_file("int.yml", "1: one\n"))

        assert saved == {"1": "one"}
