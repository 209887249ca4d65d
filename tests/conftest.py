"""Pytest configuration and shared fixtures for configpanel tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import toml

from configpanel.i18n import DEFAULT_LOCALE
from configpanel.i18n.translator import BaseTranslator, MockedTranslator
from configpanel.models import ReleaseVariant
from configpanel.panel.panel import ConfigPanel

SAMPLE_SCHEMA = """\
version = "1.0"
i18n = "global_settings_setting"

[security]
name = "Security"

    [security.webadmin]
    name = "Webadmin"

        [security.webadmin.webadmin_allowlist_enabled]
        type = "boolean"
        default = false

        [security.webadmin.webadmin_allowlist]
        type = "tags"
        visible = "webadmin_allowlist_enabled"
        default = ""

    [security.root_access]
    name = "Change root password"

        [security.root_access.root_password]
        type = "password"
        optional = false
        default = ""

        [security.root_access.passwordless_sudo]
        type = "boolean"
        default = false

    [security.ssh]
    name = "SSH"

        [security.ssh.ssh_port]
        type = "number"
        default = 22

[email]
name = "Email"

    [email.smtp]
    name = "SMTP"

        [email.smtp.smtp_relay_host]
        type = "string"
        default = ""

        [email.smtp.smtp_relay_password]
        type = "password"
        default = ""

[misc]

    [misc.portal]
    name = { en = "Portal", fr = "Portail" }

        [misc.portal.portal_theme]
        type = "select"
        default = "default"

        [misc.portal.portal_notice]
        type = "alert"
        ask = "Changes apply on next login"

    [misc.network]
    name = "Network"

        [misc.network.main_domain]
        type = "domain"
        default = "https://example.org/"
"""

SAMPLE_SETTINGS = """\
ssh_port: 2222
root_password: hunter2
smtp_relay_host: relay.example.org
webadmin_allowlist_enabled: "yes"
unknown_setting: ignored
"""

SAMPLE_LABELS = {
    "global_settings_setting_ssh_port": "SSH port",
    "global_settings_setting_ssh_port_help": "Port of the SSH daemon",
    "global_settings_setting_root_password": "New root password",
    "global_settings_setting_passwordless_sudo": "Passwordless sudo",
    "global_settings_setting_webadmin_allowlist_enabled": "Enable allowlist",
    "global_settings_setting_webadmin_allowlist": "Allowed IPs",
    "global_settings_setting_smtp_relay_host": "Relay host",
    "global_settings_setting_smtp_relay_password": "Relay password",
    "global_settings_setting_portal_theme": "Portal theme",
    "global_settings_setting_main_domain": "Main domain",
}


def pytest_configure(config):
    """Register all project markers to avoid warnings when ini isn't loaded."""
    markers = [
        ("unit", "marks tests as unit tests"),
        ("cli", "marks tests as CLI tests"),
        ("config", "marks tests as configuration tests"),
        ("property", "marks tests as property-based tests"),
    ]
    for name, desc in markers:
        config.addinivalue_line("markers", f"{name}: {desc}")


class DictTranslator(BaseTranslator):
    """Translator backed by in-memory tables, for tests."""

    def __init__(
        self,
        tables: dict[str, dict[str, str]],
        locale: str = DEFAULT_LOCALE,
    ) -> None:
        self.tables = tables
        self._locale = locale

    @property
    def locale(self) -> str:
        return self._locale

    def set_locale(self, locale: str) -> None:
        self._locale = locale

    def key_exists(self, key: str) -> bool:
        return key in self.tables.get(DEFAULT_LOCALE, {})

    def translate_no_context(self, key: str) -> str:
        for name in (self._locale, DEFAULT_LOCALE):
            table = self.tables.get(name, {})
            if key in table:
                return table[key]
        msg = f"missing {key}"
        raise KeyError(msg)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Keep user config files and locale variables out of the tests."""
    for name in (
        "CONFIGPANEL_SCHEMA_TEMPLATE",
        "CONFIGPANEL_SETTINGS_PATH",
        "CONFIGPANEL_LOCALES_DIR",
        "CONFIGPANEL_LOCALE",
        "CONFIGPANEL_RELEASE",
        "CONFIGPANEL_LOG_LEVEL",
        "CONFIGPANEL_LOG_FILE",
        "CONFIGPANEL_STRUCTURED_LOGGING",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def write_file(tmp_path):
    """Write a text file under tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def schema_file(write_file) -> Path:
    """Sample global settings schema."""
    return write_file("config_global.toml", SAMPLE_SCHEMA)


@pytest.fixture
def settings_file(write_file) -> Path:
    """Sample saved settings."""
    return write_file("settings.yml", SAMPLE_SETTINGS)


@pytest.fixture
def locales_dir(write_file) -> Path:
    """Locale directory with English and French labels."""
    en_file = write_file("locales/en.json", json.dumps(SAMPLE_LABELS))
    write_file(
        "locales/fr.json",
        json.dumps({"global_settings_setting_ssh_port": "Port SSH"}),
    )
    return en_file.parent


@pytest.fixture
def engine_config_file(write_file, schema_file, settings_file, locales_dir) -> Path:
    """Engine configuration pointing at the sample documents."""
    schema_template = str(schema_file.parent / "config_{entity}.toml")
    return write_file(
        "configpanel.toml",
        toml.dumps(
            {
                "paths": {
                    "schema_template": schema_template,
                    "settings_path": str(settings_file),
                    "locales_dir": str(locales_dir),
                },
                "i18n": {"locale": "en"},
                "platform": {"release": "bookworm"},
            }
        ),
    )


@pytest.fixture
def mocked_translator() -> MockedTranslator:
    return MockedTranslator()


@pytest.fixture
def make_translator():
    """Build a DictTranslator from locale tables."""
    return DictTranslator


@pytest.fixture
def translator() -> DictTranslator:
    """Translator knowing a few labels of the sample schema."""
    return DictTranslator(
        {
            "en": dict(SAMPLE_LABELS),
            "fr": {
                "global_settings_setting_ssh_port": "Port SSH",
            },
        }
    )


@pytest.fixture
def make_panel(schema_file, settings_file, translator):
    """Build a ConfigPanel over the sample documents."""

    def _make(
        release: ReleaseVariant = ReleaseVariant.BOOKWORM,
        schema: Path | None = None,
        settings: Path | None = None,
        panel_translator: Any = None,
    ) -> ConfigPanel:
        return ConfigPanel(
            "settings",
            schema or schema_file,
            settings or settings_file,
            panel_translator or translator,
            release,
        )

    return _make
