"""Tests for configpanel.panel.loader."""

from __future__ import annotations

import pytest

from configpanel.exceptions import (
    MissingOptionTypeError,
    MissingVersionError,
    ReservedKeywordError,
    SchemaLoadError,
    SchemaParseError,
    SchemaReadError,
    UnsupportedVersionError,
)
from configpanel.panel.loader import build_container, check_version, load_container

pytestmark = [pytest.mark.unit]


class TestVersionGate:
    """Test the version check."""

    @pytest.mark.parametrize("version", ["1.0", 1.0])
    def test_supported(self, version):
        """Test string and float 1.0 are both accepted."""
        assert check_version({"version": version}) == "1.0"

    @pytest.mark.parametrize("version", ["2.0", 2.0, "1", 1, "v1.0"])
    def test_unsupported(self, version):
        """Test any other version is rejected with the offending value."""
        with pytest.raises(UnsupportedVersionError) as exc_info:
            check_version({"version": version})

        assert exc_info.value.version == version

    def test_missing(self):
        """Test a schema without version is rejected."""
        with pytest.raises(MissingVersionError):
            check_version({})

    def test_version_checked_before_panels(self, write_file):
        """Test an unsupported version wins over broken panels."""
        path = write_file(
            "bad.toml",
            'version = "2.0"\n[p.s.type]\ndefault = 1\n',
        )

        with pytest.raises(UnsupportedVersionError):
            load_container(path)


class TestLoadContainer:
    """Test loading schema documents."""

    def test_sample_structure(self, schema_file):
        """Test panels, sections and options keep document order."""
        container = load_container(schema_file)

        assert container.version == "1.0"
        assert container.i18n_key == "global_settings_setting"
        assert list(container.panels) == ["security", "email", "misc"]
        assert list(container.panels["security"].sections) == [
            "webadmin",
            "root_access",
            "ssh",
        ]
        ssh_port = container.panels["security"].sections["ssh"].options["ssh_port"]
        assert ssh_port.option_type == "number"
        assert ssh_port.default == 22
        assert ssh_port.is_optional

    def test_option_fields(self, schema_file):
        """Test unmodeled attributes land in extra_fields."""
        container = load_container(schema_file)
        section = container.panels["security"].sections["webadmin"]
        allowlist = section.options["webadmin_allowlist"]

        assert allowlist.extra_fields == {"visible": "webadmin_allowlist_enabled"}
        assert "type" not in allowlist.extra_fields
        assert "default" not in allowlist.extra_fields

    def test_optional_false(self, schema_file):
        """Test explicit optional flags are kept."""
        container = load_container(schema_file)
        root_access = container.panels["security"].sections["root_access"]

        assert root_access.options["root_password"].is_optional is False

    def test_panel_name_defaults_to_id(self, schema_file):
        """Test nameless panels are labeled after their capitalized id."""
        container = load_container(schema_file)

        assert container.panels["misc"].name == "Misc"

    def test_locale_table_name(self, schema_file):
        """Test inline tables are kept as names, not sections."""
        container = load_container(schema_file)
        misc = container.panels["misc"]

        assert list(misc.sections) == ["portal", "network"]
        assert misc.sections["portal"].name == {"en": "Portal", "fr": "Portail"}

    def test_no_i18n(self):
        """Test the i18n key is optional."""
        container = build_container({"version": "1.0", "p": {"s": {}}})

        assert container.i18n_key is None
        assert list(container.panels["p"].sections) == ["s"]

    def test_reserved_keyword(self, write_file):
        """Test reserved option ids are load errors."""
        path = write_file(
            "reserved.toml",
            'version = "1.0"\n[p.s.changed]\ntype = "string"\n',
        )

        with pytest.raises(ReservedKeywordError) as exc_info:
            load_container(path)

        assert exc_info.value.option_id == "changed"

    def test_default_is_reserved(self):
        """Test an option cannot be named after the default attribute."""
        with pytest.raises(ReservedKeywordError):
            build_container(
                {"version": "1.0", "p": {"s": {"default": {"type": "string"}}}}
            )

    @pytest.mark.parametrize("option_id", ["help", "visible", "services", "optional"])
    def test_option_named_like_section_property(self, option_id):
        """Test a typed table is an option even under a property name."""
        container = build_container(
            {
                "version": "1.0",
                "p": {
                    "s": {
                        "name": "Section",
                        option_id: {"type": "string", "ask": "Help?", "default": "x"},
                    }
                },
            }
        )
        section = container.panels["p"].sections["s"]

        assert list(section.options) == [option_id]
        assert section.options[option_id].default == "x"
        assert section.name == "Section"

    def test_locale_table_help_stays_property(self):
        """Test an untyped help table is a property of the section."""
        container = build_container(
            {"version": "1.0", "p": {"s": {"help": {"en": "Help"}, "o": {"type": "alert"}}}}
        )
        section = container.panels["p"].sections["s"]

        assert list(section.options) == ["o"]
        assert section.extra_fields["help"] == {"en": "Help"}

    def test_missing_type(self, write_file):
        """Test options without type are load errors."""
        path = write_file("notype.toml", 'version = "1.0"\n[p.s.o]\ndefault = 1\n')

        with pytest.raises(MissingOptionTypeError):
            load_container(path)

    def test_unreadable(self, tmp_path):
        """Test a missing schema file is a read error."""
        with pytest.raises(SchemaReadError):
            load_container(tmp_path / "missing.toml")

    def test_malformed(self, write_file):
        """Test invalid TOML is a parse error."""
        path = write_file("broken.toml", 'version = "1.0"\n[p.s\n')

        with pytest.raises(SchemaParseError):
            load_container(path)

    def test_load_errors_share_base(self, write_file):
        """Test all schema failures are SchemaLoadError."""
        path = write_file("bad.toml", 'version = "3"\n')

        with pytest.raises(SchemaLoadError):
            load_container(path)

    def test_non_string_i18n(self):
        """Test a non-string i18n key is a parse error."""
        with pytest.raises(SchemaParseError):
            build_container({"version": "1.0", "i18n": 3})
