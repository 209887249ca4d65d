"""Tests for configpanel.cli.output."""

from __future__ import annotations

import json

import pytest

from configpanel.cli.output import format_result

pytestmark = [pytest.mark.cli]


class TestFormatResult:
    """Test terminal serialization of render results."""

    def test_scalar_yaml_is_bare(self):
        assert format_result(2222) == "2222"
        assert format_result(None) == "null"
        assert format_result(True) == "true"

    def test_string_passthrough(self):
        assert format_result("relay.example.org") == "relay.example.org"

    def test_mapping_keeps_order(self):
        result = {"b": 1, "a": {"ask": "Port", "value": "22"}}

        assert format_result(result) == "b: 1\na:\n  ask: Port\n  value: '22'"

    def test_unicode(self):
        assert format_result({"name": "Sécurité"}) == "name: Sécurité"

    def test_json(self):
        result = {"version": 1, "panels": []}

        assert json.loads(format_result(result, as_json=True)) == result

    def test_json_string(self):
        assert format_result("x", as_json=True) == '"x"'
