"""Tests for SettingSchema lookups and wildcard patterns."""
from __future__ import annotations

import pytest


class TestSettingPattern:
    def test_wildcard_matches_one_segment(self) -> None:
        """A wildcard matches exactly one extra non-empty segment."""
        from lazybones.core.config import SettingPattern

        pattern = SettingPattern.parse("templates.mappings.*")
        assert pattern.is_wildcard
        assert pattern.matches("templates.mappings.foo")
        assert pattern.matches("templates.mappings.foo_2")
        assert not pattern.matches("templates.mappings.foo.bar")
        assert pattern.matches("templates.mappings.my-template")
        assert not pattern.matches("templates.mappings.")
        assert not pattern.matches("templates.mappings")

    def test_exact_pattern(self) -> None:
        from lazybones.core.config import SettingPattern

        pattern = SettingPattern.parse("cache.dir")
        assert not pattern.is_wildcard
        assert pattern.matches("cache.dir")
        assert not pattern.matches("cache.dir.x")

    def test_deep_wildcard_matches_nested_names(self) -> None:
        from lazybones.core.config import SettingPattern

        pattern = SettingPattern.parse("systemProp.**")
        assert pattern.is_wildcard
        assert pattern.matches("systemProp.http_proxy")
        assert pattern.matches("systemProp.http.proxyHost")
        assert not pattern.matches("systemProp")
        assert not pattern.matches("systemProp..x")
        assert not pattern.matches("systemPropx.y")


class TestSettingSchema:
    """Lookups against the default schema."""

    def test_exact_and_wildcard_lookup(self) -> None:
        from lazybones.core.config import DEFAULT_SCHEMA, ScalarType, list_of

        assert DEFAULT_SCHEMA.setting_type("cache.dir") is ScalarType.STRING
        assert DEFAULT_SCHEMA.setting_type("templateRepositories") == list_of(ScalarType.STRING)
        assert DEFAULT_SCHEMA.setting_type("templates.mappings.mine") is ScalarType.URL
        assert DEFAULT_SCHEMA.setting_type("nope") is None

    def test_exact_entry_beats_wildcard(self) -> None:
        from lazybones.core.config import ScalarType, SettingSchema

        schema = SettingSchema({"a.*": ScalarType.STRING, "a.b": ScalarType.INTEGER})
        assert schema.setting_type("a.b") is ScalarType.INTEGER
        assert schema.setting_type("a.c") is ScalarType.STRING

    def test_prefix_and_completeness(self) -> None:
        from lazybones.core.config import DEFAULT_SCHEMA

        assert DEFAULT_SCHEMA.matches_prefix("options")
        assert DEFAULT_SCHEMA.matches_prefix("templates.mappings")
        assert not DEFAULT_SCHEMA.matches_prefix("cache.dir")
        assert DEFAULT_SCHEMA.is_complete("cache.dir")
        assert not DEFAULT_SCHEMA.is_complete("templates.mappings.x")

    def test_converter_for_unknown_name(self) -> None:
        from lazybones.core.config import DEFAULT_SCHEMA
        from lazybones.core.exceptions import UnknownSettingError

        with pytest.raises(UnknownSettingError) as exc:
            DEFAULT_SCHEMA.converter_for("missing.setting")
        assert str(exc.value) == "Unrecognized setting: 'missing.setting'"

    def test_validate_value_uses_type(self) -> None:
        from lazybones.core.config import DEFAULT_SCHEMA

        assert DEFAULT_SCHEMA.validate_value("options.verbose", True)
        assert not DEFAULT_SCHEMA.validate_value("options.verbose", "yes")
        assert not DEFAULT_SCHEMA.validate_value("templates.mappings.x", "not a url")
        assert not DEFAULT_SCHEMA.validate_value("unknown", "x")

    def test_schema_rejects_unconvertible_types(self) -> None:
        from lazybones.core.config import ConverterRegistry, ScalarType, SettingSchema
        from lazybones.core.exceptions import NoConverterFoundError

        with pytest.raises(NoConverterFoundError):
            SettingSchema({"a": ScalarType.STRING}, converters=ConverterRegistry({}))
