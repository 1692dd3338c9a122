"""Tests for the layered Configuration store."""
from __future__ import annotations

import json
from pathlib import Path

import pytest


class TestValidationOnLoad:
    """The effective view is validated when the configuration is built."""

    def test_every_invalid_key_is_reported(self, make_config) -> None:
        from lazybones.core.exceptions import MultipleInvalidSettingsError

        with pytest.raises(MultipleInvalidSettingsError) as exc:
            make_config(
                base={"cache": {"dir": "/tmp/cache"}},
                override={
                    "options": {"verbose": "yes"},
                    "bogus": {"setting": 1},
                    "templates": {"mappings": {"good": "http://x.org/t.zip", "bad": "nope"}},
                },
            )
        assert sorted(exc.value.setting_names) == [
            "bogus.setting",
            "options.verbose",
            "templates.mappings.bad",
        ]

    def test_none_values_are_accepted(self, make_config) -> None:
        config = make_config(base={"git": {"name": None}})
        assert config.get_setting("git.name") is None

    def test_valid_layers_load(self, make_config) -> None:
        config = make_config(
            base={"templateRepositories": ["a/b"]},
            override={"templates": {"mappings": {"mine": "file:///tmp/mine.zip"}}},
        )
        assert config.get_setting("templateRepositories") == ["a/b"]


class TestReads:
    def test_layer_precedence(self, make_config) -> None:
        """override > managed > base."""
        config = make_config(
            base={"cache": {"dir": "base"}, "git": {"name": "base", "email": "b@x"}},
            managed={"cache": {"dir": "managed"}, "git": {"name": "managed"}},
            override={"cache": {"dir": "override"}},
        )
        assert config.get_setting("cache.dir") == "override"
        assert config.get_setting("git.name") == "managed"
        assert config.get_setting("git.email") == "b@x"

    def test_absent_setting_is_none(self, make_config) -> None:
        assert make_config().get_setting("git.name") is None

    def test_unknown_setting_raises(self, make_config) -> None:
        from lazybones.core.exceptions import UnknownSettingError

        with pytest.raises(UnknownSettingError):
            make_config().get_setting("does.not.exist")

    def test_sub_settings(self, make_config) -> None:
        config = make_config(base={"options": {"verbose": True, "quiet": False}})
        assert config.get_sub_settings("options") == {"verbose": True, "quiet": False}
        assert config.get_sub_settings("templates.mappings") == {}

    def test_sub_settings_of_complete_setting(self, make_config) -> None:
        from lazybones.core.exceptions import InvalidSettingError

        with pytest.raises(InvalidSettingError, match="has no sub-settings"):
            make_config().get_sub_settings("cache.dir")

    def test_sub_settings_of_unknown_root(self, make_config) -> None:
        from lazybones.core.exceptions import UnknownSettingError

        with pytest.raises(UnknownSettingError):
            make_config().get_sub_settings("nothing")

    def test_all_settings_are_flattened(self, make_config) -> None:
        config = make_config(base={"cache": {"dir": "/c"}, "templateRepositories": ["x/y"]})
        assert config.get_all_settings() == {"cache.dir": "/c", "templateRepositories": ["x/y"]}


class TestWrites:
    """Writes land in the managed layer and are visible immediately."""

    def test_put_converts_strings(self, make_config) -> None:
        config = make_config()
        assert config.put_setting("options.verbose", "true") is True
        assert config.get_setting("options.verbose") is True
        assert config.layers.managed == {"options": {"verbose": True}}

    def test_put_list_from_text(self, make_config) -> None:
        config = make_config()
        config.put_setting("templateRepositories", "a/b, c/d")
        assert config.get_setting("templateRepositories") == ["a/b", "c/d"]

    def test_put_invalid_value_raises(self, make_config) -> None:
        from lazybones.core.exceptions import InvalidSettingError

        config = make_config()
        with pytest.raises(InvalidSettingError):
            config.put_setting("templates.mappings.x", "not a url")
        with pytest.raises(InvalidSettingError):
            config.put_setting("options.verbose", 12)

    def test_put_unknown_setting_raises(self, make_config) -> None:
        from lazybones.core.exceptions import UnknownSettingError

        with pytest.raises(UnknownSettingError):
            make_config().put_setting("nope", "1")

    def test_put_shadowed_by_override_reports_false(self, make_config) -> None:
        """The value is stored but the user config file still wins on later runs."""
        config = make_config(override={"cache": {"dir": "/user"}})
        assert config.put_setting("cache.dir", "/managed") is False
        assert config.get_setting("cache.dir") == "/managed"
        assert config.layers.override == {"cache": {"dir": "/user"}}

    def test_append_to_list(self, make_config) -> None:
        config = make_config(base={"templateRepositories": ["a/b"]})
        config.append_to_setting("templateRepositories", "c/d")
        assert config.get_setting("templateRepositories") == ["a/b", "c/d"]

    def test_append_to_missing_list_starts_new_list(self, make_config) -> None:
        config = make_config()
        config.append_to_setting("templateRepositories", "c/d")
        assert config.get_setting("templateRepositories") == ["c/d"]

    def test_append_to_non_list(self, make_config) -> None:
        from lazybones.core.exceptions import InvalidSettingError

        with pytest.raises(InvalidSettingError, match="is not a list"):
            make_config().append_to_setting("cache.dir", "x")

    def test_clear_restores_default(self, make_config) -> None:
        config = make_config(base={"cache": {"dir": "/default"}})
        config.put_setting("cache.dir", "/custom")
        config.clear_setting("cache.dir")
        assert config.get_setting("cache.dir") == "/default"
        assert config.layers.managed == {}

    def test_clear_prunes_only_empty_ancestors(self, make_config) -> None:
        config = make_config(managed={"git": {"name": "n", "email": "e@x"}})
        config.clear_setting("git.name")
        assert config.layers.managed == {"git": {"email": "e@x"}}

    def test_clear_reveals_lower_precedence_values(self, make_config) -> None:
        """Only the managed value goes; the user file value applies again."""
        config = make_config(override={"cache": {"dir": "/user"}})
        config.put_setting("cache.dir", "/managed")
        config.clear_setting("cache.dir")
        assert config.get_setting("cache.dir") == "/user"
        assert config.layers.managed == {}

    def test_layers_are_not_mutated_in_place(self, make_config) -> None:
        config = make_config()
        before = config.layers
        config.put_setting("git.name", "Someone")
        assert before.managed == {}
        assert config.layers is not before


class TestWildcardNames:
    """Mapping and system property names are not limited to word characters."""

    def test_put_hyphenated_mapping(self, make_config) -> None:
        config = make_config()
        assert config.put_setting("templates.mappings.my-template", "http://example.org/my.zip")
        assert config.get_setting("templates.mappings.my-template") == "http://example.org/my.zip"

    def test_hyphenated_mapping_in_user_file(self, make_config) -> None:
        config = make_config(
            override={"templates": {"mappings": {"spring-boot": "http://example.org/sb.zip"}}}
        )
        assert config.get_sub_settings("templates.mappings") == {
            "spring-boot": "http://example.org/sb.zip"
        }

    def test_nested_system_property(self, make_config) -> None:
        config = make_config(override={"systemProp": {"http": {"proxyHost": "proxy"}}})
        assert config.get_setting("systemProp.http.proxyHost") == "proxy"
        assert config.get_sub_settings("systemProp") == {"http": {"proxyHost": "proxy"}}

    def test_nested_mapping_name_is_still_unknown(self, make_config) -> None:
        from lazybones.core.exceptions import MultipleInvalidSettingsError

        with pytest.raises(MultipleInvalidSettingsError):
            make_config(override={"templates": {"mappings": {"a": {"b": "http://x.org/t.zip"}}}})


class TestStoreSettings:
    def test_store_writes_managed_layer_only(self, make_config, tmp_path: Path) -> None:
        config = make_config(
            base={"cache": {"dir": "/default"}},
            override={"git": {"email": "user@x"}},
        )
        config.put_setting("git.name", "Dev")
        assert config.store_settings() == []

        stored = json.loads((tmp_path / "managed-config.json").read_text(encoding="utf-8"))
        assert stored == {"git": {"name": "Dev"}}

    def test_store_reports_shadowed_keys(self, make_config) -> None:
        config = make_config(override={"git": {"name": "User"}})
        config.put_setting("git.name", "Managed")
        assert config.store_settings() == ["git.name"]


class TestFormatting:
    def test_format_setting_value(self, make_config) -> None:
        from lazybones.core.config import format_setting_value

        config = make_config()
        assert format_setting_value(config, "templateRepositories", ["a/b", "c/d"]) == "a/b, c/d"
        assert format_setting_value(config, "options.quiet", False) == "false"


class TestProperties:
    """Properties that hold for every recognised setting."""

    @pytest.mark.parametrize(
        "operation",
        [
            lambda c: c.get_setting("no.such"),
            lambda c: c.put_setting("no.such", "x"),
            lambda c: c.append_to_setting("no.such", "x"),
            lambda c: c.clear_setting("no.such"),
        ],
    )
    def test_unknown_names_fail_for_every_operation(self, make_config, operation) -> None:
        from lazybones.core.exceptions import UnknownSettingError

        with pytest.raises(UnknownSettingError):
            operation(make_config())

    @pytest.mark.parametrize(
        "name, text",
        [
            ("options.verbose", "true"),
            ("templateRepositories", "a/b, c/d"),
            ("repositories.apiUrl", "http://api.example/v1"),
            ("git.name", "Jane"),
        ],
    )
    def test_format_parse_round_trip(self, make_config, name, text) -> None:
        from lazybones.core.config import format_setting_value

        direct = make_config()
        direct.put_setting(name, text)

        converter = direct.schema.converter_for(name)
        again = make_config()
        again.put_setting(name, format_setting_value(again, name, converter.parse(text)))
        assert again.get_setting(name) == direct.get_setting(name)

    def test_failed_write_leaves_settings_untouched(self, make_config) -> None:
        from lazybones.core.exceptions import InvalidSettingError

        config = make_config(base={"templateRepositories": ["a/b"]})
        config.put_setting("repositories.apiUrl", "http://good.example")
        before = config.get_all_settings()

        with pytest.raises(InvalidSettingError):
            config.put_setting("repositories.apiUrl", "bad url")
        with pytest.raises(InvalidSettingError):
            config.append_to_setting("options.verbose", "x")
        assert config.get_all_settings() == before
