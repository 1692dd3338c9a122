"""
Lazybones configuration store.

``Configuration`` owns the layered settings for one invocation. All reads go
through the effective view (see ``ConfigLayers``); all writes go to the
managed layer, which ``store_settings`` persists as JSON.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping

from lazybones.core.exceptions import (
    InvalidSettingError,
    MultipleInvalidSettingsError,
    UnknownSettingError,
)
from lazybones.core.utils.io import read_json, write_json_atomic
from lazybones.core.utils.merge import flatten, get_path, has_path

from .layers import ConfigLayers
from .schema import DEFAULT_SCHEMA, SettingSchema
from .types import ListType

logger = logging.getLogger(__name__)


class Configuration:
    """Validated, layered settings.

    Args:
        layers: The layer snapshots to start from.
        managed_config_path: Where ``store_settings`` writes the managed layer.
        schema: Recognised settings and their types.

    Raises:
        MultipleInvalidSettingsError: If any leaf of the effective view is
            unknown to the schema or has a value of the wrong type. Every
            failing key is named.
    """

    def __init__(
        self,
        layers: ConfigLayers,
        managed_config_path: Path,
        schema: SettingSchema = DEFAULT_SCHEMA,
    ) -> None:
        self.schema = schema
        self.managed_config_path = Path(managed_config_path)
        self._layers = layers
        self._settings = layers.effective()

        invalid = self._find_invalid_settings(self._settings)
        if invalid:
            raise MultipleInvalidSettingsError(invalid)

    @property
    def layers(self) -> ConfigLayers:
        return self._layers

    @property
    def valid_settings(self) -> SettingSchema:
        """The schema of every setting this configuration accepts."""
        return self.schema

    # ---------------------------------------------------------------- reads

    def get_setting(self, name: str) -> Any:
        """Return the effective value of ``name``.

        Returns None when the setting, or any mapping above it, is absent.

        Raises:
            UnknownSettingError: If ``name`` is not a recognised setting.
        """
        self._require_known(name)
        return get_path(self._settings, name)

    def get_sub_settings(self, root_name: str) -> Dict[str, Any]:
        """Return the mapping of settings below ``root_name``.

        Raises:
            InvalidSettingError: If ``root_name`` is itself a complete setting.
            UnknownSettingError: If no setting lives below ``root_name``.
        """
        if self.schema.is_complete(root_name):
            raise InvalidSettingError(
                root_name,
                message=f"'{root_name}' has no sub-settings",
            )
        if not self.schema.matches_prefix(root_name):
            raise UnknownSettingError(root_name)
        value = get_path(self._settings, root_name)
        return dict(value) if isinstance(value, Mapping) else {}

    def get_all_settings(self) -> Dict[str, Any]:
        """Return every effective setting keyed by its dotted name."""
        return flatten(self._settings)

    def get_override_setting(self, name: str) -> Any:
        return get_path(self._layers.override, name)

    # --------------------------------------------------------------- writes

    def put_setting(self, name: str, value: Any) -> bool:
        """Set ``name`` to ``value`` in the managed layer.

        String values are converted through the setting's converter; other
        values must already have the right type.

        Returns:
            True if the new value will take effect on later runs, False if
            the user config file (or environment) overrides it.

        Raises:
            UnknownSettingError: If ``name`` is not a recognised setting.
            InvalidSettingError: If ``value`` cannot be converted or has the wrong type.
        """
        converted = self._convert(name, value)
        self._layers = self._layers.with_value(name, converted)
        self._settings = self._layers.effective()
        return not has_path(self._layers.override, name)

    def append_to_setting(self, name: str, value: Any) -> bool:
        """Append ``value`` to the list setting ``name``.

        Raises:
            UnknownSettingError: If ``name`` is not a recognised setting.
            InvalidSettingError: If the setting is not a list or ``value``
                does not fit its element type.
        """
        setting_type = self._require_known(name)
        if not isinstance(setting_type, ListType):
            raise InvalidSettingError(
                name,
                value,
                f"You can only append values to list settings, and '{name}' is not a list",
            )

        component = self.schema.converters.converter_for(setting_type.component)
        element = _convert_with(component, name, value)

        current = get_path(self._settings, name)
        if current is None:
            new_list: List[Any] = []
        elif isinstance(current, (list, tuple)):
            new_list = list(current)
        else:
            new_list = [current]
        new_list.append(element)

        self._layers = self._layers.with_value(name, new_list)
        self._settings = self._layers.effective()
        return not has_path(self._layers.override, name)

    def clear_setting(self, name: str) -> None:
        """Remove ``name`` from the managed layer so the default value applies again.

        Raises:
            UnknownSettingError: If ``name`` is not a recognised setting.
        """
        self._require_known(name)
        self._layers = self._layers.without_value(name)
        self._settings = self._layers.effective()

    def store_settings(self) -> List[str]:
        """Persist the managed layer to the managed config file.

        Returns:
            Dotted names that are set in both the managed layer and the
            override layer, so the managed value will not take effect.
        """
        write_json_atomic(self.managed_config_path, dict(self._layers.managed))
        logger.debug("Stored managed settings in %s", self.managed_config_path)
        return self._layers.shadowed_keys()

    # -------------------------------------------------------------- helpers

    def _require_known(self, name: str):
        setting_type = self.schema.setting_type(name)
        if setting_type is None:
            raise UnknownSettingError(name)
        return setting_type

    def _convert(self, name: str, value: Any) -> Any:
        self._require_known(name)
        converter = self.schema.converter_for(name)
        return _convert_with(converter, name, value)

    def _find_invalid_settings(self, settings: Mapping[str, Any]) -> List[str]:
        invalid: List[str] = []
        for key, value in flatten(settings).items():
            if not self.schema.is_known(key):
                logger.debug("Unknown setting in configuration: %s", key)
                invalid.append(key)
            elif value is not None and not self.schema.validate_value(key, value):
                logger.debug("Invalid value for %s: %r", key, value)
                invalid.append(key)
        return invalid


def _convert_with(converter, name: str, value: Any) -> Any:
    if isinstance(value, str):
        try:
            return converter.parse(value)
        except ValueError as exc:
            raise InvalidSettingError(name, value) from exc
    if not converter.validate(value):
        raise InvalidSettingError(name, value)
    return value


def format_setting_value(config: Configuration, name: str, value: Any) -> str:
    """Render ``value`` for display using the converter of ``name``."""
    setting_type = config.schema.setting_type(name)
    if setting_type is None:
        return "" if value is None else str(value)
    return config.schema.converters.converter_for(setting_type).format(value)


def load_managed_settings(path: Path) -> Dict[str, Any]:
    """Read the managed layer, returning an empty mapping when the file is absent."""
    data = read_json(path, default={})
    if not isinstance(data, dict):
        logger.warning("Ignoring managed config %s: expected a JSON object", path)
        return {}
    return data


__all__ = [
    "Configuration",
    "format_setting_value",
    "load_managed_settings",
]
