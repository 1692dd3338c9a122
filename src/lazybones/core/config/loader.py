"""Build the ``Configuration`` for one invocation.

Load order (lowest to highest precedence):

1. Bundled defaults: ``lazybones.data/config/defaults.yaml``
2. Managed settings: ``managed-config.json`` next to the user config file
3. User config file: ``~/.lazybones/config.yaml`` (or ``LAZYBONES_CONFIG_FILE``)
4. Environment variables: ``LAZYBONES_<segment>__<segment>=value``
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from lazybones.core.exceptions import ConfigFileError
from lazybones.data import load_default_config
from lazybones.core.utils.io import read_yaml
from lazybones.core.utils.merge import deep_merge, flatten, get_path, set_path

from .layers import ConfigLayers
from .manager import Configuration, load_managed_settings
from .schema import DEFAULT_SCHEMA, SettingSchema

logger = logging.getLogger(__name__)

ENV_PREFIX = "LAZYBONES_"
ENV_SEPARATOR = "__"
CONFIG_FILE_ENV = "LAZYBONES_CONFIG_FILE"
MANAGED_CONFIG_FILENAME = "managed-config.json"
SYSTEM_PROPERTY_ROOT = "systemProp"


def init_configuration(
    *,
    config_file: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    schema: SettingSchema = DEFAULT_SCHEMA,
    defaults: Optional[Mapping[str, Any]] = None,
) -> Configuration:
    """Load every configuration layer and return a validated ``Configuration``.

    Args:
        config_file: User config file. Defaults to ``LAZYBONES_CONFIG_FILE`` or
            the ``config.file`` default setting.
        environ: Environment to read overrides from (default: ``os.environ``).
        schema: Recognised settings.
        defaults: Base layer (default: the bundled defaults).

    Raises:
        MultipleInvalidSettingsError: If any effective setting is unknown or invalid.
        ConfigFileError: If the user config file is not a YAML mapping.
    """
    env = os.environ if environ is None else environ
    base = dict(defaults) if defaults is not None else load_default_config()

    user_config_path = resolve_config_file(base, env, config_file)
    managed_config_path = user_config_path.parent / MANAGED_CONFIG_FILENAME

    user_settings = load_user_config(user_config_path)
    env_settings = load_env_overrides(env, schema)
    managed_settings = load_managed_settings(managed_config_path)

    logger.debug(
        "Loading configuration (user=%s, managed=%s, env keys=%d)",
        user_config_path,
        managed_config_path,
        len(flatten(env_settings)),
    )

    layers = ConfigLayers(
        base=base,
        managed=managed_settings,
        override=deep_merge(user_settings, env_settings),
    )
    apply_system_properties(layers.effective())
    return Configuration(layers, managed_config_path, schema=schema)


def resolve_config_file(
    defaults: Mapping[str, Any],
    environ: Mapping[str, str],
    config_file: Optional[Path] = None,
) -> Path:
    """Work out where the user config file lives."""
    if config_file is not None:
        return Path(config_file).expanduser()
    from_env = environ.get(CONFIG_FILE_ENV)
    if from_env:
        return Path(from_env).expanduser()
    configured = get_path(defaults, "config.file") or "~/.lazybones/config.yaml"
    return Path(str(configured)).expanduser()


def load_user_config(path: Path) -> Dict[str, Any]:
    """Read the user config file. A missing file is an empty layer."""
    if not path.exists():
        return {}
    try:
        data = read_yaml(path, default={}, raise_on_error=True)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigFileError(
            f"Unable to read the config file {path}: {exc}",
            context={"path": str(path)},
        ) from exc
    if not isinstance(data, dict):
        raise ConfigFileError(
            f"The config file {path} must contain a mapping of settings",
            context={"path": str(path)},
        )
    return data


def load_env_overrides(
    environ: Mapping[str, str],
    schema: SettingSchema = DEFAULT_SCHEMA,
) -> Dict[str, Any]:
    """Collect ``LAZYBONES_*`` environment overrides as a nested mapping.

    ``__`` separates path segments: ``LAZYBONES_cache__dir`` sets ``cache.dir``.
    Segments are matched case-insensitively against known setting names.
    Unknown names and values that fail conversion are logged and skipped.
    """
    overrides: Dict[str, Any] = {}
    for key in sorted(environ):
        if not key.startswith(ENV_PREFIX) or key == CONFIG_FILE_ENV:
            continue
        raw = key[len(ENV_PREFIX):]
        segments = raw.split(ENV_SEPARATOR)
        if not raw or any(seg == "" for seg in segments):
            logger.warning("Ignoring malformed environment override %s", key)
            continue

        name = _canonical_name(".".join(segments), schema)
        if name is None:
            logger.warning("Ignoring environment override %s: unknown setting", key)
            continue

        try:
            value = schema.converter_for(name).parse(environ[key])
        except ValueError:
            logger.warning(
                "Ignoring environment override %s: invalid value %r", key, environ[key]
            )
            continue
        overrides = set_path(overrides, name, value)
    return overrides


def _canonical_name(name: str, schema: SettingSchema) -> Optional[str]:
    if schema.is_known(name):
        return name
    lowered = name.lower()
    for candidate in schema.names():
        if candidate.lower() == lowered:
            return candidate
    # Wildcard entries keep the user's spelling below the prefix.
    for pattern, _type in schema.items():
        if not pattern.is_wildcard:
            continue
        if lowered.startswith(pattern.prefix.lower() + "."):
            candidate = pattern.prefix + name[len(pattern.prefix):]
            if schema.is_known(candidate):
                return candidate
    return None


def apply_system_properties(settings: Mapping[str, Any]) -> Dict[str, str]:
    """Export the ``systemProp`` settings to the process environment.

    Runs on the merged layers before they are validated.

    ``systemProp.http_proxy = "http://proxy:3128"`` sets ``http_proxy`` so that
    urllib picks the proxy up for template downloads.

    Returns:
        The variables that were exported.
    """
    props = settings.get(SYSTEM_PROPERTY_ROOT)
    if not isinstance(props, Mapping):
        return {}
    exported: Dict[str, str] = {}
    for key, value in flatten(props).items():
        if value is None:
            continue
        exported[key] = str(value)
        os.environ[key] = str(value)
        logger.debug("Exported %s to the environment", key)
    return exported


__all__ = [
    "ENV_PREFIX",
    "CONFIG_FILE_ENV",
    "MANAGED_CONFIG_FILENAME",
    "init_configuration",
    "resolve_config_file",
    "load_user_config",
    "load_env_overrides",
    "apply_system_properties",
]
