"""Helpers shared by the config commands that change settings."""
from __future__ import annotations

import logging

from lazybones.core.config import Configuration

logger = logging.getLogger(__name__)

OVERRIDDEN_MESSAGE = (
    "The user configuration file overrides this setting, so the new value won't take effect"
)


def store_and_warn(config: Configuration, name: str, takes_effect: bool = True) -> None:
    """Persist the managed settings, warning if ``name`` is shadowed by the user config."""
    shadowed = config.store_settings()
    if not takes_effect or name in shadowed:
        logger.warning(OVERRIDDEN_MESSAGE)


__all__ = ["OVERRIDDEN_MESSAGE", "store_and_warn"]
