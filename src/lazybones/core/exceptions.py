from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping


class LazybonesError(Exception):
    """Base exception for Lazybones."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}


class SettingError(LazybonesError):
    """Base class for configuration setting errors."""


class UnknownSettingError(SettingError, KeyError):
    """Raised when a setting name is not registered in the setting schema."""

    def __init__(self, setting_name: str, message: str | None = None) -> None:
        msg = message or f"Unrecognized setting: '{setting_name}'"
        SettingError.__init__(self, msg, context={"setting": setting_name})
        self.setting_name = setting_name

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return str(self.args[0]) if self.args else ""


class InvalidSettingError(SettingError, ValueError):
    """Raised when a value does not fit a setting's type, or the operation does not fit the setting."""

    def __init__(self, setting_name: str, value: Any = None, message: str | None = None) -> None:
        msg = message or f"The value [{value}] is not valid for the setting '{setting_name}'"
        SettingError.__init__(
            self,
            msg,
            context={"setting": setting_name, "value": None if value is None else str(value)},
        )
        self.setting_name = setting_name
        self.value = value


class MultipleInvalidSettingsError(SettingError):
    """Raised once, at configuration load, listing every invalid setting."""

    def __init__(self, setting_names: Iterable[str], message: str | None = None) -> None:
        names = list(setting_names)
        msg = message or (
            "The following configuration settings are invalid: " + ", ".join(names)
        )
        super().__init__(msg, context={"settings": names})
        self.setting_names = names


class ConfigFileError(SettingError):
    """Raised when the user config file cannot be read or is not a mapping."""


class NoConverterFoundError(SettingError):
    """Raised when a setting type has no registered converter (a schema bug)."""

    def __init__(self, setting_type: Any) -> None:
        super().__init__(
            f"No converter could be found for values of type {setting_type}",
            context={"type": str(setting_type)},
        )
        self.setting_type = setting_type


class PostInstallScriptError(LazybonesError):
    """Raised when the post-install step of a template fails."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(str(cause), context={"cause": cause.__class__.__name__})
        self.cause = cause


class ScmError(LazybonesError, RuntimeError):
    """Raised when a source control command fails."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        LazybonesError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


__all__ = [
    "LazybonesError",
    "SettingError",
    "UnknownSettingError",
    "InvalidSettingError",
    "MultipleInvalidSettingsError",
    "NoConverterFoundError",
    "ConfigFileError",
    "PostInstallScriptError",
    "ScmError",
]
