"""Custom exceptions for AutoSettings."""


class AutoSettingsError(Exception):
    """Base exception for AutoSettings errors."""

    pass


class SettingParseError(AutoSettingsError):
    """Raised by value transforms when a raw value cannot be converted."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class InvalidSettingError(AutoSettingsError):
    """Raised when a stored value cannot be converted to the requested type."""

    def __init__(self, key: str, value: str, reason: str):
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f'Failed to parse setting "{key}", the value is "{value}", but {reason}')


class MissingSettingError(AutoSettingsError):
    """Raised when a required key is absent and no default was given."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f'Required key "{key}" is missing')


class SourceLoadError(AutoSettingsError):
    """Raised when a config file or resource cannot be read."""

    pass
