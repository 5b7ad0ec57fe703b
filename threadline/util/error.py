"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Raised when settings contradict each other."""

    def __init__(self, setting: str, reason: str):
        self.setting = setting
        super().__init__(f"Invalid setting {setting}: {reason}")
