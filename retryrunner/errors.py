from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False)
class RetrySettingsError(Exception):
    code: str
    message: str

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


SETTINGS_UNREADABLE = "SETTINGS_UNREADABLE"
SETTINGS_NOT_MAPPING = "SETTINGS_NOT_MAPPING"
SETTINGS_INVALID = "SETTINGS_INVALID"
