"""
Type-safe settings retrieval and coercion functions.

Values read from the environment or the command line arrive as strings, so each
getter accepts the native type or a string representation of it and raises
SettingsError when neither applies.
"""
from collections.abc import Mapping
from typing import Any, TypeAlias

import regex

SettingType : TypeAlias = str | int | float | bool | list[str] | None

Settings : TypeAlias = Mapping[str, SettingType]

list_separator = regex.compile(r'[;,]')

class SettingsError(Exception):
    """Raised when a setting cannot be coerced to the expected type."""
    pass

def _cannot_convert(key : str, value : Any, target : str) -> SettingsError:
    return SettingsError(f"Cannot convert setting '{key}' of type {type(value).__name__} with value {repr(value)} to {target}")

def GetBoolSetting(settings : Settings, key : str, default : bool|None = False) -> bool:
    """
    Accepts true/yes/1 and false/no/0 (or an empty string) in any case.

    Raises:
        SettingsError: If the setting cannot be converted to bool
    """
    value = settings.get(key, default)
    if value is None:
        return False

    if isinstance(value, bool):
        return value

    if isinstance(value, str):
        lower_val = value.strip().lower()
        if lower_val in ('true', 'yes', '1'):
            return True
        if lower_val in ('false', 'no', '0', ''):
            return False

    raise _cannot_convert(key, value, 'bool')

def GetIntSetting(settings : Settings, key : str, default : int|None = None) -> int|None:
    """
    Raises:
        SettingsError: If the setting cannot be converted to int
    """
    value = settings.get(key, default)
    if value is None:
        return None

    # bool is a subclass of int, but a flag is never a count
    if isinstance(value, bool):
        raise _cannot_convert(key, value, 'int')

    if isinstance(value, (int, float)):
        return int(value)

    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass

    raise _cannot_convert(key, value, 'int')

def GetFloatSetting(settings : Settings, key : str, default : float|None = None) -> float|None:
    """
    Raises:
        SettingsError: If the setting cannot be converted to float
    """
    value = settings.get(key, default)
    if value is None:
        return None

    if isinstance(value, bool):
        raise _cannot_convert(key, value, 'float')

    if isinstance(value, (int, float)):
        return float(value)

    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            pass

    raise _cannot_convert(key, value, 'float')

def GetStrSetting(settings : Settings, key : str, default : str|None = None) -> str|None:
    value = settings.get(key, default)
    if value is None:
        return None

    if isinstance(value, list):
        return ', '.join(str(v) for v in value)

    return str(value)

def GetStringListSetting(settings : Settings, key : str, default : list[str]|None = None) -> list[str]:
    """
    Retrieve a list of strings. A string value is split on commas or semicolons.

    Raises:
        SettingsError: If the setting cannot be converted to a list
    """
    value = settings.get(key, default)
    if value is None:
        return []

    if isinstance(value, str):
        items = list_separator.split(value)
    elif isinstance(value, (list, tuple, set)):
        items = list(value)
    else:
        raise _cannot_convert(key, value, 'list')

    return [ str(item).strip() for item in items if item is not None and str(item).strip() ]
