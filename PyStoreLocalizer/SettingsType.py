from __future__ import annotations
from collections.abc import Mapping

from PyStoreLocalizer.Helpers.Settings import (
    GetBoolSetting,
    GetFloatSetting,
    GetIntSetting,
    GetStrSetting,
    GetStringListSetting,
    SettingType,
)

class SettingsType(dict[str, SettingType]):
    """
    Settings dictionary with type-safe getters. None values are never stored by update,
    so an unset option cannot mask a default.
    """
    def __init__(self, settings : Mapping[str, SettingType]|None = None):
        super().__init__(settings or {})

    def get_bool(self, key : str, default : bool|None = False) -> bool:
        return GetBoolSetting(self, key, default)

    def get_int(self, key : str, default : int|None = None) -> int|None:
        return GetIntSetting(self, key, default)

    def get_float(self, key : str, default : float|None = None) -> float|None:
        return GetFloatSetting(self, key, default)

    def get_str(self, key : str, default : str|None = None) -> str|None:
        return GetStrSetting(self, key, default)

    def get_str_list(self, key : str, default : list[str]|None = None) -> list[str]:
        return GetStringListSetting(self, key, default)

    def update(self, other : Mapping[str, SettingType] = (), /, **kwds : SettingType) -> None:
        values = dict(other)
        values.update(kwds)
        super().update({ key : value for key, value in values.items() if value is not None })
