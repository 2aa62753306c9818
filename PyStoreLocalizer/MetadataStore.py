from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

class StoreStatus(Enum):
    SUCCESS = 'success'
    CONFLICT = 'conflict'
    ERROR = 'error'

@dataclass
class StoreResult:
    """
    Outcome of an update or create request, so that callers can branch on a conflict
    without inspecting error messages
    """
    status : StoreStatus
    status_code : int|None = None
    message : str|None = None
    data : dict[str, Any]|None = None

    @property
    def succeeded(self) -> bool:
        return self.status == StoreStatus.SUCCESS

    @property
    def conflict(self) -> bool:
        return self.status == StoreStatus.CONFLICT

    @classmethod
    def FromStatusCode(cls, status_code : int, message : str|None = None, data : dict[str, Any]|None = None) -> StoreResult:
        if 200 <= status_code < 300:
            return cls(StoreStatus.SUCCESS, status_code, message, data)
        if status_code == 409:
            return cls(StoreStatus.CONFLICT, status_code, message, data)
        return cls(StoreStatus.ERROR, status_code, message, data)

@dataclass
class RemoteLocalization:
    id : str
    locale_code : str
    attributes : dict[str, Any] = field(default_factory=dict)

    @classmethod
    def FromResource(cls, resource : dict[str, Any]) -> RemoteLocalization:
        attributes = dict(resource.get('attributes') or {})
        return cls(str(resource.get('id')), str(attributes.get('locale')), attributes)

@dataclass
class StoreResource:
    """ A parent record in the store, e.g. an app, an app info or a version """
    id : str
    attributes : dict[str, Any] = field(default_factory=dict)

    @classmethod
    def FromResource(cls, resource : dict[str, Any]) -> StoreResource:
        return cls(str(resource.get('id')), dict(resource.get('attributes') or {}))

def GroupByLocale(localizations : list[RemoteLocalization]) -> dict[str, RemoteLocalization]:
    """
    Index localizations by locale code, keeping the first if a code appears more than once
    """
    grouped : dict[str, RemoteLocalization] = {}
    for localization in localizations:
        grouped.setdefault(localization.locale_code, localization)
    return grouped

class MetadataStore:
    """
    Interface to the remote store that holds localized metadata.

    Fetch operations raise StoreError on failure. Update and create return a StoreResult,
    where a conflict is distinguishable from other errors.
    """
    def GetApp(self, app_id : str) -> StoreResource:
        raise NotImplementedError

    def GetAppInfo(self, app_id : str) -> StoreResource|None:
        raise NotImplementedError

    def GetEditableVersion(self, app_id : str) -> StoreResource|None:
        raise NotImplementedError

    def GetAppInfoLocalizations(self, app_info_id : str) -> list[RemoteLocalization]:
        raise NotImplementedError

    def GetVersionLocalizations(self, version_id : str) -> list[RemoteLocalization]:
        raise NotImplementedError

    def UpdateAppInfoLocalization(self, localization_id : str, attributes : dict[str, Any]) -> StoreResult:
        raise NotImplementedError

    def UpdateVersionLocalization(self, localization_id : str, attributes : dict[str, Any]) -> StoreResult:
        raise NotImplementedError

    def CreateVersionLocalization(self, version_id : str, locale_code : str, attributes : dict[str, Any]) -> StoreResult:
        raise NotImplementedError

    def Close(self) -> None:
        pass
