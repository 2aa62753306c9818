from copy import deepcopy
import os
import tempfile
import unittest
from typing import Any

import regex

from PyStoreLocalizer.LocalizerError import StoreError
from PyStoreLocalizer.MetadataStore import MetadataStore, RemoteLocalization, StoreResource, StoreResult, StoreStatus
from PyStoreLocalizer.Options import Options
from PyStoreLocalizer.SettingsType import SettingsType
from PyStoreLocalizer.TranslationClient import TranslationClient

language_pattern = regex.compile(r'^Translate to (.+?)(?: \(|\.)')
source_text_pattern = regex.compile(r'\nText to translate:\n(.*)$', regex.DOTALL)

class DummyTranslationClient(TranslationClient):
    """
    Translation client that answers from a script of responses, then falls back to tagging the source text with the language.
    A scripted response that is an exception is raised instead of returned.
    """
    def __init__(self, responses : list[Any]|None = None, settings : dict[str, Any]|None = None):
        super().__init__(settings or { 'model': 'dummy-model' })
        self.responses : list[Any] = list(responses or [])
        self.prompts : list[str] = []

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    def _request_completion(self, prompt : str) -> str:
        self.prompts.append(prompt)

        if self.responses:
            response = self.responses.pop(0)
            if isinstance(response, Exception):
                raise response
            return response

        return self.DefaultTranslation(prompt)

    @staticmethod
    def DefaultTranslation(prompt : str) -> str:
        language_match = language_pattern.match(prompt)
        text_match = source_text_pattern.search(prompt)
        if not language_match or not text_match:
            return "Short"

        return f"{language_match.group(1)}: {text_match.group(1)}"

class DummyStore(MetadataStore):
    """
    In-memory store that records every call made to it
    """
    def __init__(self, app_localizations : list[RemoteLocalization]|None = None, version_localizations : list[RemoteLocalization]|None = None,
                 version : StoreResource|None = None, app_info : StoreResource|None = None):
        self.app = StoreResource('app-1', { 'bundleId': 'com.example.app' })
        self.app_info : StoreResource|None = app_info or StoreResource('appinfo-1')
        self.version : StoreResource|None = version or StoreResource('version-1', { 'versionString': '1.2.0', 'appStoreState': 'PREPARE_FOR_SUBMISSION' })
        self.app_localizations : list[RemoteLocalization] = list(app_localizations or [])
        self.version_localizations : list[RemoteLocalization] = list(version_localizations or [])
        self.calls : list[tuple[str, ...]] = []
        self.update_results : dict[str, StoreResult] = {}
        self.create_results : dict[str, StoreResult] = {}
        self.fetch_errors : dict[str, int] = {}

    def GetCalls(self, method : str) -> list[tuple[str, ...]]:
        return [ call for call in self.calls if call[0] == method ]

    def GetApp(self, app_id : str) -> StoreResource:
        self.calls.append(('GetApp', app_id))
        return self.app

    def GetAppInfo(self, app_id : str) -> StoreResource|None:
        self.calls.append(('GetAppInfo', app_id))
        return self.app_info

    def GetEditableVersion(self, app_id : str) -> StoreResource|None:
        self.calls.append(('GetEditableVersion', app_id))
        return self.version

    def GetAppInfoLocalizations(self, app_info_id : str) -> list[RemoteLocalization]:
        self.calls.append(('GetAppInfoLocalizations', app_info_id))
        self._raise_fetch_error('GetAppInfoLocalizations')
        return deepcopy(self.app_localizations)

    def GetVersionLocalizations(self, version_id : str) -> list[RemoteLocalization]:
        self.calls.append(('GetVersionLocalizations', version_id))
        self._raise_fetch_error('GetVersionLocalizations')
        return deepcopy(self.version_localizations)

    def UpdateAppInfoLocalization(self, localization_id : str, attributes : dict[str, Any]) -> StoreResult:
        self.calls.append(('UpdateAppInfoLocalization', localization_id))
        return self._update(self.app_localizations, localization_id, attributes)

    def UpdateVersionLocalization(self, localization_id : str, attributes : dict[str, Any]) -> StoreResult:
        self.calls.append(('UpdateVersionLocalization', localization_id))
        return self._update(self.version_localizations, localization_id, attributes)

    def CreateVersionLocalization(self, version_id : str, locale_code : str, attributes : dict[str, Any]) -> StoreResult:
        self.calls.append(('CreateVersionLocalization', version_id, locale_code))

        result = self.create_results.get(locale_code)
        if result is not None:
            return result

        localization = RemoteLocalization(f"version-{locale_code}", locale_code, { **attributes, 'locale': locale_code })
        self.version_localizations.append(localization)
        return StoreResult(StoreStatus.SUCCESS, 201)

    def _update(self, localizations : list[RemoteLocalization], localization_id : str, attributes : dict[str, Any]) -> StoreResult:
        result = self.update_results.get(localization_id)
        if result is not None:
            return result

        for localization in localizations:
            if localization.id == localization_id:
                localization.attributes.update(attributes)
                return StoreResult(StoreStatus.SUCCESS, 200)

        return StoreResult(StoreStatus.ERROR, 404, f"API Error: 404 - {localization_id} not found")

    def _raise_fetch_error(self, method : str) -> None:
        remaining = self.fetch_errors.get(method, 0)
        if remaining:
            self.fetch_errors[method] = remaining - 1
            raise StoreError(f"API Error: 500 - {method} failed", status_code=500)

def CreateLocalization(id : str, locale_code : str, **attributes : Any) -> RemoteLocalization:
    return RemoteLocalization(id, locale_code, { 'locale': locale_code, **attributes })

class LocalizerTestCase(unittest.TestCase):
    """
    Base test case providing options that write the cache and reports to a temporary directory
    """
    def __init__(self, methodName: str = "runTest", custom_options : dict|None = None) -> None:
        super().__init__(methodName)
        self.custom_options = custom_options or {}

    def setUp(self) -> None:
        temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(temp_dir.cleanup)
        self.temp_dir = temp_dir.name

        settings = SettingsType({
            'app_id': '123456',
            'source_locale': 'en-US',
            'cache_file': os.path.join(self.temp_dir, 'cache.json'),
            'report_dir': self.temp_dir,
            'max_attempts': 3,
            'backoff_time': 2.0,
            'api_key': 'test-key',
            'key_id': 'KEYID',
            'issuer_id': 'ISSUER',
            'private_key': 'PRIVATE KEY',
        })
        settings.update(self.custom_options)

        self.options = Options(settings)
        self.sleeps : list[float] = []

    def record_sleep(self, seconds : float) -> None:
        self.sleeps.append(seconds)
