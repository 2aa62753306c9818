import json
import logging
import time
from collections.abc import Mapping
from typing import Any
import httpx
import jwt

from PyStoreLocalizer.Helpers.Parse import ParseStoreErrors
from PyStoreLocalizer.Helpers.Settings import GetIntSetting, GetStrSetting
from PyStoreLocalizer.LocalizerError import ConfigurationError, StoreError
from PyStoreLocalizer.MetadataStore import MetadataStore, RemoteLocalization, StoreResource, StoreResult, StoreStatus
from PyStoreLocalizer.SettingsType import SettingType, SettingsType

TOKEN_LIFETIME = 20 * 60

EDITABLE_STATES = ['PREPARE_FOR_SUBMISSION', 'DEVELOPER_REJECTED', 'REJECTED', 'IN_REVIEW', 'WAITING_FOR_REVIEW']

class AppStoreConnect(MetadataStore):
    """
    Reads and writes app metadata localizations through the App Store Connect API
    """
    def __init__(self, settings : Mapping[str, SettingType], transport : httpx.BaseTransport|None = None):
        self.settings = SettingsType(settings)

        missing = [ key for key in ('key_id', 'issuer_id', 'private_key') if not GetStrSetting(self.settings, key) ]
        if missing:
            raise ConfigurationError(f"Missing App Store Connect credentials: {', '.join(missing)}")

        self.client = httpx.Client(base_url=self.base_url, timeout=self.timeout, transport=transport)

    @property
    def base_url(self) -> str:
        return GetStrSetting(self.settings, 'store_address') or 'https://api.appstoreconnect.apple.com'

    @property
    def key_id(self) -> str:
        return GetStrSetting(self.settings, 'key_id') or ''

    @property
    def issuer_id(self) -> str:
        return GetStrSetting(self.settings, 'issuer_id') or ''

    @property
    def private_key(self) -> str:
        # Keys pasted into .env files often have escaped newlines
        return (GetStrSetting(self.settings, 'private_key') or '').replace('\\n', '\n')

    @property
    def platform(self) -> str:
        return GetStrSetting(self.settings, 'platform') or 'IOS'

    @property
    def timeout(self) -> int:
        return GetIntSetting(self.settings, 'timeout') or 60

    def GenerateToken(self) -> str:
        """
        Create a short-lived ES256 token for the API
        """
        now = int(time.time())
        payload = {
            'iss': self.issuer_id,
            'iat': now,
            'exp': now + TOKEN_LIFETIME,
            'aud': 'appstoreconnect-v1'
        }
        headers = {
            'alg': 'ES256',
            'kid': self.key_id,
            'typ': 'JWT'
        }
        return jwt.encode(payload, self.private_key, algorithm='ES256', headers=headers)

    def GetApp(self, app_id : str) -> StoreResource:
        response = self._get(f"/v1/apps/{app_id}")
        return StoreResource.FromResource(response.get('data') or {})

    def GetAppInfo(self, app_id : str) -> StoreResource|None:
        response = self._get(f"/v1/apps/{app_id}/appInfos")
        app_infos = response.get('data') or []
        return StoreResource.FromResource(app_infos[0]) if app_infos else None

    def GetEditableVersion(self, app_id : str) -> StoreResource|None:
        """
        Find the version being prepared for submission, or failing that the most recent version that can still be edited
        """
        response = self._get(f"/v1/apps/{app_id}/appStoreVersions", {
            'filter[platform]': self.platform,
            'filter[appStoreState]': 'PREPARE_FOR_SUBMISSION',
            'limit': 200
        })

        versions = response.get('data') or []
        version = next((v for v in versions if _app_store_state(v) == 'PREPARE_FOR_SUBMISSION'), None)

        if version is None:
            response = self._get(f"/v1/apps/{app_id}/appStoreVersions", {
                'filter[platform]': self.platform,
                'limit': 10
            })
            versions = response.get('data') or []
            version = next((v for v in versions if _app_store_state(v) in EDITABLE_STATES), None)

        return StoreResource.FromResource(version) if version else None

    def GetAppInfoLocalizations(self, app_info_id : str) -> list[RemoteLocalization]:
        response = self._get(f"/v1/appInfos/{app_info_id}/appInfoLocalizations", { 'limit': 200 })
        return [ RemoteLocalization.FromResource(resource) for resource in response.get('data') or [] ]

    def GetVersionLocalizations(self, version_id : str) -> list[RemoteLocalization]:
        response = self._get(f"/v1/appStoreVersions/{version_id}/appStoreVersionLocalizations", { 'limit': 200 })
        return [ RemoteLocalization.FromResource(resource) for resource in response.get('data') or [] ]

    def UpdateAppInfoLocalization(self, localization_id : str, attributes : dict[str, Any]) -> StoreResult:
        body = {
            'data': {
                'type': 'appInfoLocalizations',
                'id': localization_id,
                'attributes': attributes
            }
        }
        return self._send('PATCH', f"/v1/appInfoLocalizations/{localization_id}", body)

    def UpdateVersionLocalization(self, localization_id : str, attributes : dict[str, Any]) -> StoreResult:
        body = {
            'data': {
                'type': 'appStoreVersionLocalizations',
                'id': localization_id,
                'attributes': attributes
            }
        }
        return self._send('PATCH', f"/v1/appStoreVersionLocalizations/{localization_id}", body)

    def CreateVersionLocalization(self, version_id : str, locale_code : str, attributes : dict[str, Any]) -> StoreResult:
        body = {
            'data': {
                'type': 'appStoreVersionLocalizations',
                'attributes': { **attributes, 'locale': locale_code },
                'relationships': {
                    'appStoreVersion': {
                        'data': {
                            'type': 'appStoreVersions',
                            'id': version_id
                        }
                    }
                }
            }
        }
        return self._send('POST', "/v1/appStoreVersionLocalizations", body)

    def Close(self) -> None:
        self.client.close()

    def _request(self, method : str, path : str, params : dict[str, Any]|None = None, body : dict[str, Any]|None = None) -> httpx.Response:
        headers = {
            'Authorization': f"Bearer {self.GenerateToken()}",
            'Content-Type': 'application/json'
        }

        logging.debug(f"API {method} {path}")
        if params:
            logging.debug(f"Query: {params}")
        if body:
            logging.debug(f"Body: {json.dumps(body, ensure_ascii=False)}")

        try:
            return self.client.request(method, path, params=params, json=body, headers=headers)

        except httpx.HTTPError as e:
            raise StoreError(f"Error communicating with App Store Connect: {e}", error=e)

    def _get(self, path : str, params : dict[str, Any]|None = None) -> dict[str, Any]:
        response = self._request('GET', path, params)
        if response.is_error:
            raise StoreError(_error_message(response), status_code=response.status_code)

        return _parse_json(response)

    def _send(self, method : str, path : str, body : dict[str, Any]) -> StoreResult:
        try:
            response = self._request(method, path, body=body)

        except StoreError as e:
            logging.debug(f"{method} {path} failed: {e}")
            return StoreResult(StoreStatus.ERROR, None, str(e))

        if response.is_error:
            message = _error_message(response)
            logging.debug(message)
            return StoreResult.FromStatusCode(response.status_code, message)

        data = _parse_json(response) if response.content else {}
        return StoreResult.FromStatusCode(response.status_code, data=data)

def _app_store_state(version : dict[str, Any]) -> str|None:
    return (version.get('attributes') or {}).get('appStoreState')

def _parse_json(response : httpx.Response) -> dict[str, Any]:
    try:
        content = response.json()
    except ValueError as e:
        raise StoreError(f"Unable to parse App Store Connect response: {e}", status_code=response.status_code)

    return content if isinstance(content, dict) else {}

def _error_message(response : httpx.Response) -> str:
    message = f"API Error: {response.status_code} - {response.reason_phrase}"

    try:
        content = response.json()
    except ValueError:
        content = None

    details = ParseStoreErrors(content) if isinstance(content, dict) else None
    if details:
        message += f" - {details}"

    logging.debug(f"Response body: {response.text}")
    return message
