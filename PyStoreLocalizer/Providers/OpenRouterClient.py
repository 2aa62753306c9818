import logging
from typing import Any
from collections.abc import Mapping
import httpx

from PyStoreLocalizer.Helpers.Parse import ParseErrorMessageFromText
from PyStoreLocalizer.Helpers.Settings import GetIntSetting, GetStrSetting
from PyStoreLocalizer.LocalizerError import ConfigurationError, TranslationResponseError
from PyStoreLocalizer.SettingsType import SettingType
from PyStoreLocalizer.TranslationClient import TranslationClient

class OpenRouterClient(TranslationClient):
    """
    Handles chat communication with OpenRouter to request translations
    """
    def __init__(self, settings : Mapping[str, SettingType], transport : httpx.BaseTransport|None = None):
        super().__init__(settings)
        self.settings.setdefault('server_address', 'https://openrouter.ai/api/')
        self.settings.setdefault('endpoint', '/v1/chat/completions')

        if not self.api_key:
            raise ConfigurationError("Missing translation API key (OPENROUTER_API_KEY)")

        self.headers : dict[str, str] = {
            'Content-Type': 'application/json',
            'Authorization': f"Bearer {self.api_key}",
            'HTTP-Referer': 'https://github.com/store-localizer/store-localizer',
            'X-Title': 'Store Localizer'
        }

        self.client = httpx.Client(base_url=self.server_address or '', follow_redirects=True, timeout=self.timeout, headers=self.headers, transport=transport)

        logging.info(f"Translating with server at {self.server_address}{self.endpoint}")
        if self.model:
            logging.info(f"Using model: {self.model}")

    @property
    def server_address(self) -> str|None:
        return GetStrSetting(self.settings, 'server_address')

    @property
    def endpoint(self) -> str:
        return GetStrSetting(self.settings, 'endpoint') or '/v1/chat/completions'

    @property
    def api_key(self) -> str|None:
        return GetStrSetting(self.settings, 'api_key')

    @property
    def timeout(self) -> int:
        return GetIntSetting(self.settings, 'timeout') or 300

    def Close(self) -> None:
        self.client.close()

    def _request_completion(self, prompt : str) -> str:
        """
        Request a single chat completion and extract the response text
        """
        request_body = self._generate_request_body(prompt)

        try:
            result : httpx.Response = self.client.post(self.endpoint, json=request_body)

        except httpx.ConnectError as e:
            raise TranslationResponseError(f"Failed to connect to server at {self.server_address}{self.endpoint}: {e}", response=None)

        except httpx.TimeoutException as e:
            raise TranslationResponseError(f"Request to server timed out: {e}", response=None)

        except httpx.NetworkError as e:
            raise TranslationResponseError(f"Network error communicating with server: {e}", response=None)

        if result.is_error:
            parsed_message = ParseErrorMessageFromText(result.text)
            summary_text = parsed_message if parsed_message else result.text
            if result.is_client_error:
                raise TranslationResponseError(f"Client error: {result.status_code} {summary_text}", response=result)
            else:
                raise TranslationResponseError(f"Server error: {result.status_code} {summary_text}", response=result)

        logging.debug(f"Response:\n{result.text}")

        try:
            content : dict[str, Any] = result.json()
        except ValueError as e:
            raise TranslationResponseError(f"Unable to parse response: {e}", response=result)

        choices = content.get('choices')
        if not choices:
            raise TranslationResponseError("No choices returned in the response", response=result)

        message = choices[0].get('message') or {}
        text = message.get('content')

        if not text or not str(text).strip():
            raise TranslationResponseError("No text returned in the response", response=result)

        return str(text)

    def _generate_request_body(self, prompt : str) -> dict[str, Any]:
        request_body = {
            'messages': [ { 'role': 'user', 'content': prompt } ],
            'temperature': self.temperature,
            'stream': False
        }

        if self.model:
            request_body['model'] = self.model

        return request_body
