import logging
import time

from PyStoreLocalizer.Helpers.Settings import GetFloatSetting, GetStrSetting
from PyStoreLocalizer.SettingsType import SettingsType, SettingType
from collections.abc import Mapping

class TranslationClient:
    """
    Handles communication with the translation backend.
    A client makes exactly one request per call, retries are handled by the caller.
    """
    def __init__(self, settings : SettingsType|Mapping[str, SettingType]):
        self.settings: SettingsType = SettingsType(settings)

    @property
    def model(self) -> str|None:
        return GetStrSetting(self.settings, 'model')

    @property
    def temperature(self) -> float:
        return GetFloatSetting(self.settings, 'temperature') or 0.0

    @property
    def rate_limit(self) -> float|None:
        return GetFloatSetting(self.settings, 'rate_limit')

    def RequestCompletion(self, prompt : str) -> str:
        """
        Send a prompt to the backend and return the text of its response
        """
        start_time = time.monotonic()

        logging.debug(f"Prompt:\n{prompt}")

        text = self._request_completion(prompt)

        if text:
            logging.debug(f"Response:\n{text}")

        # If a rate limit is specified ensure a minimum duration for each request
        rate_limit = self.rate_limit
        if rate_limit and rate_limit > 0.0:
            minimum_duration = 60.0 / rate_limit

            elapsed_time = time.monotonic() - start_time
            if elapsed_time < minimum_duration:
                sleep_time = minimum_duration - elapsed_time
                logging.debug(f"Sleeping for {sleep_time:.2f} seconds to respect rate limit")
                time.sleep(sleep_time)

        return text

    def Close(self) -> None:
        pass

    def _request_completion(self, prompt : str) -> str:
        """
        Make a request to the backend
        """
        _ = prompt
        raise NotImplementedError
