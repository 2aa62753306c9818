from collections.abc import Callable, Mapping
import logging
import time

from PyStoreLocalizer.Helpers.Settings import GetFloatSetting, GetIntSetting
from PyStoreLocalizer.Helpers.Text import CleanTranslation
from PyStoreLocalizer.Instructions import BuildAggressiveShortenPrompt, BuildShortenPrompt, BuildTranslationPrompt
from PyStoreLocalizer.LocalizerError import TranslationError, TranslationResponseError
from PyStoreLocalizer.SettingsType import SettingType
from PyStoreLocalizer.TranslationClient import TranslationClient

class FieldTranslator:
    """
    Translates individual metadata fields, retrying failed requests with a linear backoff
    and asking the backend to rewrite translations that exceed a field's length limit.
    """
    def __init__(self, client : TranslationClient, settings : Mapping[str, SettingType]|None = None, sleep : Callable[[float], None] = time.sleep):
        settings = settings or {}
        self.client : TranslationClient = client
        self.max_attempts : int = GetIntSetting(settings, 'max_attempts', 3) or 3
        self.backoff_time : float = GetFloatSetting(settings, 'backoff_time', 2.0) or 0.0
        self.max_shorten_attempts : int = GetIntSetting(settings, 'max_shorten_attempts', 3) or 3
        self.sleep = sleep

    def Translate(self, text : str|None, target_language : str, context_tag : str) -> str|None:
        """
        Translate a single field. Empty text is never sent and returns None.

        Raises:
            TranslationError: if every attempt failed
        """
        if not text or not text.strip():
            return None

        prompt = BuildTranslationPrompt(text, target_language, context_tag)
        last_error : Exception|None = None

        for attempt in range(1, self.max_attempts + 1):
            if attempt > 1:
                logging.info(f"  Attempt {attempt}/{self.max_attempts}...")

            try:
                translation = CleanTranslation(self.client.RequestCompletion(prompt))
                if not translation:
                    raise TranslationResponseError("Translation failed - no response from API")

                return translation

            except Exception as e:
                last_error = e
                logging.debug(f"Translation of {context_tag} to {target_language} failed: {e}")

            if attempt < self.max_attempts:
                wait_time = attempt * self.backoff_time
                logging.warning(f"Retrying in {wait_time} seconds...")
                self.sleep(wait_time)

        raise TranslationError(str(context_tag), target_language, len(text), str(last_error), error=last_error)

    def Shorten(self, text : str, target_language : str, context_tag : str, max_length : int) -> str:
        """
        Ask the backend to rewrite a translation to fit within max_length characters,
        escalating to a more insistent request if the first rewrite is still too long.

        Raises:
            TranslationError: if no rewrite fit within the limit
        """
        prompt = BuildShortenPrompt(text, target_language, context_tag, max_length)
        last_problem : str = ''

        for attempt in range(1, self.max_shorten_attempts + 1):
            try:
                shortened = CleanTranslation(self.client.RequestCompletion(prompt))
                if not shortened:
                    raise TranslationResponseError("No response from API")

                if len(shortened) <= max_length:
                    return shortened

                last_problem = f"Still too long ({len(shortened)}/{max_length} chars)"
                logging.info(f"  Shortened {context_tag} is {last_problem.lower()}")
                prompt = BuildAggressiveShortenPrompt(shortened, target_language, max_length)

            except Exception as e:
                last_problem = str(e)
                logging.debug(f"Shorten attempt {attempt} for {context_tag} failed: {e}")

        raise TranslationError(str(context_tag), target_language, len(text), f"Could not shorten to {max_length} chars: {last_problem}")

    def TranslateField(self, text : str|None, target_language : str, context_tag : str, max_length : int|None = None) -> str|None:
        """
        Translate a field and bring it within max_length if the translation overflows
        """
        translation = self.Translate(text, target_language, context_tag)

        if translation and max_length and len(translation) > max_length:
            logging.info(f"  Translated {context_tag} is too long ({len(translation)}/{max_length} chars), shortening...")
            translation = self.Shorten(translation, target_language, context_tag, max_length)

        return translation
