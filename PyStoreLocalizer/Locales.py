from __future__ import annotations
from collections.abc import Iterable
from dataclasses import dataclass
import logging

# Store locale codes mapped to the language names used in translation instructions.
# Some codes are bare languages because that is what the store returns (e.g. 'it', not 'it-IT').
ALL_LOCALES : dict[str, str] = {
    'de-DE': 'German',
    'fr-FR': 'French',
    'es-ES': 'Spanish',
    'es-MX': 'Spanish (Mexico)',
    'ja': 'Japanese',
    'zh-Hans': 'Chinese Simplified',
    'zh-Hant': 'Chinese Traditional',
    'it': 'Italian',
    'nl-NL': 'Dutch',
    'pt-PT': 'Portuguese',
    'pt-BR': 'Portuguese (Brazil)',
    'ko': 'Korean',
    'ru': 'Russian',
    'sv': 'Swedish',
    'da': 'Danish',
    'fi': 'Finnish',
    'no': 'Norwegian',
    'pl': 'Polish',
    'tr': 'Turkish',
    'ar-SA': 'Arabic',
    'th': 'Thai',
    'id': 'Indonesian',
    'vi': 'Vietnamese',
    'ms': 'Malay',
    'hi': 'Hindi',
    'he': 'Hebrew',
    'el': 'Greek',
    'ro': 'Romanian',
    'hu': 'Hungarian',
    'cs': 'Czech',
    'sk': 'Slovak',
    'uk': 'Ukrainian',
    'hr': 'Croatian',
    'ca': 'Catalan',
}

DEFAULT_LOCALES : list[str] = ['de-DE', 'fr-FR', 'es-ES', 'ja', 'zh-Hans', 'it', 'nl-NL', 'pt-PT', 'ko']

# Used when auto-detection finds nothing
AUTO_DETECT_DEFAULT_LOCALES : list[str] = [ code for code in DEFAULT_LOCALES if code != 'pt-PT' ]

# Used when no mode is selected
FALLBACK_LOCALES : list[str] = [ code for code in DEFAULT_LOCALES if code not in ('pt-PT', 'ko') ]

@dataclass(frozen=True)
class LocaleTarget:
    code : str
    display_name : str

    def __str__(self) -> str:
        return f"{self.display_name} ({self.code})"

def GetLanguageName(locale_code : str) -> str|None:
    return ALL_LOCALES.get(locale_code)

def FindLocale(token : str) -> tuple[str, str]|None:
    """
    Match a language name or locale code against the locale table, ignoring case
    """
    token = token.strip().lower()
    if not token:
        return None

    for code, name in ALL_LOCALES.items():
        if token == code.lower() or token == name.lower():
            return code, name

    return None

class LocaleResolver:
    """
    Decides which locales a run should maintain, from an explicit list, from the
    localizations that already exist in the store, or from a fixed default set.
    """
    def __init__(self, source_locale : str = 'en-US'):
        self.source_locale = source_locale

    def ResolveExplicit(self, languages : Iterable[str]) -> dict[str, str]:
        """
        Resolve user-supplied language names or codes, dropping any that are not recognised
        """
        locales : dict[str, str] = {}
        for language in languages:
            match = FindLocale(language)
            if not match:
                logging.warning(f"Unknown language '{language}' - skipping")
                continue

            code, name = match
            if code not in locales:
                locales[code] = name

        logging.info(f"Using specified languages: {', '.join(locales.values())}")
        return locales

    def ResolveDetected(self, locale_codes : Iterable[str]) -> dict[str, str]:
        """
        Resolve target locales from the codes of localizations that exist in the store.
        Falls back to the default set if nothing usable was detected.
        """
        detected : dict[str, str] = {}
        for code in locale_codes:
            if code == self.source_locale or code in detected:
                continue

            name = GetLanguageName(code)
            if name:
                detected[code] = name
            else:
                logging.warning(f"Found unknown locale: {code}")

        if not detected:
            logging.info("No localizations detected. Using default set.")
            return self.ResolveDefaults(AUTO_DETECT_DEFAULT_LOCALES)

        logging.info(f"Detected languages: {', '.join(detected.values())}")
        return detected

    def ResolveDefaults(self, locale_codes : list[str]|None = None) -> dict[str, str]:
        codes = locale_codes if locale_codes is not None else FALLBACK_LOCALES
        return { code : ALL_LOCALES[code] for code in codes }

    def Resolve(self, languages : list[str]|None = None, auto_detect : bool = False, detect_locales = None) -> dict[str, str]:
        """
        Produce an ordered mapping of locale code to language name for the run.

        `detect_locales` is a callable returning the locale codes of the existing
        version localizations, and is only invoked in auto-detect mode.
        """
        if languages:
            locales = self.ResolveExplicit(languages)
        elif auto_detect:
            logging.info("Auto-detecting available localizations...")
            codes = detect_locales() if detect_locales else []
            locales = self.ResolveDetected(codes)
        else:
            locales = self.ResolveDefaults()

        # The source localization is never a target
        if self.source_locale in locales:
            logging.warning(f"Skipping {locales.pop(self.source_locale)} ({self.source_locale}), it is the source language")

        return locales
