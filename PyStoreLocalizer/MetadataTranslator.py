from __future__ import annotations
import logging
from typing import Any

from PyStoreLocalizer.ContentSnapshot import APP_INFO_FIELDS, APP_INFO_PASSTHROUGH_FIELDS, VERSION_FIELDS, VERSION_PASSTHROUGH_FIELDS, ContentSnapshot
from PyStoreLocalizer.FieldTranslator import FieldTranslator
from PyStoreLocalizer.Helpers.Text import Truncate
from PyStoreLocalizer.Instructions import FIELD_CONTEXTS, FIELD_LIMITS
from PyStoreLocalizer.Locales import LocaleTarget
from PyStoreLocalizer.LocalizerError import TranslationError

class ScopeTranslation:
    """
    The translated attributes for one metadata scope of one locale,
    along with the fields that could not be translated.
    """
    def __init__(self, scope : str):
        self.scope : str = scope
        self.attributes : dict[str, Any] = {}
        self.translated : list[str] = []
        self.skipped : list[str] = []
        self.failed : list[str] = []

    @property
    def has_failures(self) -> bool:
        return bool(self.skipped or self.failed)

    def get(self, key : str) -> Any:
        return self.attributes.get(key)

    def __str__(self) -> str:
        parts = [f"{len(self.translated)} translated"]
        if self.skipped:
            parts.append(f"skipped {', '.join(self.skipped)}")
        if self.failed:
            parts.append(f"failed {', '.join(self.failed)}")
        return f"{self.scope}: {'; '.join(parts)}"

class MetadataTranslator:
    """
    Translates the source snapshots for each metadata scope into a target language.
    A field that cannot be translated is left out of the result without affecting the others.
    """
    def __init__(self, field_translator : FieldTranslator):
        self.field_translator = field_translator

    def TranslateAppInfo(self, snapshot : ContentSnapshot, target : LocaleTarget) -> ScopeTranslation:
        logging.info("Translating app-level metadata...")
        return self.TranslateScope('App Info', snapshot, target, APP_INFO_FIELDS, APP_INFO_PASSTHROUGH_FIELDS)

    def TranslateVersion(self, snapshot : ContentSnapshot, target : LocaleTarget) -> ScopeTranslation:
        logging.info("Translating version-specific metadata...")
        return self.TranslateScope('Version', snapshot, target, VERSION_FIELDS, VERSION_PASSTHROUGH_FIELDS)

    def TranslateScope(self, scope : str, snapshot : ContentSnapshot, target : LocaleTarget, fields : tuple[str, ...], passthrough : tuple[str, ...]) -> ScopeTranslation:
        result = ScopeTranslation(scope)

        for field in fields:
            text = snapshot.get(field)
            if not text:
                continue

            context_tag = FIELD_CONTEXTS[field]
            logging.info(f"Translating {context_tag}...")

            try:
                translation = self.field_translator.TranslateField(text, target.display_name, context_tag, FIELD_LIMITS.get(field))

            except TranslationError as e:
                if e.likely_too_long:
                    logging.warning(f"Skipping {context_tag} for {target.display_name}, text is likely too long ({e.text_length} characters): {e.original_message}")
                    result.skipped.append(field)
                else:
                    logging.error(f"Failed to translate {context_tag} for {target.display_name}: {e.original_message}")
                    result.failed.append(field)
                continue

            if translation:
                result.attributes[field] = translation
                result.translated.append(field)
                logging.info(f"  {field}: {Truncate(translation)}")

        for field in passthrough:
            value = snapshot.get(field)
            if value:
                result.attributes[field] = value

        return result
