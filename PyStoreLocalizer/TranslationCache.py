from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
import json
import logging
import os
from typing import Any

@dataclass
class CacheEntry:
    app_info_hash : str|None
    version_hash : str|None
    updated_at : str|None = None

    @classmethod
    def FromDict(cls, data : dict[str, Any]) -> CacheEntry:
        return cls(
            app_info_hash=data.get('app_info_hash'),
            version_hash=data.get('version_hash'),
            updated_at=data.get('updated_at')
        )

    def ToDict(self) -> dict[str, Any]:
        return {
            'app_info_hash': self.app_info_hash,
            'version_hash': self.version_hash,
            'updated_at': self.updated_at
        }

class TranslationCache:
    """
    Remembers the source content fingerprints each locale was last synced with,
    so that unchanged locales can be skipped on later runs.

    The document is keyed by app id, then locale code. Unknown keys are preserved.
    """
    def __init__(self, path : str|None = None, document : dict[str, Any]|None = None):
        self.path : str|None = path
        self.document : dict[str, Any] = document if document is not None else {}

    @classmethod
    def Load(cls, path : str) -> TranslationCache:
        """
        Load the cache from disk. A missing or unreadable file gives an empty cache.
        """
        if not os.path.exists(path):
            return cls(path)

        try:
            with open(path, 'r', encoding='utf-8') as cache_file:
                document = json.load(cache_file)

        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logging.warning(f"Cache file {path} is corrupted, starting fresh ({e})")
            return cls(path)

        except OSError as e:
            logging.warning(f"Unable to read cache file {path}, starting fresh ({e})")
            return cls(path)

        if not isinstance(document, dict):
            logging.warning(f"Cache file {path} does not contain a cache document, starting fresh")
            return cls(path)

        return cls(path, document)

    def Save(self, path : str|None = None) -> None:
        path = path or self.path
        if not path:
            raise ValueError("No path specified for the translation cache")

        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as cache_file:
            json.dump(self.document, cache_file, ensure_ascii=False, indent=2)

        logging.debug(f"Translation cache saved to {path}")

    def GetEntry(self, app_id : str, locale_code : str) -> CacheEntry|None:
        app_entries = self.document.get(str(app_id))
        if not isinstance(app_entries, dict):
            return None

        entry = app_entries.get(locale_code)
        if not isinstance(entry, dict):
            return None

        return CacheEntry.FromDict(entry)

    def ShouldSkip(self, app_id : str, locale_code : str, force : bool, app_info_hash : str, version_hash : str, locale_exists : bool) -> bool:
        """
        Decide whether a locale can be skipped because its source content has not changed.
        Anything other than an exact match on both fingerprints means the locale is processed.
        """
        if force:
            return False

        if not locale_exists:
            return False

        entry = self.GetEntry(app_id, locale_code)
        if entry is None:
            return False

        return entry.app_info_hash == app_info_hash and entry.version_hash == version_hash

    def Update(self, app_id : str, locale_code : str, app_info_hash : str, version_hash : str, timestamp : datetime|None = None) -> CacheEntry:
        """
        Overwrite the entry for a locale with the fingerprints it was just synced with
        """
        timestamp = timestamp or datetime.now()
        entry = CacheEntry(app_info_hash, version_hash, timestamp.isoformat(timespec='seconds'))

        app_entries = self.document.get(str(app_id))
        if not isinstance(app_entries, dict):
            app_entries = {}
            self.document[str(app_id)] = app_entries

        existing = app_entries.get(locale_code)
        merged = dict(existing) if isinstance(existing, dict) else {}
        merged.update(entry.ToDict())
        app_entries[locale_code] = merged

        return entry
