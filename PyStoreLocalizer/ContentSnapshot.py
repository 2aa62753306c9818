from __future__ import annotations
from collections.abc import Mapping
import hashlib
import json
from typing import Any

# Every field that is sent for translation, across both metadata scopes
TRANSLATABLE_FIELDS : tuple[str, ...] = (
    'name',
    'subtitle',
    'description',
    'keywords',
    'promotionalText',
    'whatsNew',
    'privacyPolicyText',
)

APP_INFO_FIELDS : tuple[str, ...] = ('name', 'subtitle', 'privacyPolicyText')
APP_INFO_PASSTHROUGH_FIELDS : tuple[str, ...] = ('privacyPolicyUrl', 'privacyChoicesUrl')

VERSION_FIELDS : tuple[str, ...] = ('description', 'keywords', 'promotionalText', 'whatsNew')
VERSION_PASSTHROUGH_FIELDS : tuple[str, ...] = ('supportUrl', 'marketingUrl')

def _has_content(value : Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True

class ContentSnapshot:
    """
    The source-language attribute values for one metadata scope.
    Empty fields are dropped on construction, so they are never translated or hashed.
    """
    def __init__(self, attributes : Mapping[str, Any]|None = None):
        attributes = attributes or {}
        self.fields : dict[str, Any] = { key : value for key, value in attributes.items() if _has_content(value) }

    @property
    def translatable(self) -> dict[str, str]:
        return { key : self.fields[key] for key in TRANSLATABLE_FIELDS if key in self.fields }

    @property
    def fingerprint(self) -> str:
        return ComputeFingerprint(self.fields)

    def get(self, key : str) -> Any:
        return self.fields.get(key)

    def __contains__(self, key : str) -> bool:
        return key in self.fields

    def __repr__(self) -> str:
        return f"ContentSnapshot({', '.join(self.fields.keys())})"

def ComputeFingerprint(attributes : Mapping[str, Any]) -> str:
    """
    SHA-256 hex digest of the non-empty translatable fields, serialised with sorted keys
    so that field order never affects the result.
    """
    content = { key : attributes[key] for key in TRANSLATABLE_FIELDS if _has_content(attributes.get(key)) }
    canonical = json.dumps(content, sort_keys=True, separators=(',', ':'), ensure_ascii=False)
    return hashlib.sha256(canonical.encode('utf-8')).hexdigest()
