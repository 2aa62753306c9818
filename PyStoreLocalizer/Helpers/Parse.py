from typing import Any
import json
import logging

import regex

language_separator = regex.compile(r"[\n,]\s*")
message_pattern = regex.compile(r'"message"\s*:\s*"((?:[^"\\]|\\.)*)"')

def ParseLanguageList(language_list : str|list|None|Any) -> list[str]:
    """
    Parse language names or locale codes from a comma-separated string or a list of strings
    """
    if isinstance(language_list, str):
        language_list = [language_list]

    if not isinstance(language_list, list):
        return []

    return [ token.strip() for item in language_list for token in language_separator.split(str(item)) if token.strip() ]

def _load_json_object(text : str) -> dict[str, Any]|None:
    """
    Parse text as a JSON object, or failing that the outermost {...} embedded in it
    """
    candidates = [text]
    start, end = text.find('{'), text.rfind('}')
    if start != -1 and end > start:
        candidates.append(text[start:end + 1])

    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue

        if isinstance(data, dict):
            return data

    return None

def _first_text(data : dict[str, Any], keys : tuple[str, ...]) -> str|None:
    for key in keys:
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None

def ParseErrorMessageFromText(value : str) -> str|None:
    """
    Try to extract a human-friendly error message from an HTTP response body.

    Understands a JSON:API errors array, an {"error": {"message": ...}} object or a top-level
    message, in a JSON body or in text with a JSON object embedded in it.
    Returns None if no message could be found.
    """
    if not isinstance(value, str):
        return None

    text = value.strip()
    data = _load_json_object(text)

    if data is not None:
        message = ParseStoreErrors(data)

        error = data.get('error')
        if not message and isinstance(error, dict):
            message = _first_text(error, ('message', 'Message', 'msg', 'description', 'detail'))

        message = message or _first_text(data, ('message', 'error_message', 'detail', 'description'))
        if message:
            return message

    match = message_pattern.search(text)
    if match:
        try:
            return json.loads(f'"{match.group(1)}"')
        except json.JSONDecodeError:
            logging.debug(f"Unable to decode error message: {match.group(1)}")
            return match.group(1)

    return None

def ParseStoreErrors(data : dict[str, Any]) -> str|None:
    """
    Summarise a JSON:API style errors array, e.g. {"errors": [{"title": "...", "detail": "..."}]}
    """
    errors = data.get('errors')
    if not isinstance(errors, list) or not errors:
        return None

    messages = []
    for error in errors:
        if not isinstance(error, dict):
            continue
        title = error.get('title') or error.get('code') or 'Error'
        detail = error.get('detail')
        messages.append(f"{title}: {detail}" if detail else str(title))

    return ", ".join(messages) if messages else None
