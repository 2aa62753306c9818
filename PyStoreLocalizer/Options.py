from __future__ import annotations
from collections.abc import Mapping
from copy import deepcopy
import os
import dotenv

from PyStoreLocalizer.LocalizerError import ConfigurationError
from PyStoreLocalizer.SettingsType import SettingType, SettingsType
from PyStoreLocalizer.version import __version__

# Load environment variables from .env file
dotenv.load_dotenv()

def env_bool(key : str, default : bool = False) -> bool:
    var = os.getenv(key, default)
    return True if var and str(var).lower() in ('true', 'yes', '1') else False

def env_int(key : str, default : int|None = None) -> int|None:
    value = os.getenv(key, default)
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return int(value)

def env_float(key : str, default : float|None = None) -> float|None:
    value = os.getenv(key, default)
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return float(value)

def env_str(key : str, default : str|None = None) -> str|None:
    value = os.getenv(key, default)
    return str(value) if value is not None else None

default_settings = {
    'version': __version__,
    'app_id': env_str('APP_ID', None),
    'source_locale': env_str('SOURCE_LOCALE', 'en-US'),
    'force_update': env_bool('FORCE_UPDATE', False),
    'whats_new_only': False,
    'auto_detect': False,
    'languages': [],
    'cache_file': env_str('TRANSLATION_CACHE_FILE', '.translation_cache.json'),
    'report_dir': env_str('MANUAL_REPORT_DIR', '.'),
    'max_attempts': env_int('MAX_ATTEMPTS', 3),
    'backoff_time': env_float('BACKOFF_TIME', 2.0),
    'max_shorten_attempts': env_int('MAX_SHORTEN_ATTEMPTS', 3),
    'api_key': env_str('OPENROUTER_API_KEY', None),
    'model': env_str('OPENROUTER_MODEL', 'google/gemini-3-flash-preview'),
    'server_address': env_str('OPENROUTER_SERVER_ADDRESS', 'https://openrouter.ai/api/'),
    'endpoint': env_str('OPENROUTER_ENDPOINT', '/v1/chat/completions'),
    'temperature': env_float('TEMPERATURE', 0.0),
    'timeout': env_int('TIMEOUT', 300),
    'rate_limit': env_float('RATE_LIMIT', None),
    'key_id': env_str('APP_STORE_KEY_ID', None),
    'issuer_id': env_str('APP_STORE_ISSUER_ID', None),
    'private_key': env_str('APP_STORE_PRIVATE_KEY', None),
    'store_address': env_str('APP_STORE_ADDRESS', 'https://api.appstoreconnect.apple.com'),
    'platform': env_str('APP_STORE_PLATFORM', 'IOS'),
}

class Options(SettingsType):
    def __init__(self, settings : SettingsType|Mapping[str, SettingType]|None = None, **kwargs : SettingType):
        """
        Start from the environment-derived defaults, then apply settings and keyword arguments in turn.
        Unset (None) values leave the default in place.
        """
        super().__init__(deepcopy(default_settings))
        self.update(deepcopy(dict(settings or {})))
        self.update(kwargs)

    @property
    def version(self) -> str:
        return self.get_str('version') or ''

    @property
    def app_id(self) -> str:
        return self.get_str('app_id') or ''

    @property
    def source_locale(self) -> str:
        return self.get_str('source_locale') or 'en-US'

    @property
    def force_update(self) -> bool:
        return self.get_bool('force_update')

    @property
    def whats_new_only(self) -> bool:
        return self.get_bool('whats_new_only')

    @property
    def auto_detect(self) -> bool:
        return self.get_bool('auto_detect')

    @property
    def languages(self) -> list[str]:
        return self.get_str_list('languages')

    @property
    def cache_file(self) -> str:
        return self.get_str('cache_file') or str(default_settings['cache_file'])

    @property
    def report_dir(self) -> str:
        return self.get_str('report_dir') or '.'

    def Validate(self) -> None:
        """
        Check that the options describe a runnable sync, raising ConfigurationError if not.
        Nothing here talks to a remote service.
        """
        if not self.app_id:
            raise ConfigurationError("An App ID must be specified")

        if self.auto_detect and self.languages:
            raise ConfigurationError("Cannot use --auto-detect and --languages together")

        missing_credentials = [ key for key in ('key_id', 'issuer_id', 'private_key') if not self.get_str(key) ]
        if missing_credentials:
            raise ConfigurationError(f"Missing App Store Connect credentials: {', '.join(missing_credentials)}")

        if not self.get_str('api_key'):
            raise ConfigurationError("Missing translation API key (OPENROUTER_API_KEY)")

        max_attempts = self.get_int('max_attempts')
        if not max_attempts or max_attempts < 1:
            raise ConfigurationError("max_attempts must be at least 1")
