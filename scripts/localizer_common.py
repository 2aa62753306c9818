import os
import logging

from argparse import ArgumentParser, Namespace
from dataclasses import dataclass

from PyStoreLocalizer.AppStoreConnect import AppStoreConnect
from PyStoreLocalizer.Helpers.Parse import ParseLanguageList
from PyStoreLocalizer.Helpers.Resources import GetConfigPath, config_dir
from PyStoreLocalizer.LocalizationSync import LocalizationSync
from PyStoreLocalizer.MetadataStore import MetadataStore
from PyStoreLocalizer.Options import Options
from PyStoreLocalizer.Providers.OpenRouterClient import OpenRouterClient
from PyStoreLocalizer.TranslationClient import TranslationClient

@dataclass
class LoggerOptions():
    file_handler: logging.FileHandler|None
    log_path: str

def InitLogger(logfilename: str, debug: bool = False) -> LoggerOptions:
    """ Initialise the logger with a file handler and return the path to the log file """
    log_path = GetConfigPath(f"{logfilename}.log")
    file_handler = None

    if debug:
        logging_level = logging.DEBUG
    else:
        level_name = os.getenv('LOG_LEVEL', 'INFO').upper()
        logging_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(format='%(levelname)s: %(message)s', encoding='utf-8', level=logging_level)

    if debug:
        logging.debug("Debug logging enabled")

    # Create file handler with the same logging level
    try:
        os.makedirs(config_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8', mode='w')
        file_handler.setLevel(logging_level)
        file_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        logging.getLogger('').addHandler(file_handler)
    except OSError as e:
        logging.warning(f"Unable to create log file at {log_path}: {e}")

    return LoggerOptions(file_handler=file_handler, log_path=log_path)

def CreateArgParser(description : str) -> ArgumentParser:
    """
    Create the command line parser for the store translator
    """
    parser = ArgumentParser(description=description)
    parser.add_argument('app_id', help="The App Store Connect App ID")
    parser.add_argument('-f', '--force', action='store_true', help="Force retranslation of all languages")
    parser.add_argument('-w', '--whats-new', dest='whats_new', action='store_true', help="Update only the What's New field of the pending release")
    parser.add_argument('-a', '--auto-detect', dest='auto_detect', action='store_true', help="Auto-detect available localizations from App Store Connect")
    parser.add_argument('-l', '--languages', type=str, default=None, help="Comma-separated list of languages (e.g. 'German,French,Korean' or 'de-DE,fr-FR,ko')")
    parser.add_argument('-k', '--apikey', type=str, default=None, help="Your OpenRouter API Key")
    parser.add_argument('-m', '--model', type=str, default=None, help="The model to use for translation")
    parser.add_argument('--cachefile', type=str, default=None, help="Path of the translation cache file")
    parser.add_argument('--reportdir', type=str, default=None, help="Directory to write manual translation reports to")
    parser.add_argument('--maxattempts', type=int, default=None, help="Maximum number of attempts to translate each field")
    parser.add_argument('--debug', action='store_true', help="Run with DEBUG log level")
    return parser

def CreateOptions(args: Namespace, **kwargs) -> Options:
    """ Create options from the command line arguments """
    options = {
        'app_id': args.app_id,
        'force_update': args.force or None,
        'whats_new_only': args.whats_new,
        'auto_detect': args.auto_detect,
        'languages': ParseLanguageList(args.languages) or None,
        'api_key': args.apikey,
        'model': args.model,
        'cache_file': args.cachefile,
        'report_dir': args.reportdir,
        'max_attempts': args.maxattempts,
    }

    for key, value in kwargs.items():
        options[key] = value

    return Options(options)

def CreateStore(options : Options) -> MetadataStore:
    return AppStoreConnect(options)

def CreateTranslationClient(options : Options) -> TranslationClient:
    client = OpenRouterClient(options)
    logging.info(f"Using translation model {client.model}")
    return client

def CreateSync(options : Options) -> LocalizationSync:
    """
    Validate the options and initialise a sync with the configured store and translation backend
    """
    options.Validate()

    store = CreateStore(options)
    client = CreateTranslationClient(options)

    return LocalizationSync(options, store, client)
