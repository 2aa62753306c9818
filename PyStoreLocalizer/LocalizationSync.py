from __future__ import annotations
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
import logging
import time

from PyStoreLocalizer.ContentSnapshot import ContentSnapshot
from PyStoreLocalizer.FieldTranslator import FieldTranslator
from PyStoreLocalizer.Instructions import FIELD_LIMITS, ContextTag
from PyStoreLocalizer.LocalizationReconciler import LocalizationReconciler, ScopeResult
from PyStoreLocalizer.Locales import LocaleResolver, LocaleTarget
from PyStoreLocalizer.LocalizerError import SourceContentError, TranslationError
from PyStoreLocalizer.ManualTranslations import ManualTranslationLedger
from PyStoreLocalizer.MetadataStore import GroupByLocale, MetadataStore, RemoteLocalization, StoreResource
from PyStoreLocalizer.MetadataTranslator import MetadataTranslator, ScopeTranslation
from PyStoreLocalizer.Options import Options
from PyStoreLocalizer.TranslationCache import TranslationCache
from PyStoreLocalizer.TranslationClient import TranslationClient

separator = "=" * 50

class LocaleStatus(Enum):
    SKIPPED = 'skipped'
    TRANSLATED = 'translated'
    DEFERRED = 'deferred'
    FAILED = 'failed'

@dataclass
class LocaleResult:
    target : LocaleTarget
    status : LocaleStatus
    scopes : list[ScopeResult] = field(default_factory=list)
    translations : list[ScopeTranslation] = field(default_factory=list)
    error : str|None = None

    def __str__(self) -> str:
        return f"{self.target}: {self.status.value}" + (f" ({self.error})" if self.error else "")

class SyncSummary:
    def __init__(self):
        self.results : list[LocaleResult] = []

    def Add(self, result : LocaleResult) -> LocaleResult:
        self.results.append(result)
        return result

    def GetLocales(self, status : LocaleStatus) -> list[str]:
        return [ result.target.code for result in self.results if result.status == status ]

    @property
    def skipped(self) -> list[str]:
        return self.GetLocales(LocaleStatus.SKIPPED)

    @property
    def translated(self) -> list[str]:
        return self.GetLocales(LocaleStatus.TRANSLATED)

    @property
    def deferred(self) -> list[str]:
        return self.GetLocales(LocaleStatus.DEFERRED)

    @property
    def failed(self) -> list[str]:
        return self.GetLocales(LocaleStatus.FAILED)

    def LogSummary(self) -> None:
        logging.info(f"Processed {len(self.results)} locales: "
                     f"{len(self.translated)} translated, {len(self.deferred)} need manual entry, "
                     f"{len(self.skipped)} skipped, {len(self.failed)} failed")
        for status in (LocaleStatus.DEFERRED, LocaleStatus.FAILED):
            locales = self.GetLocales(status)
            if locales:
                logging.info(f"  {status.value.capitalize()}: {', '.join(locales)}")

class SyncContext:
    """
    State for one run, passed explicitly to each locale
    """
    def __init__(self, app_id : str, app_info : StoreResource|None, version : StoreResource, cache : TranslationCache, ledger : ManualTranslationLedger):
        self.app_id = app_id
        self.app_info = app_info
        self.version = version
        self.cache = cache
        self.ledger = ledger
        self.source_app_info : ContentSnapshot = ContentSnapshot()
        self.source_version : ContentSnapshot = ContentSnapshot()
        self.app_localizations : dict[str, RemoteLocalization] = {}
        self.version_localizations : dict[str, RemoteLocalization] = {}
        self.summary = SyncSummary()

    @property
    def app_info_hash(self) -> str:
        return self.source_app_info.fingerprint

    @property
    def version_hash(self) -> str:
        return self.source_version.fingerprint

    def LocaleExists(self, locale_code : str) -> bool:
        return locale_code in self.app_localizations or locale_code in self.version_localizations

class LocalizationSync:
    """
    Keeps the store's localized metadata in step with the source-language content.

    Each target locale is processed in turn: skipped if its source content is unchanged,
    otherwise translated and reconciled against the store. One locale failing does not stop the run.
    """
    def __init__(self, options : Options, store : MetadataStore, client : TranslationClient, sleep : Callable[[float], None] = time.sleep):
        self.options = options
        self.store = store
        self.field_translator = FieldTranslator(client, options, sleep=sleep)
        self.translator = MetadataTranslator(self.field_translator)
        self.resolver = LocaleResolver(options.source_locale)
        self.ledger = ManualTranslationLedger()
        self.cache : TranslationCache|None = None

    @property
    def app_id(self) -> str:
        return self.options.app_id

    @property
    def source_locale(self) -> str:
        return self.options.source_locale

    def Run(self) -> SyncSummary:
        if self.options.whats_new_only:
            return self.RunWhatsNewUpdate()
        return self.RunFullSync()

    def RunFullSync(self, cache : TranslationCache|None = None) -> SyncSummary:
        """
        Translate and sync all metadata for every target locale
        """
        logging.info(f"Starting translation process for App ID: {self.app_id}")
        if self.options.force_update:
            logging.info("Force update: all locales will be processed")

        self.cache = cache or TranslationCache.Load(self.options.cache_file)

        app = self.store.GetApp(self.app_id)
        logging.info(f"Found app: {app.attributes.get('bundleId') or app.id}")

        app_info = self.store.GetAppInfo(self.app_id)
        if app_info is None:
            raise SourceContentError(f"No app info found for App ID {self.app_id}")

        version = self._get_editable_version()

        context = SyncContext(self.app_id, app_info, version, self.cache, self.ledger)

        logging.info(f"Fetching {self.source_locale} app info localization...")
        app_localizations = self._refresh_app_localizations(context)
        logging.info(f"Fetching {self.source_locale} version localization...")
        version_localizations = self._refresh_version_localizations(context)

        source_app_info = app_localizations.get(self.source_locale)
        source_version = version_localizations.get(self.source_locale)
        if source_app_info is None or source_version is None:
            raise SourceContentError(f"Could not find {self.source_locale} localization")

        context.source_app_info = ContentSnapshot(source_app_info.attributes)
        context.source_version = ContentSnapshot(source_version.attributes)
        self._log_source_content(context)

        targets = self.resolver.Resolve(self.options.languages, self.options.auto_detect, lambda: list(version_localizations.keys()))
        if not targets:
            logging.warning("No target locales to process")
            return context.summary

        for code, display_name in targets.items():
            self.ProcessLocale(context, LocaleTarget(code, display_name))

        self.cache.Save(self.cache.path or self.options.cache_file)

        self.ledger.WriteReport(self.app_id, self.options.report_dir)
        self.ledger.LogSummary()

        context.summary.LogSummary()
        logging.info("Translation process completed!")
        return context.summary

    def ProcessLocale(self, context : SyncContext, target : LocaleTarget) -> LocaleResult:
        """
        Sync a single locale, containing any failure so that the run can continue
        """
        logging.info(separator)
        logging.info(f"Processing {target}")
        logging.info(separator)

        try:
            result = self.SyncLocale(context, target)

        except Exception as e:
            logging.error(f"Error processing {target.display_name}: {e}")
            logging.debug("Locale processing failed", exc_info=True)
            result = LocaleResult(target, LocaleStatus.FAILED, error=str(e))

        return context.summary.Add(result)

    def SyncLocale(self, context : SyncContext, target : LocaleTarget) -> LocaleResult:
        # Refresh so that localizations added through the web interface during the run are seen
        self._refresh_app_localizations(context)
        self._refresh_version_localizations(context)

        existing_app_info = context.app_localizations.get(target.code)
        existing_version = context.version_localizations.get(target.code)
        logging.info(f"  App Info: {'Found' if existing_app_info else 'Not found'}")
        logging.info(f"  Version: {'Found' if existing_version else 'Not found'}")

        if context.cache.ShouldSkip(context.app_id, target.code, self.options.force_update,
                                    context.app_info_hash, context.version_hash, context.LocaleExists(target.code)):
            logging.info(f"{target.display_name} - No changes detected, skipping")
            return LocaleResult(target, LocaleStatus.SKIPPED)

        app_translation = self.translator.TranslateAppInfo(context.source_app_info, target)
        version_translation = self.translator.TranslateVersion(context.source_version, target)

        reconciler = LocalizationReconciler(self.store, context.ledger)
        app_result = reconciler.ReconcileAppInfo(target, app_translation, existing_app_info)
        version_result = reconciler.ReconcileVersion(target, version_translation, existing_version, context.version.id)

        context.cache.Update(context.app_id, target.code, context.app_info_hash, context.version_hash)

        result = LocaleResult(target, LocaleStatus.TRANSLATED, [app_result, version_result], [app_translation, version_translation])

        errors = [ str(scope) for scope in result.scopes if scope.failed ]
        if errors:
            result.status = LocaleStatus.FAILED
            result.error = "; ".join(errors)
            logging.error(f"{target.display_name} localization failed: {result.error}")
        elif any(scope.needs_manual_entry for scope in result.scopes):
            result.status = LocaleStatus.DEFERRED
            logging.info(f"{target.display_name} localization completed (some fields require manual entry)")
        else:
            logging.info(f"{target.display_name} localization completed")

        for translation in result.translations:
            if translation.has_failures:
                logging.warning(f"{target.display_name} {translation}")

        return result

    def RunWhatsNewUpdate(self) -> SyncSummary:
        """
        Translate only the What's New text into locales that already have a version localization
        """
        logging.info(f"Starting What's New update for App ID: {self.app_id}")

        app = self.store.GetApp(self.app_id)
        logging.info(f"Found app: {app.attributes.get('bundleId') or app.id}")

        version = self._get_editable_version()

        context = SyncContext(self.app_id, None, version, TranslationCache(), self.ledger)

        logging.info(f"Fetching {self.source_locale} What's New content...")
        version_localizations = self._refresh_version_localizations(context)
        source_version = version_localizations.get(self.source_locale)
        whats_new = ContentSnapshot(source_version.attributes).get('whatsNew') if source_version else None
        if not whats_new:
            raise SourceContentError(f"Could not find {self.source_locale} What's New content")

        logging.info(f"{self.source_locale} What's New content found:")
        for line in str(whats_new).splitlines():
            logging.info(f"  {line}")

        targets = self.resolver.Resolve(self.options.languages, self.options.auto_detect, lambda: list(version_localizations.keys()))

        for code, display_name in targets.items():
            target = LocaleTarget(code, display_name)
            logging.info(separator)
            logging.info(f"Updating What's New for {target}")
            logging.info(separator)

            try:
                result = self.UpdateWhatsNew(context, target, whats_new)

            except Exception as e:
                logging.error(f"Error updating What's New for {display_name}: {e}")
                logging.debug("What's New update failed", exc_info=True)
                result = LocaleResult(target, LocaleStatus.FAILED, error=str(e))

            context.summary.Add(result)

        context.summary.LogSummary()
        logging.info("What's New update completed!")
        return context.summary

    def UpdateWhatsNew(self, context : SyncContext, target : LocaleTarget, whats_new : str) -> LocaleResult:
        self._refresh_version_localizations(context)

        existing_version = context.version_localizations.get(target.code)
        if existing_version is None:
            logging.warning(f"No existing version localization found for {target.display_name}")
            logging.warning(f"Please add '{target.display_name}' language in App Store Connect web interface first.")
            return LocaleResult(target, LocaleStatus.DEFERRED)

        logging.info("Translating What's New...")
        try:
            translated = self.field_translator.TranslateField(whats_new, target.display_name, ContextTag.WHATS_NEW, FIELD_LIMITS['whatsNew'])

        except TranslationError as e:
            logging.error(f"Failed to translate What's New for {target.display_name}: {e.original_message}")
            return LocaleResult(target, LocaleStatus.FAILED, error=str(e))

        logging.info(f"Updating What's New localization (ID: {existing_version.id})...")
        store_result = self.store.UpdateVersionLocalization(existing_version.id, { 'whatsNew': translated })

        if not store_result.succeeded:
            logging.error(f"Failed to update What's New for {target.display_name}: {store_result.message}")
            return LocaleResult(target, LocaleStatus.FAILED, error=store_result.message)

        logging.info(f"{target.display_name} What's New updated successfully")
        return LocaleResult(target, LocaleStatus.TRANSLATED)

    def _get_editable_version(self) -> StoreResource:
        version = self.store.GetEditableVersion(self.app_id)
        if version is None:
            raise SourceContentError("No editable version found (looking for PREPARE_FOR_SUBMISSION status). Please create a new version in App Store Connect first")

        logging.info(f"Found version: {version.attributes.get('versionString')} ({version.attributes.get('appStoreState')})")
        return version

    def _refresh_app_localizations(self, context : SyncContext) -> dict[str, RemoteLocalization]:
        if context.app_info is None:
            return context.app_localizations

        context.app_localizations = GroupByLocale(self.store.GetAppInfoLocalizations(context.app_info.id))
        return context.app_localizations

    def _refresh_version_localizations(self, context : SyncContext) -> dict[str, RemoteLocalization]:
        context.version_localizations = GroupByLocale(self.store.GetVersionLocalizations(context.version.id))
        return context.version_localizations

    def _log_source_content(self, context : SyncContext) -> None:
        def present(snapshot : ContentSnapshot, key : str) -> str:
            return 'yes' if key in snapshot else 'no'

        logging.info(f"{self.source_locale} content found:")
        logging.info("App-level fields:")
        for key in ('name', 'subtitle', 'privacyPolicyText'):
            logging.info(f"  - {key}: {present(context.source_app_info, key)}")
        logging.info(f"Version-specific fields ({context.version.attributes.get('versionString')}):")
        for key in ('description', 'keywords', 'promotionalText', 'whatsNew'):
            logging.info(f"  - {key}: {present(context.source_version, key)}")
