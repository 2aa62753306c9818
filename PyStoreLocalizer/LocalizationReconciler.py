from __future__ import annotations
from enum import Enum
import logging

from PyStoreLocalizer.Locales import LocaleTarget
from PyStoreLocalizer.ManualTranslations import ManualTranslationLedger, ManualTranslationRecord
from PyStoreLocalizer.MetadataStore import MetadataStore, RemoteLocalization, StoreResult
from PyStoreLocalizer.MetadataTranslator import ScopeTranslation

class ScopeOutcome(Enum):
    UPDATED = 'updated'
    CREATED = 'created'
    DEFERRED = 'deferred'
    CONFLICT = 'conflict'
    ERROR = 'error'

class ScopeResult:
    def __init__(self, scope : str, outcome : ScopeOutcome, message : str|None = None):
        self.scope = scope
        self.outcome = outcome
        self.message = message

    @property
    def failed(self) -> bool:
        return self.outcome == ScopeOutcome.ERROR

    @property
    def needs_manual_entry(self) -> bool:
        return self.outcome in (ScopeOutcome.DEFERRED, ScopeOutcome.CONFLICT)

    def __str__(self) -> str:
        return f"{self.scope} {self.outcome.value}" + (f": {self.message}" if self.message else "")

class LocalizationReconciler:
    """
    Applies translated metadata for a locale to the store, choosing between updating an
    existing localization, creating a new one, or deferring to manual entry.

    Conflicts are never raised. Other store errors are returned as an ERROR result so
    that the remaining scope is still attempted.
    """
    def __init__(self, store : MetadataStore, ledger : ManualTranslationLedger):
        self.store = store
        self.ledger = ledger

    def ReconcileAppInfo(self, target : LocaleTarget, translation : ScopeTranslation, existing : RemoteLocalization|None) -> ScopeResult:
        """
        App-level localizations cannot be created through the API, so a missing one is always deferred to the ledger
        """
        if existing is None:
            logging.info("No existing app info localization found in API")
            self.ledger.Add(ManualTranslationRecord(
                locale_code=target.code,
                display_name=target.display_name,
                name=translation.get('name'),
                subtitle=translation.get('subtitle')
            ))
            logging.info("App name/subtitle translations saved for manual entry")
            return ScopeResult(translation.scope, ScopeOutcome.DEFERRED)

        logging.info(f"Updating existing app info localization (ID: {existing.id})...")
        result : StoreResult = self.store.UpdateAppInfoLocalization(existing.id, translation.attributes)

        if result.succeeded:
            return ScopeResult(translation.scope, ScopeOutcome.UPDATED)

        if result.conflict:
            logging.warning("Cannot update app info localization via API")
            logging.warning("App name/subtitle must be updated manually in App Store Connect")
            return ScopeResult(translation.scope, ScopeOutcome.CONFLICT, result.message)

        logging.error(f"Failed to update app info localization for {target}: {result.message}")
        return ScopeResult(translation.scope, ScopeOutcome.ERROR, result.message)

    def ReconcileVersion(self, target : LocaleTarget, translation : ScopeTranslation, existing : RemoteLocalization|None, version_id : str) -> ScopeResult:
        """
        Update the version localization for the locale, or create it if it does not exist
        """
        if existing is not None:
            logging.info(f"Updating existing version localization (ID: {existing.id})...")
            result = self.store.UpdateVersionLocalization(existing.id, translation.attributes)
            outcome = ScopeOutcome.UPDATED
        else:
            logging.info("No existing version localization found, attempting to create...")
            result = self.store.CreateVersionLocalization(version_id, target.code, translation.attributes)
            outcome = ScopeOutcome.CREATED

        if result.succeeded:
            return ScopeResult(translation.scope, outcome)

        if result.conflict:
            logging.warning(f"Cannot {'update' if existing else 'create'} version localization via API. Please add '{target.display_name}' language in App Store Connect web interface first.")
            logging.warning("Go to: Version Information > Localizable Information > Add Language")
            return ScopeResult(translation.scope, ScopeOutcome.CONFLICT, result.message)

        logging.error(f"Failed to {'update' if existing else 'create'} version localization for {target}: {result.message}")
        return ScopeResult(translation.scope, ScopeOutcome.ERROR, result.message)
