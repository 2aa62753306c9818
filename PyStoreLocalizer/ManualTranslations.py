from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
import logging
import os

linesep = '\n'

report_instructions = [
    "1. Go to App Store Connect > Your App > App Information",
    "2. Select each language from the dropdown",
    "3. Copy and paste the translations below",
]

@dataclass(frozen=True)
class ManualTranslationRecord:
    locale_code : str
    display_name : str
    name : str|None
    subtitle : str|None

class ManualTranslationLedger:
    """
    Collects app-level translations that the store would not accept through its API,
    for an operator to enter by hand. Holds at most one record per locale.
    """
    def __init__(self):
        self.records : dict[str, ManualTranslationRecord] = {}

    def Add(self, record : ManualTranslationRecord) -> None:
        if record.locale_code in self.records:
            logging.debug(f"Replacing manual translation record for {record.locale_code}")
        self.records[record.locale_code] = record

    def __len__(self) -> int:
        return len(self.records)

    def __bool__(self) -> bool:
        return bool(self.records)

    def __iter__(self):
        return iter(self.records.values())

    def __contains__(self, locale_code : str) -> bool:
        return locale_code in self.records

    def get(self, locale_code : str) -> ManualTranslationRecord|None:
        return self.records.get(locale_code)

    def GetReportFilename(self, app_id : str, timestamp : datetime) -> str:
        return f"manual_translations_{app_id}_{timestamp.strftime('%Y%m%d_%H%M%S')}.txt"

    def FormatReport(self, app_id : str, timestamp : datetime) -> str:
        """
        Render the records as plain text with instructions for the operator
        """
        title = "App Store Connect Manual Translations"
        lines = [
            title,
            "=" * len(title),
            f"App ID: {app_id}",
            f"Generated: {timestamp.strftime('%Y-%m-%d %H:%M:%S')}",
            "",
            "Instructions:",
            *report_instructions,
            "",
            "=" * 50,
        ]

        for record in self.records.values():
            lines.extend([
                "",
                f"{record.display_name} ({record.locale_code})",
                "-" * 30,
                f"App Name: {record.name or ''}",
                f"Subtitle: {record.subtitle or ''}",
            ])

        lines.extend([
            "",
            "=" * 50,
            "",
            "Note: Version-specific translations (description, keywords, etc.)",
            "have been automatically updated via the API.",
        ])

        return linesep.join(lines) + linesep

    def WriteReport(self, app_id : str, directory : str = '.', timestamp : datetime|None = None) -> str|None:
        """
        Write the report to a timestamped file, if there is anything to report.
        Returns the path of the file written.
        """
        if not self.records:
            return None

        timestamp = timestamp or datetime.now()
        path = os.path.join(directory or '.', self.GetReportFilename(app_id, timestamp))

        os.makedirs(directory or '.', exist_ok=True)
        with open(path, 'w', encoding='utf-8') as report_file:
            report_file.write(self.FormatReport(app_id, timestamp))

        logging.info(f"Manual translations saved to: {path}")
        logging.info("Open this file and copy/paste the translations into App Store Connect")
        return path

    def LogSummary(self) -> None:
        if not self.records:
            return

        logging.info("=" * 60)
        logging.info("MANUAL TRANSLATIONS REQUIRED")
        logging.info("=" * 60)
        for record in self.records.values():
            logging.info(record.display_name)
            logging.info(f"  App Name: {record.name or ''}")
            logging.info(f"  Subtitle: {record.subtitle or ''}")
        logging.info("=" * 60)
