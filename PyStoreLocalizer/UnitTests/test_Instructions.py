import unittest

from PyStoreLocalizer.Helpers.Tests import log_input_expected_result, log_test_name
from PyStoreLocalizer.Instructions import (
    BuildAggressiveShortenPrompt,
    BuildShortenPrompt,
    BuildTranslationPrompt,
    ContextTag,
    GetContextInstruction,
    GetLanguageInstruction,
    default_context_instruction,
)

class TestInstructions(unittest.TestCase):
    def test_LanguageInstruction(self):
        log_test_name("Language instructions")
        cases = [
            ('German', "Translate to German (de-DE). Use formal language (Sie form) for user-facing content."),
            ('Spanish', "Translate to Spanish (es-ES, Spain Spanish not Latin American)."),
            ('Korean', "Translate to Korean."),
        ]

        for language, expected in cases:
            with self.subTest(language=language):
                result = GetLanguageInstruction(language)
                log_input_expected_result(language, expected, result)
                self.assertEqual(result, expected)

    def test_ContextInstruction(self):
        log_test_name("Context instructions")
        self.assertIn("max 30 characters", GetContextInstruction(ContextTag.APP_SUBTITLE))
        self.assertIn("Separate with commas", GetContextInstruction('app keywords'))
        self.assertEqual(GetContextInstruction('release notes'), default_context_instruction)

    def test_TranslationPrompt(self):
        log_test_name("Translation prompt")
        prompt = BuildTranslationPrompt("Track your habits\nDaily", 'French', ContextTag.WHATS_NEW)

        self.assertTrue(prompt.startswith("Translate to French (fr-FR)."))
        self.assertIn("This is a what's new section.", prompt)
        self.assertIn("- Provide ONLY the translation, no explanations or notes", prompt)
        self.assertTrue(prompt.endswith("\nText to translate:\nTrack your habits\nDaily"))

    def test_ShortenPrompts(self):
        log_test_name("Shorten prompts")
        text = "Eine viel zu lange Beschreibung"

        polite = BuildShortenPrompt(text, 'German', ContextTag.APP_SUBTITLE, 30)
        log_input_expected_result(text, "too long at 31 characters", polite.splitlines()[0])
        self.assertIn(f"is too long at {len(text)} characters", polite)
        self.assertIn("under 30 characters", polite)
        self.assertTrue(polite.endswith(f"Text to shorten:\n{text}"))

        aggressive = BuildAggressiveShortenPrompt(text, 'German', 30)
        self.assertIn("STILL too long", aggressive)
        self.assertIn("Stay in German", aggressive)
        self.assertTrue(aggressive.endswith(f"Text:\n{text}"))

if __name__ == '__main__':
    unittest.main()
