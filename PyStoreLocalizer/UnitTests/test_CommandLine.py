import unittest
from unittest.mock import patch

from PyStoreLocalizer.Helpers.Tests import log_input_expected_result, log_test_name
from scripts.entry_points import store_translator
from scripts.localizer_common import CreateArgParser, CreateOptions, LoggerOptions

class TestCommandLine(unittest.TestCase):
    def setUp(self):
        self.parser = CreateArgParser("test")

    def test_Defaults(self):
        log_test_name("Command line defaults leave configured options in place")
        args = self.parser.parse_args(['123456'])
        options = CreateOptions(args, cache_file='cache.json')

        self.assertEqual(options.app_id, '123456')
        self.assertEqual(options.cache_file, 'cache.json')
        self.assertFalse(options.whats_new_only)
        self.assertFalse(options.auto_detect)
        self.assertEqual(options.get_int('max_attempts'), 3)

    def test_Flags(self):
        log_test_name("Command line flags")
        args = self.parser.parse_args(['123456', '-f', '-w', '-l', 'German,fr-FR', '--reportdir', 'reports', '--maxattempts', '5', '-m', 'test/model'])
        options = CreateOptions(args)

        log_input_expected_result("languages", ['German', 'fr-FR'], options.languages)
        self.assertEqual(options.languages, ['German', 'fr-FR'])
        self.assertTrue(options.force_update)
        self.assertTrue(options.whats_new_only)
        self.assertEqual(options.report_dir, 'reports')
        self.assertEqual(options.get_int('max_attempts'), 5)
        self.assertEqual(options.get_str('model'), 'test/model')

    def test_AutoDetect(self):
        log_test_name("Auto-detect flag")
        options = CreateOptions(self.parser.parse_args(['123456', '--auto-detect']))
        self.assertTrue(options.auto_detect)
        self.assertEqual(options.languages, [])

    def test_ConflictingModesExitBeforeRemoteCalls(self):
        log_test_name("Conflicting modes exit with status 1 before any remote call")
        argv = ['store-translator', '123456', '--auto-detect', '-l', 'German']

        with patch('sys.argv', argv), \
             patch('scripts.localizer_common.InitLogger', return_value=LoggerOptions(file_handler=None, log_path='')), \
             patch('scripts.localizer_common.CreateStore') as create_store, \
             patch('scripts.localizer_common.CreateTranslationClient') as create_client:
            with self.assertRaises(SystemExit) as context:
                store_translator()

        log_input_expected_result(argv, 1, context.exception.code)
        self.assertEqual(context.exception.code, 1)
        create_store.assert_not_called()
        create_client.assert_not_called()

if __name__ == '__main__':
    unittest.main()
