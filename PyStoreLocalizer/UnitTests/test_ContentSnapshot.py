import unittest

from PyStoreLocalizer.ContentSnapshot import TRANSLATABLE_FIELDS, ComputeFingerprint, ContentSnapshot
from PyStoreLocalizer.Helpers.Tests import log_input_expected_result, log_test_name

class TestContentSnapshot(unittest.TestCase):
    source_attributes = {
        'locale': 'en-US',
        'name': 'Foo',
        'subtitle': 'Bar',
        'privacyPolicyText': 'We collect nothing.',
        'privacyPolicyUrl': 'https://example.com/privacy',
    }

    def test_EmptyFieldsOmitted(self):
        log_test_name("Empty fields are omitted from the snapshot")
        snapshot = ContentSnapshot({ 'name': 'Foo', 'subtitle': '', 'description': '   ', 'keywords': None })
        log_input_expected_result("fields", ['name'], list(snapshot.fields.keys()))
        self.assertEqual(list(snapshot.fields.keys()), ['name'])
        self.assertNotIn('subtitle', snapshot)
        self.assertIsNone(snapshot.get('description'))

    def test_TranslatableSubset(self):
        log_test_name("Only designated fields are translatable")
        snapshot = ContentSnapshot(self.source_attributes)
        expected = { 'name': 'Foo', 'subtitle': 'Bar', 'privacyPolicyText': 'We collect nothing.' }
        log_input_expected_result("translatable", expected, snapshot.translatable)
        self.assertEqual(snapshot.translatable, expected)

    def test_FingerprintIgnoresFieldOrder(self):
        log_test_name("Fingerprint is independent of field order")
        forward = ContentSnapshot({ 'name': 'Foo', 'subtitle': 'Bar', 'keywords': 'a,b' })
        reverse = ContentSnapshot({ 'keywords': 'a,b', 'subtitle': 'Bar', 'name': 'Foo' })
        log_input_expected_result("fingerprints equal", True, forward.fingerprint == reverse.fingerprint)
        self.assertEqual(forward.fingerprint, reverse.fingerprint)
        self.assertEqual(len(forward.fingerprint), 64)

    def test_FingerprintIgnoresNonTranslatableFields(self):
        log_test_name("Fingerprint ignores pass-through and empty fields")
        base = ComputeFingerprint({ 'name': 'Foo', 'subtitle': 'Bar' })
        cases = [
            { 'name': 'Foo', 'subtitle': 'Bar', 'privacyPolicyUrl': 'https://example.com' },
            { 'name': 'Foo', 'subtitle': 'Bar', 'locale': 'en-US' },
            { 'name': 'Foo', 'subtitle': 'Bar', 'description': '' },
            { 'name': 'Foo', 'subtitle': 'Bar', 'whatsNew': None },
        ]
        for attributes in cases:
            with self.subTest(attributes=attributes):
                result = ComputeFingerprint(attributes)
                log_input_expected_result(attributes, base, result)
                self.assertEqual(result, base)

    def test_FingerprintChangesWithAnyTranslatableField(self):
        log_test_name("Changing any translatable field changes the fingerprint")
        attributes = { field : f"{field} text" for field in TRANSLATABLE_FIELDS }
        base = ComputeFingerprint(attributes)

        for field in TRANSLATABLE_FIELDS:
            with self.subTest(field=field):
                changed = dict(attributes)
                changed[field] = changed[field] + "!"
                result = ComputeFingerprint(changed)
                log_input_expected_result(field, "different", "different" if result != base else "same")
                self.assertNotEqual(result, base)

    def test_FingerprintUnicode(self):
        log_test_name("Fingerprint is stable for non-ASCII text")
        first = ComputeFingerprint({ 'name': 'Café ☕' })
        second = ComputeFingerprint({ 'name': 'Café ☕' })
        self.assertEqual(first, second)
        self.assertNotEqual(first, ComputeFingerprint({ 'name': 'Cafe ☕' }))

if __name__ == '__main__':
    unittest.main()
