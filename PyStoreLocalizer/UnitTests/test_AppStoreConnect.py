import json
import unittest

import httpx
import jwt
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from PyStoreLocalizer.AppStoreConnect import AppStoreConnect
from PyStoreLocalizer.Helpers.Tests import log_input_expected_result, log_test_name
from PyStoreLocalizer.LocalizerError import ConfigurationError, StoreError
from PyStoreLocalizer.MetadataStore import StoreStatus

def _generate_private_key() -> str:
    key = ec.generate_private_key(ec.SECP256R1())
    pem = key.private_bytes(serialization.Encoding.PEM, serialization.PrivateFormat.PKCS8, serialization.NoEncryption())
    return pem.decode('utf-8')

class TestAppStoreConnect(unittest.TestCase):
    private_key = _generate_private_key()

    def setUp(self):
        self.requests : list[httpx.Request] = []
        self.routes : dict[tuple[str, str], list[httpx.Response]] = {}

    def _route(self, method : str, path : str, status_code : int = 200, content : dict|None = None):
        self.routes.setdefault((method, path), []).append(httpx.Response(status_code, json=content))

    def _handler(self, request : httpx.Request) -> httpx.Response:
        self.requests.append(request)
        responses = self.routes.get((request.method, request.url.path))
        if not responses:
            return httpx.Response(404, json={ 'errors': [{ 'title': 'Not found' }] })
        return responses.pop(0) if len(responses) > 1 else responses[0]

    def _create_store(self, **settings) -> AppStoreConnect:
        store_settings = {
            'key_id': 'ABC123',
            'issuer_id': 'issuer-uuid',
            'private_key': self.private_key.replace('\n', '\\n'),
            **settings
        }
        store = AppStoreConnect(store_settings, transport=httpx.MockTransport(self._handler))
        self.addCleanup(store.Close)
        return store

    def test_MissingCredentials(self):
        log_test_name("Missing credentials are a configuration error")
        with self.assertRaises(ConfigurationError):
            AppStoreConnect({ 'key_id': 'ABC123', 'issuer_id': '' })

    def test_GenerateToken(self):
        log_test_name("Token header and claims")
        store = self._create_store()
        token = store.GenerateToken()

        header = jwt.get_unverified_header(token)
        claims = jwt.decode(token, options={ 'verify_signature': False })

        log_input_expected_result("kid", 'ABC123', header.get('kid'))
        self.assertEqual(header['alg'], 'ES256')
        self.assertEqual(header['kid'], 'ABC123')
        self.assertEqual(header['typ'], 'JWT')
        self.assertEqual(claims['iss'], 'issuer-uuid')
        self.assertEqual(claims['aud'], 'appstoreconnect-v1')
        self.assertEqual(claims['exp'] - claims['iat'], 20 * 60)

    def test_FetchLocalizations(self):
        log_test_name("Fetch localizations")
        self._route('GET', '/v1/appInfos/info-1/appInfoLocalizations', content={ 'data': [
            { 'type': 'appInfoLocalizations', 'id': 'loc-1', 'attributes': { 'locale': 'en-US', 'name': 'Foo' } },
            { 'type': 'appInfoLocalizations', 'id': 'loc-2', 'attributes': { 'locale': 'de-DE', 'name': 'Fu' } },
        ] })

        store = self._create_store()
        localizations = store.GetAppInfoLocalizations('info-1')

        log_input_expected_result("locales", ['en-US', 'de-DE'], [ loc.locale_code for loc in localizations ])
        self.assertEqual([ loc.id for loc in localizations ], ['loc-1', 'loc-2'])
        self.assertEqual(localizations[1].attributes['name'], 'Fu')

        request = self.requests[0]
        self.assertTrue(request.headers['Authorization'].startswith('Bearer '))
        self.assertEqual(request.url.params['limit'], '200')

    def test_EditableVersionFallback(self):
        log_test_name("Editable version falls back to other editable states")
        self._route('GET', '/v1/apps/123/appStoreVersions', content={ 'data': [] })
        self._route('GET', '/v1/apps/123/appStoreVersions', content={ 'data': [
            { 'id': 'v-live', 'attributes': { 'versionString': '1.0', 'appStoreState': 'READY_FOR_SALE' } },
            { 'id': 'v-rejected', 'attributes': { 'versionString': '1.1', 'appStoreState': 'DEVELOPER_REJECTED' } },
        ] })

        store = self._create_store()
        version = store.GetEditableVersion('123')

        log_input_expected_result("version", 'v-rejected', version.id if version else None)
        self.assertEqual(version.id, 'v-rejected')
        self.assertEqual(len(self.requests), 2)
        self.assertEqual(self.requests[0].url.params['filter[appStoreState]'], 'PREPARE_FOR_SUBMISSION')
        self.assertEqual(self.requests[0].url.params['filter[platform]'], 'IOS')
        self.assertNotIn('filter[appStoreState]', self.requests[1].url.params)

    def test_FetchErrorRaises(self):
        log_test_name("Fetch errors raise StoreError")
        self._route('GET', '/v1/apps/123', 401, { 'errors': [{ 'title': 'Authentication failed', 'detail': 'Token expired' }] })

        store = self._create_store()
        with self.assertRaises(StoreError) as context:
            store.GetApp('123')

        log_input_expected_result("error", "API Error: 401 - Unauthorized - Authentication failed: Token expired", str(context.exception))
        self.assertEqual(context.exception.status_code, 401)
        self.assertEqual(str(context.exception), "API Error: 401 - Unauthorized - Authentication failed: Token expired")

    def test_UpdateResults(self):
        log_test_name("Update results are classified by status code")
        cases = [
            (200, StoreStatus.SUCCESS),
            (409, StoreStatus.CONFLICT),
            (403, StoreStatus.ERROR),
            (500, StoreStatus.ERROR),
        ]

        for status_code, expected in cases:
            with self.subTest(status_code=status_code):
                self.routes.clear()
                self._route('PATCH', '/v1/appInfoLocalizations/loc-2', status_code, { 'data': { 'id': 'loc-2' } })

                store = self._create_store()
                result = store.UpdateAppInfoLocalization('loc-2', { 'name': 'Fu' })

                log_input_expected_result(status_code, expected, result.status)
                self.assertEqual(result.status, expected)
                self.assertEqual(result.status_code, status_code)

        body = json.loads(self.requests[-1].content)
        self.assertEqual(body, { 'data': { 'type': 'appInfoLocalizations', 'id': 'loc-2', 'attributes': { 'name': 'Fu' } } })

    def test_CreateVersionLocalization(self):
        log_test_name("Create version localization request")
        self._route('POST', '/v1/appStoreVersionLocalizations', 201, { 'data': { 'id': 'new-loc' } })

        store = self._create_store()
        result = store.CreateVersionLocalization('version-1', 'de-DE', { 'description': 'Beschreibung' })

        self.assertTrue(result.succeeded)
        body = json.loads(self.requests[0].content)
        self.assertEqual(body['data']['attributes'], { 'description': 'Beschreibung', 'locale': 'de-DE' })
        self.assertEqual(body['data']['relationships']['appStoreVersion']['data'], { 'type': 'appStoreVersions', 'id': 'version-1' })

    def test_TransportErrorIsResult(self):
        log_test_name("Transport errors on update are returned as an error result")
        def failing_handler(request : httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        store = AppStoreConnect({ 'key_id': 'ABC123', 'issuer_id': 'issuer-uuid', 'private_key': self.private_key },
                                transport=httpx.MockTransport(failing_handler))
        self.addCleanup(store.Close)

        result = store.UpdateVersionLocalization('loc-1', { 'whatsNew': 'Neu' })
        self.assertEqual(result.status, StoreStatus.ERROR)
        self.assertIn("Connection refused", result.message)

        with self.assertRaises(StoreError):
            store.GetVersionLocalizations('version-1')

if __name__ == '__main__':
    unittest.main()
