"""Tests for auth, site, domain and health routes over fake adapters."""

import unittest
from unittest.mock import patch
import sys
from pathlib import Path

# Add src to path
# test_site_routes.py is at src/api/tests/; src is 3 levels up
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from fastapi.testclient import TestClient

from adapter.fake.blob_store import FakeBlobStore
from adapter.fake.user_repository import FakeUserRepository
from adapter.security.jwt_authenticator import JWTAuthenticator
from api import dependencies
from api.main import app
from domain.model.domains import SupportedDomainSet
from services import auth_service
from services.site_publisher import SitePublisher

DOMAINS = SupportedDomainSet.from_list(['example.com', 'example.dev'], 'example.com')
HTML = "<html><head></head><body>hi</body></html>"


class RouteTestCase(unittest.TestCase):

    def setUp(self):
        self.users = FakeUserRepository()
        self.blobs = FakeBlobStore()
        self.authenticator = JWTAuthenticator('test-secret')
        publisher = SitePublisher(self.users, self.blobs, DOMAINS)

        app.dependency_overrides[dependencies.get_user_repo] = lambda: self.users
        app.dependency_overrides[dependencies.get_authenticator] = lambda: self.authenticator
        app.dependency_overrides[dependencies.get_site_publisher] = lambda: publisher
        app.dependency_overrides[dependencies.get_domains] = lambda: DOMAINS
        app.dependency_overrides[dependencies.check_user_store] = lambda: self.users.ping()

        patcher = patch.object(auth_service, 'BCRYPT_ROUNDS', 4)
        patcher.start()
        self.addCleanup(patcher.stop)

        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def _register(self, username='alice', email='alice@example.com', password='secret1'):
        return self.client.post('/auth/register', json={
            'username': username, 'email': email, 'password': password,
        })

    def _auth_headers(self, username='alice'):
        response = self._register(username=username, email=f'{username}@example.com')
        return {'Authorization': f"Bearer {response.json()['token']}"}


class TestAuthRoutes(RouteTestCase):

    def test_register_returns_token_and_subdomain(self):
        response = self._register()

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertTrue(body['user']['subdomain'].startswith('alice-'))
        self.assertNotIn('password_hash', body['user'])
        self.assertEqual(self.authenticator.verify(body['token']), body['user']['id'])

    def test_register_duplicate_username(self):
        self._register()

        response = self._register(email='other@example.com')

        self.assertEqual(response.status_code, 409)

    def test_register_invalid_username(self):
        response = self._register(username='admin')

        self.assertEqual(response.status_code, 400)

    def test_login(self):
        self._register()

        ok = self.client.post('/auth/login', json={'username': 'alice', 'password': 'secret1'})
        bad = self.client.post('/auth/login', json={'username': 'alice', 'password': 'wrong!!'})

        self.assertEqual(ok.status_code, 200)
        self.assertEqual(bad.status_code, 401)

    def test_me_requires_token(self):
        self.assertEqual(self.client.get('/auth/me').status_code, 401)

        response = self.client.get('/auth/me', headers=self._auth_headers())
        self.assertEqual(response.json()['username'], 'alice')


class TestSiteRoutes(RouteTestCase):

    def test_publish_requires_token(self):
        response = self.client.post('/sites', json={'html': HTML})

        self.assertEqual(response.status_code, 401)

    def test_publish_and_list(self):
        headers = self._auth_headers()

        first = self.client.post('/sites', json={'html': HTML, 'site_slug': 'test'}, headers=headers)
        second = self.client.post('/sites', json={'html': HTML, 'site_slug': 'test'}, headers=headers)

        self.assertEqual(first.status_code, 201)
        self.assertEqual(first.json()['slug'], 'test')
        self.assertEqual(second.json()['slug'], 'test-1')
        self.assertEqual(len(first.json()['urls']), 2)

        listed = self.client.get('/sites', headers=headers).json()
        self.assertEqual([s['slug'] for s in listed], ['test', 'test-1'])

    def test_publish_url_uses_preferred_domain(self):
        headers = self._auth_headers()

        body = self.client.post('/sites', json={
            'html': HTML, 'site_name': 'My Page', 'preferred_domain': 'example.dev',
        }, headers=headers).json()

        self.assertEqual(body['domain'], 'example.dev')
        self.assertTrue(body['url'].endswith('-my-page.example.dev'))
        self.assertTrue(body['primary_url'].endswith('-my-page.example.com'))

    def test_publish_accepts_camel_case_fields(self):
        headers = self._auth_headers()

        body = self.client.post('/sites', json={
            'html': HTML, 'siteName': 'Shop', 'siteSlug': 'my-shop', 'preferredDomain': 'example.dev',
        }, headers=headers).json()

        self.assertEqual(body['name'], 'Shop')
        self.assertEqual(body['slug'], 'my-shop')
        self.assertEqual(body['domain'], 'example.dev')

    def test_publish_validation_errors(self):
        headers = self._auth_headers()

        missing = self.client.post('/sites', json={'site_slug': 'test'}, headers=headers)
        short = self.client.post('/sites', json={'html': HTML, 'site_slug': 'Ab'}, headers=headers)
        malformed = self.client.post('/sites', json={'html': '<p>x</p>', 'js': 'f()'}, headers=headers)

        self.assertEqual(missing.status_code, 400)
        self.assertEqual(short.status_code, 400)
        self.assertEqual(malformed.status_code, 400)
        self.assertEqual(self.client.get('/sites', headers=headers).json(), [])

    def test_publish_storage_failure(self):
        headers = self._auth_headers()
        self.blobs.fail_writes = True

        response = self.client.post('/sites', json={'html': HTML}, headers=headers)

        self.assertEqual(response.status_code, 503)

    def test_unreadable_user_store_is_unavailable_not_missing(self):
        headers = self._auth_headers()
        self.users.fail_reads = True

        publish = self.client.post('/sites', json={'html': HTML}, headers=headers)
        listing = self.client.get('/sites', headers=headers)
        login = self.client.post('/auth/login', json={'username': 'alice', 'password': 'secret1'})

        self.assertEqual(publish.status_code, 503)
        self.assertEqual(listing.status_code, 503)
        self.assertEqual(login.status_code, 503)
        self.assertEqual(self.blobs.blobs, {})

    def test_hosted_document(self):
        headers = self._auth_headers()
        body = self.client.post('/sites', json={'html': HTML, 'site_slug': 'page'}, headers=headers).json()
        subdomain = self.client.get('/auth/me', headers=headers).json()['subdomain']

        served = self.client.get(f'/hosted/{subdomain}/{body["slug"]}')
        missing = self.client.get(f'/hosted/{subdomain}/nope')

        self.assertEqual(served.status_code, 200)
        self.assertEqual(served.text, HTML)
        self.assertIn('text/html', served.headers['content-type'])
        self.assertEqual(missing.status_code, 404)


class TestMetaRoutes(RouteTestCase):

    def test_domains(self):
        response = self.client.get('/domains')

        self.assertEqual(response.json(), {
            'supported_domains': ['example.com', 'example.dev'],
            'primary_domain': 'example.com',
        })

    def test_health(self):
        response = self.client.get('/health')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['services']['user_store']['status'], 'healthy')

    def test_health_degraded_when_store_down(self):
        app.dependency_overrides[dependencies.check_user_store] = lambda: False

        response = self.client.get('/health')

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()['status'], 'degraded')


if __name__ == '__main__':
    unittest.main()
