"""Tests for LocalBlobStore (temp dir) and R2BlobStore (mocked S3 client)."""

import io
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock

from botocore.exceptions import ClientError

from adapter.storage.local_blob_store import LocalBlobStore
from adapter.storage.r2_blob_store import R2BlobStore


class TestLocalBlobStore(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.store = LocalBlobStore(self.root)

    def tearDown(self):
        self._tmp.cleanup()

    def test_write_read_delete(self):
        self.assertTrue(self.store.write('alice-x1/blog/index.html', '<p>hi</p>'))
        self.assertEqual((self.root / 'alice-x1' / 'blog' / 'index.html').read_text(), '<p>hi</p>')
        self.assertEqual(self.store.read('alice-x1/blog/index.html'), '<p>hi</p>')

        self.assertTrue(self.store.delete('alice-x1/blog/index.html'))
        self.assertIsNone(self.store.read('alice-x1/blog/index.html'))
        self.assertFalse(self.store.delete('alice-x1/blog/index.html'))

    def test_overwrite(self):
        self.store.write('a/b/index.html', 'one')
        self.store.write('a/b/index.html', 'two')

        self.assertEqual(self.store.read('a/b/index.html'), 'two')

    def test_keys_cannot_escape_root(self):
        self.assertFalse(self.store.write('../outside.html', 'x'))
        self.assertIsNone(self.store.read('../../etc/passwd'))
        self.assertFalse((self.root.parent / 'outside.html').exists())


class TestR2BlobStore(unittest.TestCase):

    def setUp(self):
        self.client = MagicMock()
        self.store = R2BlobStore(client=self.client, bucket='sites-bucket', prefix='sites')

    def test_write_puts_html_object(self):
        self.assertTrue(self.store.write('alice-x1/blog/index.html', '<p>hi</p>'))

        self.client.put_object.assert_called_once_with(
            Bucket='sites-bucket',
            Key='sites/alice-x1/blog/index.html',
            Body=b'<p>hi</p>',
            ContentType='text/html; charset=utf-8',
        )

    def test_write_failure_returns_false(self):
        self.client.put_object.side_effect = ClientError(
            {'Error': {'Code': 'AccessDenied', 'Message': 'no'}}, 'PutObject',
        )

        self.assertFalse(self.store.write('k/index.html', 'x'))

    def test_read(self):
        self.client.get_object.return_value = {'Body': io.BytesIO(b'<p>x</p>')}

        self.assertEqual(self.store.read('a/b/index.html'), '<p>x</p>')
        self.client.get_object.assert_called_once_with(Bucket='sites-bucket', Key='sites/a/b/index.html')

    def test_read_missing_key(self):
        self.client.get_object.side_effect = ClientError(
            {'Error': {'Code': 'NoSuchKey', 'Message': 'gone'}}, 'GetObject',
        )

        self.assertIsNone(self.store.read('a/b/index.html'))

    def test_delete(self):
        self.assertTrue(self.store.delete('a/b/index.html'))
        self.client.delete_object.assert_called_once_with(Bucket='sites-bucket', Key='sites/a/b/index.html')


if __name__ == '__main__':
    unittest.main()
