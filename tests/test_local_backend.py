"""
Tests for the local filesystem blob store backend and locator helpers.

Run with: python -m pytest tests/test_local_backend.py
"""

import os
import shutil
import sys
import tempfile
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from logstore.services.storage.local import LocalStorageBackend
from logstore.services.storage.locator import (
    build_local_locator,
    build_s3_locator,
    resolved_filepath,
)


class TestLocalStorageBackend(unittest.TestCase):

    def setUp(self):
        self.root = tempfile.mkdtemp(prefix='logstore_local_')
        self.backend = LocalStorageBackend(self.root)

    def tearDown(self):
        shutil.rmtree(self.root, ignore_errors=True)

    def test_put_get(self):
        blob = self.backend.put('bucket', 'project/p/e1.rdlog', b'hello')
        self.assertEqual(blob.size, 5)
        self.assertEqual(blob.locator, 'local://bucket/project/p/e1.rdlog')
        self.assertTrue(os.path.isfile(os.path.join(self.root, 'bucket', 'project', 'p', 'e1.rdlog')))
        self.assertEqual(self.backend.get('bucket', 'project/p/e1.rdlog'), b'hello')

    def test_get_missing(self):
        self.assertIsNone(self.backend.get('bucket', 'nope.rdlog'))
        self.assertFalse(self.backend.exists('bucket', 'nope.rdlog'))

    def test_buckets_are_separate(self):
        self.backend.put('one', 'k.rdlog', b'1')
        self.assertFalse(self.backend.exists('two', 'k.rdlog'))

    def test_no_temp_files_left(self):
        self.backend.put('bucket', 'dir/k.rdlog', b'abc')
        self.assertEqual(os.listdir(os.path.join(self.root, 'bucket', 'dir')), ['k.rdlog'])

    def test_directory_is_not_an_object(self):
        self.backend.put('bucket', 'dir/k.rdlog', b'abc')
        self.assertFalse(self.backend.exists('bucket', 'dir'))

    def test_path_traversal_rejected(self):
        with self.assertRaises(ValueError):
            self.backend.put('bucket', '../../escape.rdlog', b'x')


class TestLocator(unittest.TestCase):

    def test_resolved_filepath(self):
        self.assertEqual(resolved_filepath('project/p/e1', 'rdlog'), 'project/p/e1.rdlog')

    def test_build_locators(self):
        self.assertEqual(build_s3_locator('b', '/a//c.rdlog'), 's3://b/a/c.rdlog')
        self.assertEqual(build_local_locator('b', 'a/c.rdlog'), 'local://b/a/c.rdlog')


if __name__ == '__main__':
    unittest.main()
