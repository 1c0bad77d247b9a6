"""
Tests for storage path template expansion.

Run with: python -m pytest tests/test_path_template.py
"""

import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from logstore.services.storage.interfaces import ExecutionContext
from logstore.services.storage.path_template import DEFAULT_PATH_FORMAT, expand_path


def _context(**extra):
    data = {
        'execid': 'testexecid',
        'project': 'testproject',
        'url': 'http://rundeck:4440/execution/9/show',
        'serverUrl': 'http://rundeck:4440',
    }
    data.update(extra)
    return data


class TestExpandPath(unittest.TestCase):

    def test_leading_slash_is_removed(self):
        self.assertEqual(expand_path('/foo', _context()), 'foo')
        self.assertEqual(expand_path('///foo', _context()), 'foo')

    def test_multi_slash_collapsed(self):
        self.assertEqual(expand_path('/foo//bar///test', _context()), 'foo/bar/test')

    def test_expand_execid(self):
        self.assertEqual(expand_path('foo/${job.execid}/bar', _context()), 'foo/testexecid/bar')

    def test_expand_project(self):
        self.assertEqual(expand_path('foo/${job.project}/bar', _context()), 'foo/testproject/bar')

    def test_missing_key_removes_segment(self):
        self.assertEqual(expand_path('foo/${job.id}/bar', _context()), 'foo/bar')

    def test_none_value_treated_as_missing(self):
        self.assertEqual(expand_path('foo/${job.group}/bar', _context(group=None)), 'foo/bar')

    def test_expand_job_id(self):
        self.assertEqual(expand_path('foo/${job.id}/bar', _context(id='testjobid')), 'foo/testjobid/bar')

    def test_non_string_values_are_stringified(self):
        self.assertEqual(expand_path('runs/${job.execid}', {'execid': 42}), 'runs/42')

    def test_default_format(self):
        self.assertEqual(expand_path(DEFAULT_PATH_FORMAT, _context()), 'project/testproject/testexecid')

    def test_other_namespaces_pass_through(self):
        self.assertEqual(expand_path('foo/${option.env}/${job.execid}', _context()), 'foo/${option.env}/testexecid')

    def test_repeated_placeholder(self):
        self.assertEqual(expand_path('${job.execid}/${job.execid}', _context()), 'testexecid/testexecid')

    def test_typed_context(self):
        ctx = ExecutionContext(execid='e1', project='p1', group='ops')
        self.assertEqual(expand_path('${job.project}/${job.group}/${job.name}/${job.execid}', ctx), 'p1/ops/e1')

    def test_no_context(self):
        self.assertEqual(expand_path('/logs/${job.execid}', None), 'logs/')

    def test_never_doubled_separator(self):
        formats = [
            '/a//${job.id}//${job.group}///b',
            '${job.project}//${job.name}/${job.execid}',
            '////',
            'x/${job.group}/${job.name}/${job.id}/y',
        ]
        for fmt in formats:
            result = expand_path(fmt, _context())
            self.assertNotIn('//', result, fmt)
            self.assertFalse(result.startswith('/'), fmt)


class TestExecutionContext(unittest.TestCase):

    def test_from_mapping_drops_unknown_and_none(self):
        ctx = ExecutionContext.from_mapping(_context(id=None, group='g'))
        self.assertEqual(ctx.execid, 'testexecid')
        self.assertIsNone(ctx.id)
        self.assertEqual(ctx.as_mapping(), {'execid': 'testexecid', 'project': 'testproject', 'group': 'g'})

    def test_from_mapping_empty(self):
        self.assertEqual(ExecutionContext.from_mapping(None).as_mapping(), {})


if __name__ == '__main__':
    unittest.main()
