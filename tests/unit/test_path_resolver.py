"""
Unit tests for path parsing and resolution.
"""

import os
import sys
import unittest

# Add the src directory to the PYTHONPATH
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))

from json_edit.common.path_resolver import format_path, get_at, is_root_path, parse_path, resolve


# =============================================================================
# Test parse_path
# =============================================================================
class TestParsePath(unittest.TestCase):
	"""Test splitting path expressions into segments."""

	def test_dotted_and_bracketed_segments(self):
		"""Dots and brackets should both separate segments."""
		self.assertEqual(parse_path('$.a[0].b'), ['a', '0', 'b'])

	def test_root_marker_is_optional(self):
		"""Paths without a leading $ should parse the same way."""
		self.assertEqual(parse_path('a.b'), ['a', 'b'])
		self.assertEqual(parse_path('[1]'), ['1'])

	def test_root_forms(self):
		"""$, empty string and $. all address the root."""
		self.assertEqual(parse_path('$'), [])
		self.assertEqual(parse_path(''), [])
		self.assertTrue(is_root_path('$'))
		self.assertTrue(is_root_path(''))
		self.assertTrue(is_root_path('$.'))
		self.assertFalse(is_root_path('$.a'))

	def test_consecutive_brackets(self):
		"""Nested indices should yield one segment each."""
		self.assertEqual(parse_path('$.grid[1][2]'), ['grid', '1', '2'])

	def test_format_path(self):
		"""format_path should render ints as indices and strings as properties."""
		self.assertEqual(format_path(['a', 0, 'b']), '$.a[0].b')
		self.assertEqual(format_path([]), '$')


# =============================================================================
# Test resolve
# =============================================================================
class TestResolve(unittest.TestCase):
	"""Test walking paths through documents."""

	def setUp(self):
		self.document = {
			'name': 'widget',
			'items': ['x', 'y'],
			'config': {'port': 8080, 'tls': None},
			'byKey': {'0': 'zero'},
		}

	def test_root_resolution(self):
		"""The root path resolves to the document with no parent."""
		resolution = resolve(self.document, '$')
		self.assertTrue(resolution.exists)
		self.assertTrue(resolution.root)
		self.assertIsNone(resolution.parent)
		self.assertIs(resolution.value, self.document)

	def test_array_index_exists(self):
		"""$.items[0] should resolve to the first element."""
		resolution = resolve({'items': ['x', 'y']}, '$.items[0]')
		self.assertTrue(resolution.exists)
		self.assertEqual(resolution.value, 'x')
		self.assertEqual(resolution.key, 0)
		self.assertIsInstance(resolution.key, int)

	def test_array_index_on_empty_array(self):
		"""An index into an empty array does not exist but has a usable parent."""
		resolution = resolve({'items': []}, '$.items[0]')
		self.assertFalse(resolution.exists)
		self.assertTrue(resolution.parent_resolved)
		self.assertEqual(resolution.parent, [])

	def test_dotted_index_on_array(self):
		"""$.items.1 is the same location as $.items[1] when items is an array."""
		dotted = resolve(self.document, '$.items.1')
		bracketed = resolve(self.document, '$.items[1]')
		self.assertEqual(dotted.key, 1)
		self.assertEqual(dotted.value, bracketed.value)

	def test_numeric_segment_on_object_is_property(self):
		"""A numeric segment addresses a plain key when the context is an object."""
		resolution = resolve(self.document, '$.byKey[0]')
		self.assertTrue(resolution.exists)
		self.assertEqual(resolution.key, '0')
		self.assertEqual(resolution.value, 'zero')

	def test_negative_index_is_not_an_index(self):
		"""Only non-negative integers index arrays."""
		resolution = resolve(self.document, '$.items[-1]')
		self.assertFalse(resolution.exists)
		self.assertEqual(resolution.key, '-1')

	def test_nested_property(self):
		"""Nested properties resolve through objects."""
		resolution = resolve(self.document, '$.config.port')
		self.assertTrue(resolution.exists)
		self.assertEqual(resolution.value, 8080)
		self.assertIs(resolution.parent, self.document['config'])

	def test_explicit_null_exists(self):
		"""A key holding null exists."""
		resolution = resolve(self.document, '$.config.tls')
		self.assertTrue(resolution.exists)
		self.assertIsNone(resolution.value)

	def test_missing_final_key(self):
		"""A missing final key reports its would-be parent."""
		resolution = resolve(self.document, '$.config.host')
		self.assertFalse(resolution.exists)
		self.assertTrue(resolution.parent_resolved)
		self.assertIs(resolution.parent, self.document['config'])
		self.assertEqual(resolution.key, 'host')

	def test_missing_intermediate_short_circuits(self):
		"""A missing ancestor stops resolution without a usable parent."""
		resolution = resolve(self.document, '$.missing.deeper.key')
		self.assertFalse(resolution.exists)
		self.assertFalse(resolution.parent_resolved)
		self.assertEqual(resolution.key, 'missing')

	def test_null_intermediate_short_circuits(self):
		"""A null ancestor cannot be descended into."""
		resolution = resolve(self.document, '$.config.tls.cert')
		self.assertFalse(resolution.exists)
		self.assertFalse(resolution.parent_resolved)

	def test_scalar_parent(self):
		"""Properties of scalars never exist."""
		resolution = resolve(self.document, '$.name.length')
		self.assertFalse(resolution.exists)
		self.assertEqual(resolution.parent, 'widget')

	def test_resolve_does_not_modify(self):
		"""Resolution must leave the document untouched."""
		resolve(self.document, '$.config.new.deeper')
		self.assertNotIn('new', self.document['config'])

	def test_get_at(self):
		"""get_at returns the value when present and None otherwise."""
		self.assertEqual(get_at(self.document, '$.items[1]'), 'y')
		self.assertIsNone(get_at(self.document, '$.items[5]'))
		self.assertEqual(get_at(self.document, '$'), self.document)


if __name__ == '__main__':
	unittest.main()
