"""
Unit tests for copy-on-write document mutators.
"""

import os
import sys
import unittest

# Add the src directory to the PYTHONPATH
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))

from json_edit.common.mutators import can_set_at, remove_at, set_at


class TestSetAt(unittest.TestCase):
	"""Test set_at."""

	def setUp(self):
		self.document = {'a': {'b': 1}, 'list': [1, 2, 3]}

	def test_creates_missing_key(self):
		"""set_at should add a new key under an existing parent."""
		result = set_at(self.document, '$.a.c', 2)
		self.assertEqual(result, {'a': {'b': 1, 'c': 2}, 'list': [1, 2, 3]})

	def test_does_not_modify_input(self):
		"""The caller's document must be unchanged after set_at."""
		set_at(self.document, '$.a.b', 99)
		self.assertEqual(self.document['a']['b'], 1)

	def test_result_is_independent(self):
		"""Mutating the result must not reach the input."""
		result = set_at(self.document, '$.a.c', 2)
		result['list'].append(4)
		self.assertEqual(self.document['list'], [1, 2, 3])

	def test_stored_value_is_cloned(self):
		"""The stored value must not alias the caller's object."""
		value = {'nested': [1]}
		result = set_at(self.document, '$.a.value', value)
		value['nested'].append(2)
		self.assertEqual(result['a']['value'], {'nested': [1]})

	def test_root_replaces_document(self):
		"""The root path replaces the whole document."""
		self.assertEqual(set_at(self.document, '$', [1]), [1])
		self.assertEqual(set_at(self.document, '', 'text'), 'text')

	def test_overwrites_array_element(self):
		"""Existing indices are overwritten in place."""
		result = set_at(self.document, '$.list[1]', 'two')
		self.assertEqual(result['list'], [1, 'two', 3])

	def test_index_at_length_appends(self):
		"""Index equal to the length appends."""
		result = set_at(self.document, '$.list[3]', 4)
		self.assertEqual(result['list'], [1, 2, 3, 4])

	def test_index_past_end_pads_with_null(self):
		"""Indices past the end leave null holes."""
		result = set_at(self.document, '$.list[5]', 6)
		self.assertEqual(result['list'], [1, 2, 3, None, None, 6])

	def test_missing_intermediate_is_noop(self):
		"""Missing ancestors are not created."""
		result = set_at(self.document, '$.x.y.z', 1)
		self.assertEqual(result, self.document)
		self.assertIsNot(result, self.document)

	def test_scalar_parent_is_noop(self):
		"""A scalar cannot receive a property."""
		result = set_at(self.document, '$.a.b.c', 1)
		self.assertEqual(result, self.document)


class TestRemoveAt(unittest.TestCase):
	"""Test remove_at."""

	def setUp(self):
		self.document = {'a': {'b': 1, 'c': 2}, 'list': ['x', 'y', 'z']}

	def test_removes_object_key(self):
		"""Object keys are deleted, not set to null."""
		result = remove_at(self.document, '$.a.b')
		self.assertEqual(result['a'], {'c': 2})
		self.assertNotIn('b', result['a'])

	def test_removes_array_element_and_shifts(self):
		"""Array elements are removed and later ones shift down."""
		result = remove_at(self.document, '$.list[0]')
		self.assertEqual(result['list'], ['y', 'z'])

	def test_missing_path_returns_unchanged_copy(self):
		"""Missing paths are a no-op at this layer."""
		result = remove_at(self.document, '$.a.zzz')
		self.assertEqual(result, self.document)
		self.assertIsNot(result, self.document)

	def test_root_is_not_removed(self):
		"""The root cannot be removed."""
		self.assertEqual(remove_at(self.document, '$'), self.document)

	def test_does_not_modify_input(self):
		"""remove_at must leave the input untouched."""
		remove_at(self.document, '$.list[1]')
		self.assertEqual(self.document['list'], ['x', 'y', 'z'])


class TestCanSetAt(unittest.TestCase):
	"""Test can_set_at."""

	def test_cases(self):
		"""can_set_at is True only where set_at would write."""
		document = {'a': {}, 'list': [], 'name': 'n'}
		self.assertTrue(can_set_at(document, '$'))
		self.assertTrue(can_set_at(document, '$.a.new'))
		self.assertTrue(can_set_at(document, '$.list[0]'))
		self.assertFalse(can_set_at(document, '$.list.name'))
		self.assertFalse(can_set_at(document, '$.name.x'))
		self.assertFalse(can_set_at(document, '$.missing.x'))


if __name__ == '__main__':
	unittest.main()
