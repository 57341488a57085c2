"""
Unit tests for the batch executor.
"""

import os
import sys
import unittest

# Add the src directory to the PYTHONPATH
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))

from json_edit.batch import BatchExecutor
from json_edit.common.operations import Operation


class TestBatchExecutor(unittest.TestCase):
	"""Test sequential application with per-step isolation."""

	def setUp(self):
		self.executor = BatchExecutor()

	def test_set_and_remove(self):
		"""Both steps apply in order."""
		result = self.executor.apply(
			{'a': 0, 'b': 2},
			[{'op': 'set', 'path': '$.a', 'value': 1}, {'op': 'remove', 'path': '$.b'}],
		)
		self.assertEqual(result.document, {'a': 1})
		self.assertEqual(result.applied_count, 2)
		self.assertEqual([outcome.success for outcome in result.outcomes], [True, True])

	def test_failed_step_does_not_abort(self):
		"""A failing step is recorded and later steps still run."""
		result = self.executor.apply(
			{'a': 0},
			[
				{'op': 'set', 'path': '$.a', 'value': 1},
				{'op': 'remove', 'path': '$.b'},
				{'op': 'set', 'path': '$.c', 'value': 3},
			],
		)
		self.assertEqual(result.document, {'a': 1, 'c': 3})
		self.assertEqual(result.failed_count, 1)
		failed = result.outcomes[1].to_dict()
		self.assertFalse(failed['success'])
		self.assertEqual(failed['op'], 'remove')
		self.assertEqual(failed['path'], '$.b')
		self.assertIn('does not exist', failed['error'])

	def test_steps_see_earlier_changes(self):
		"""Each step works on the document produced by the previous ones."""
		result = self.executor.apply(
			{'a': {'x': 1}},
			[
				{'op': 'copy', 'from': '$.a', 'path': '$.b'},
				{'op': 'set', 'path': '$.b.x', 'value': 2},
			],
		)
		self.assertEqual(result.document, {'a': {'x': 1}, 'b': {'x': 2}})

	def test_input_document_is_untouched(self):
		"""The caller's document is never modified."""
		document = {'list': [1]}
		self.executor.apply(document, [{'op': 'add', 'path': '$.list', 'value': 2}])
		self.assertEqual(document, {'list': [1]})

	def test_add_inserts_into_array(self):
		"""add inserts at the given index."""
		result = self.executor.apply({'list': [1, 3]}, [{'op': 'add', 'path': '$.list', 'value': 2, 'index': 1}])
		self.assertEqual(result.document['list'], [1, 2, 3])
		self.assertIsNone(result.outcomes[0].note)

	def test_add_on_non_array_sets(self):
		"""add on a non-array target falls back to set."""
		result = self.executor.apply({'cfg': {}}, [{'op': 'add', 'path': '$.cfg.debug', 'value': True}])
		self.assertEqual(result.document, {'cfg': {'debug': True}})
		self.assertEqual(result.outcomes[0].note, 'Used set for non-array target')

	def test_missing_parent_steps_are_noops(self):
		"""Steps writing under a missing parent succeed without changing the document."""
		result = self.executor.apply(
			{'a': 0},
			[
				{'op': 'set', 'path': '$.x.y', 'value': 1},
				{'op': 'add', 'path': '$.x.y', 'value': 1},
				{'op': 'replace', 'path': '$.x.y', 'value': 1},
				{'op': 'copy', 'from': '$.a', 'path': '$.x.y'},
			],
		)
		self.assertEqual(result.document, {'a': 0})
		self.assertEqual(result.failed_count, 0)
		for outcome in result.outcomes:
			self.assertEqual(outcome.note, 'Parent path does not exist, nothing written')

	def test_replace_substring(self):
		"""replace with from swaps the first occurrence of a substring."""
		result = self.executor.apply(
			{'v': 'beta-beta'}, [{'op': 'replace', 'path': '$.v', 'value': 'rc', 'from': 'beta'}]
		)
		self.assertEqual(result.document['v'], 'rc-beta')

	def test_replace_without_from_overwrites(self):
		"""replace without from overwrites, even a missing key."""
		result = self.executor.apply({}, [{'op': 'replace', 'path': '$.v', 'value': 1}])
		self.assertEqual(result.document, {'v': 1})

	def test_move_outcome_uses_from_and_to(self):
		"""Move outcomes report source and destination."""
		result = self.executor.apply({'a': 1}, [{'op': 'move', 'from': '$.a', 'path': '$.b'}])
		self.assertEqual(result.document, {'b': 1})
		self.assertEqual(
			result.outcomes[0].to_dict(), {'success': True, 'op': 'move', 'from': '$.a', 'to': '$.b'}
		)

	def test_unknown_operation(self):
		"""Non-mutating verbs are rejected as steps."""
		result = self.executor.apply({'a': 1}, [{'op': 'test', 'path': '$.a'}, {'op': 'explode'}])
		self.assertEqual(result.failed_count, 2)
		self.assertEqual(result.outcomes[0].error, 'Unknown operation: test')
		self.assertEqual(result.outcomes[1].error, 'Unknown operation: explode')

	def test_malformed_steps(self):
		"""Steps that are not objects, or lack required fields, fail alone."""
		result = self.executor.apply(
			{'a': 1},
			['set', {'op': 'set', 'value': 1}, {'op': 'add', 'path': '$.a', 'value': 1, 'index': 'x'}],
		)
		self.assertEqual(result.failed_count, 3)
		self.assertEqual(result.document, {'a': 1})

	def test_operation_objects_as_steps(self):
		"""Operation instances are accepted alongside mappings."""
		result = self.executor.apply(
			{'a': 1},
			[Operation.set('$.b', 2), Operation.get('$.a'), {'op': 'remove', 'path': '$.a'}],
		)
		self.assertEqual(result.document, {'b': 2})
		self.assertFalse(result.outcomes[1].success)
		self.assertEqual(result.outcomes[1].op, 'get')

	def test_empty_batch(self):
		"""An empty batch returns the document unchanged."""
		result = self.executor.apply({'a': 1}, [])
		self.assertEqual(result.document, {'a': 1})
		self.assertEqual(result.outcomes, [])


if __name__ == '__main__':
	unittest.main()
