"""
Unit tests for parsing and stringifying document text.
"""

import os
import sys
import unittest

# Add the src directory to the PYTHONPATH
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))

from json_edit.common.errors import DocumentInvalidError
from json_edit.common.serialization import parse_document, stringify_document


class TestParseDocument(unittest.TestCase):
	"""Test parse_document."""

	def test_valid_documents(self):
		"""Any JSON value is a document."""
		self.assertEqual(parse_document('{"a": [1, 2.5, null]}'), {'a': [1, 2.5, None]})
		self.assertEqual(parse_document('"text"'), 'text')

	def test_malformed_text(self):
		"""Truncated text is rejected."""
		with self.assertRaises(DocumentInvalidError) as context:
			parse_document('{"a": 1,')
		self.assertTrue(context.exception.message.startswith('Invalid JSON'))

	def test_non_finite_constants_rejected(self):
		"""NaN and Infinity are not JSON."""
		for text in ('{"a": NaN}', '[Infinity]', '-Infinity'):
			with self.assertRaises(DocumentInvalidError, msg=text) as context:
				parse_document(text)
			self.assertTrue(context.exception.message.startswith('Invalid JSON'))

	def test_non_text_rejected(self):
		"""Only text can be parsed."""
		with self.assertRaises(DocumentInvalidError):
			parse_document(None)


class TestStringifyDocument(unittest.TestCase):
	"""Test stringify_document."""

	def test_two_space_indent_and_key_order(self):
		"""Output is indented by two spaces and keeps key order."""
		self.assertEqual(stringify_document({'b': 1, 'a': 'é'}), '{\n  "b": 1,\n  "a": "é"\n}')

	def test_non_finite_numbers_rejected(self):
		"""Infinity and NaN are never written out."""
		for value in (float('inf'), float('-inf'), float('nan')):
			with self.assertRaises(DocumentInvalidError):
				stringify_document({'n': value})


if __name__ == '__main__':
	unittest.main()
