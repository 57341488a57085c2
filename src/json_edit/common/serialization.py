"""
Parse and stringify helpers at the text boundary of the engine.
"""

import copy
import json
from typing import Any

from .errors import DocumentInvalidError

DEFAULT_INDENT = 2


def _reject_constant(name: str):
	raise DocumentInvalidError(f"Invalid JSON: {name} is not a JSON value")


def parse_document(text: str) -> Any:
	"""Parse document text, raising DocumentInvalidError on malformed input (NaN and Infinity included)."""
	if not isinstance(text, (str, bytes, bytearray)):
		raise DocumentInvalidError(f"Document must be text, got {type(text).__name__}")
	try:
		return json.loads(text, parse_constant=_reject_constant)
	except json.JSONDecodeError as e:
		raise DocumentInvalidError(f"Invalid JSON: {e}") from e
	except UnicodeDecodeError as e:
		raise DocumentInvalidError(f"Invalid JSON encoding: {e}") from e


def stringify_document(data: Any, indent: int = DEFAULT_INDENT, ensure_ascii: bool = False) -> str:
	"""Serialize a document with stable indentation, preserving key order."""
	try:
		return json.dumps(data, indent=indent, ensure_ascii=ensure_ascii, allow_nan=False)
	except (ValueError, TypeError) as e:
		raise DocumentInvalidError(f"Document cannot be written as JSON: {e}") from e


def deep_clone(data: Any) -> Any:
	"""Return a structurally independent copy of a JSON value."""
	return copy.deepcopy(data)
