"""
Type tags, equality and string coercion for JSON values.
"""

import json
import math
from typing import Any, Optional, Tuple

OBJECT_STRING = "[object Object]"


def is_number(value: Any) -> bool:
	"""True for JSON numbers (bool is not a number here)."""
	return isinstance(value, (int, float)) and not isinstance(value, bool)


def json_type_of(value: Any) -> str:
	"""Return the JSON type tag: array, object, string, number, boolean or null."""
	if value is None:
		return "null"
	if isinstance(value, bool):
		return "boolean"
	if is_number(value):
		return "number"
	if isinstance(value, str):
		return "string"
	if isinstance(value, list):
		return "array"
	if isinstance(value, dict):
		return "object"
	return type(value).__name__


def normalize_number(value: Any) -> Any:
	"""Collapse integral floats (2.0) to ints so they serialize as 2."""
	if isinstance(value, float) and math.isfinite(value) and value.is_integer():
		return int(value)
	return value


def _normalize(value: Any) -> Any:
	if isinstance(value, list):
		return [_normalize(item) for item in value]
	if isinstance(value, dict):
		return {key: _normalize(item) for key, item in value.items()}
	return normalize_number(value)


def canonical_json(value: Any) -> str:
	"""Serialize for structural comparison; key order is significant."""
	return json.dumps(_normalize(value), ensure_ascii=False, separators=(",", ":"))


def equality_key(value: Any) -> Tuple[str, str]:
	"""Hashable key under which two values compare equal only if same type and same content."""
	return json_type_of(value), canonical_json(value)


def values_equal(left: Any, right: Any) -> bool:
	return equality_key(left) == equality_key(right)


def js_string(value: Any) -> str:
	"""
	Coerce a value to text the way string concatenation in a browser would.

	Used for default array sort ordering and for substring parameters.
	"""
	if value is None:
		return "null"
	if isinstance(value, bool):
		return "true" if value else "false"
	if isinstance(value, str):
		return value
	if is_number(value):
		value = normalize_number(value)
		return str(value) if isinstance(value, int) else repr(value)
	if isinstance(value, list):
		return ",".join("" if item is None else js_string(item) for item in value)
	if isinstance(value, dict):
		return OBJECT_STRING
	return str(value)


def strict_key(value: Any) -> Optional[Tuple[str, str]]:
	"""
	Hashable identity for strict comparison of scalars.

	Objects and arrays have no key: two of them are only ever the same value
	when they are the same object.
	"""
	if isinstance(value, (list, dict)):
		return None
	return equality_key(value)


def strictly_equal(left: Any, right: Any) -> bool:
	if isinstance(left, (list, dict)) or isinstance(right, (list, dict)):
		return left is right
	return equality_key(left) == equality_key(right)
