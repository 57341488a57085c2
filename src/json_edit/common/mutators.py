"""
Copy-on-write mutators for JSON documents.

Each function clones the whole document, changes the clone and returns it.
Documents handed in by callers are never modified.
"""

from typing import Any

from .path_resolver import Resolution, resolve
from .serialization import deep_clone


def _can_assign(resolution: Resolution) -> bool:
	"""True if parent[key] can receive a value."""
	if not resolution.parent_resolved:
		return False
	if isinstance(resolution.parent, list):
		return isinstance(resolution.key, int)
	return isinstance(resolution.parent, dict)


def can_set_at(document: Any, path: str) -> bool:
	"""
	Check whether set_at would write anything for this path.

	True for the root and for locations whose parent exists and is a
	container able to hold the final key.
	"""
	resolution = resolve(document, path)
	return resolution.root or _can_assign(resolution)


def set_at(document: Any, path: str, value: Any) -> Any:
	"""
	Return a copy of document with value stored at path.

	The root path replaces the whole document. Missing intermediate
	ancestors are not created: the copy comes back unchanged in that case.
	Array indices past the end pad the gap with None.
	"""
	value = deep_clone(value)
	resolution = resolve(document, path)
	if resolution.root:
		return value

	result = deep_clone(document)
	resolution = resolve(result, path)
	if not _can_assign(resolution):
		return result

	parent, key = resolution.parent, resolution.key
	if isinstance(parent, list):
		if key >= len(parent):
			parent.extend([None] * (key - len(parent)))
			parent.append(value)
		else:
			parent[key] = value
	else:
		parent[key] = value
	return result


def remove_at(document: Any, path: str) -> Any:
	"""
	Return a copy of document with the value at path deleted.

	Array elements are removed and later elements shift down; object keys
	are deleted outright. Missing paths and the root leave the copy unchanged.
	"""
	result = deep_clone(document)
	resolution = resolve(result, path)
	if not resolution.exists or resolution.root:
		return result

	del resolution.parent[resolution.key]
	return result
