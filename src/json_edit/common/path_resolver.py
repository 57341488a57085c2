"""
Resolves simplified JSONPath expressions against parsed JSON documents.

Supported syntax is a leading "$" root marker followed by ".name" property
segments and "[n]" array index segments:
    $                 -> the document itself
    $.config.port     -> ["config", "port"]
    $.items[0].name   -> ["items", "0", "name"]

Whether a numeric segment is an array index or a property name is decided by
the value being navigated, not by the syntax: "$.a.0" and "$.a[0]" are the
same location when "a" is an array, and "0" is a plain key when "a" is an object.
"""

import re
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union

ROOT_MARKER = "$"

_SEGMENT_SPLIT = re.compile(r"[.\[\]]")
_INDEX_PATTERN = re.compile(r"[0-9]+")


@dataclass
class Resolution:
	"""
	Outcome of following a path through a document.

	Attributes:
		parent: Container holding the final segment, or None for the root.
		key: Final segment; an int for array indices, a str otherwise.
		exists: True if the location currently holds a value.
		value: The value at the location (None when it does not exist).
		parent_resolved: False when an intermediate ancestor is missing or null,
			in which case parent/key are not a usable place to create a value.
		root: True when the path addresses the whole document.
	"""
	parent: Any
	key: Union[str, int]
	exists: bool
	value: Any = None
	parent_resolved: bool = True
	root: bool = False


def is_root_path(path: str) -> bool:
	"""True if the path addresses the document root."""
	return not parse_path(path)


def parse_path(path: str) -> List[str]:
	"""Split a path expression into its raw segments."""
	if path is None:
		return []
	if path.startswith(ROOT_MARKER + "."):
		clean_path = path[2:]
	elif path.startswith(ROOT_MARKER):
		clean_path = path[1:]
	else:
		clean_path = path
	return [segment for segment in _SEGMENT_SPLIT.split(clean_path) if segment != ""]


def is_index_segment(segment: str) -> bool:
	"""True if the segment reads as a non-negative integer."""
	return bool(_INDEX_PATTERN.fullmatch(segment))


def format_path(segments: List[Union[str, int]]) -> str:
	"""Format segments back into "$.a[0].b" form."""
	parts = [ROOT_MARKER]
	for segment in segments:
		if isinstance(segment, int):
			parts.append(f"[{segment}]")
		else:
			parts.append(f".{segment}")
	return "".join(parts)


def resolve(document: Any, path: str) -> Resolution:
	"""
	Walk the path through the document in a single pass.

	Stops at the final segment and reports its parent, key and existence.
	A missing or null intermediate ends the walk early with exists=False and
	parent_resolved=False; ancestors are never synthesized.
	"""
	segments = parse_path(path)
	if not segments:
		return Resolution(parent=None, key="", exists=True, value=document, root=True)

	current = document
	for segment in segments[:-1]:
		key, exists, value = _step(current, segment)
		if not exists or value is None:
			return Resolution(parent=current, key=key, exists=False, parent_resolved=False)
		current = value

	key, exists, value = _step(current, segments[-1])
	return Resolution(parent=current, key=key, exists=exists, value=value)


def _step(current: Any, segment: str) -> Tuple[Union[str, int], bool, Any]:
	"""Look up one segment in the current value."""
	if isinstance(current, list) and is_index_segment(segment):
		index = int(segment)
		if index < len(current):
			return index, True, current[index]
		return index, False, None
	if isinstance(current, dict) and segment in current:
		return segment, True, current[segment]
	return segment, False, None


def get_at(document: Any, path: str) -> Optional[Any]:
	"""Return the value at path, or None when the path does not exist."""
	resolution = resolve(document, path)
	return resolution.value if resolution.exists else None
