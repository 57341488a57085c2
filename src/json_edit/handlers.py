"""
Handlers for the single-call JSON operations.

Each handler takes an already-parsed document and an Operation and returns
(new_document, ToolResult). Handlers never modify the document they are
given; failures are raised as JsonEditError subclasses and no new document
is produced.
"""

import logging
import math
from typing import Any, Callable, Dict, List, Tuple

from .common.errors import InvalidOperationError, PathNotFoundError, ShapeMismatchError, TypeMismatchError
from .common.mutators import can_set_at, remove_at, set_at
from .common.operations import Operation, OperationType, TestCondition, TransformKind
from .common.path_resolver import resolve
from .common.results import UNSET, ToolResult
from .common.values import (
	is_number, js_string, json_type_of, normalize_number, strict_key, strictly_equal, values_equal
)

logger = logging.getLogger(__name__)

HandlerResult = Tuple[Any, ToolResult]

NOT_WRITTEN_MESSAGE = 'Parent path does not exist, nothing written'


def handle_read(document: Any, operation: Operation) -> HandlerResult:
	return document, ToolResult(
		success=True, content=document, message='JSON content read successfully', operation='read'
	)


def handle_get(document: Any, operation: Operation) -> HandlerResult:
	resolution = resolve(document, operation.path)
	return document, ToolResult(
		success=True,
		path=operation.path,
		value=resolution.value if resolution.exists else UNSET,
		exists=resolution.exists,
		message='Value retrieved' if resolution.exists else 'Path does not exist',
		operation='get',
	)


def handle_set(document: Any, operation: Operation) -> HandlerResult:
	"""
	Create or overwrite the value at path, reporting any prior value.

	A path whose parent does not exist leaves the document unchanged; the
	result says so in its message but is still a success.
	"""
	resolution = resolve(document, operation.path)
	if not can_set_at(document, operation.path):
		return document, ToolResult(
			success=True, path=operation.path, message=NOT_WRITTEN_MESSAGE, operation='set'
		)

	new_document = set_at(document, operation.path, operation.value)
	return new_document, ToolResult(
		success=True,
		path=operation.path,
		value=operation.value,
		old_value=resolution.value if resolution.exists else UNSET,
		message='Value updated' if resolution.exists else 'Value created',
		operation='set',
	)


def handle_remove(document: Any, operation: Operation) -> HandlerResult:
	resolution = resolve(document, operation.path)
	if resolution.root:
		raise ShapeMismatchError("Cannot remove the document root", path=operation.path)
	if not resolution.exists:
		raise PathNotFoundError(f"Path does not exist: {operation.path}", path=operation.path)

	new_document = remove_at(document, operation.path)
	return new_document, ToolResult(
		success=True, path=operation.path, old_value=resolution.value, message='Value removed', operation='remove'
	)


def handle_add(document: Any, operation: Operation) -> HandlerResult:
	"""
	Add to a container: insert into an array or add a key to an object.

	Array inserts go at index (clamped to [0, len]) or are appended when no
	index is given.
	"""
	resolution = resolve(document, operation.path)
	target = resolution.value if resolution.exists else None
	if target is None:
		raise PathNotFoundError(f"Target path does not exist: {operation.path}", path=operation.path)

	if isinstance(target, list):
		new_array = list(target)
		if operation.index is None:
			new_array.append(operation.value)
			message = 'Value added to array'
		else:
			index = min(max(operation.index, 0), len(new_array))
			new_array.insert(index, operation.value)
			message = f'Value added to array at index {index}'
		new_document = set_at(document, operation.path, new_array)
	elif isinstance(target, dict):
		if not operation.key:
			raise ShapeMismatchError('Key is required when adding to an object', path=operation.path)
		new_object = dict(target)
		new_object[operation.key] = operation.value
		new_document = set_at(document, operation.path, new_object)
		message = f'Value added with key "{operation.key}"'
	else:
		raise TypeMismatchError(
			f'Target must be an array or object, got {json_type_of(target)}', path=operation.path
		)

	return new_document, ToolResult(
		success=True, path=operation.path, value=operation.value, message=message, operation='add'
	)


def replace_first(current: str, old: Any, new: Any) -> str:
	"""Replace the first occurrence of old in current."""
	return current.replace(js_string(old), js_string(new), 1)


def handle_replace(document: Any, operation: Operation) -> HandlerResult:
	"""
	Replace a value outright, or a substring of a string value.

	Substring mode applies when the current value is a string and old_value
	is supplied; only the first occurrence is replaced.
	"""
	resolution = resolve(document, operation.path)
	if not resolution.exists:
		raise PathNotFoundError(f"Path does not exist: {operation.path}", path=operation.path)

	current = resolution.value
	if isinstance(current, str) and operation.old_value is not None:
		new_value = replace_first(current, operation.old_value, operation.value)
	else:
		new_value = operation.value

	new_document = set_at(document, operation.path, new_value)
	return new_document, ToolResult(
		success=True,
		path=operation.path,
		old_value=current,
		value=new_value,
		message='Value replaced',
		operation='replace',
	)


def handle_move(document: Any, operation: Operation) -> HandlerResult:
	"""
	Remove the value at from_path and write it at to_path.

	The destination is checked against the document as it looks after the
	removal; if it cannot be written the move fails and nothing is removed.
	"""
	source = resolve(document, operation.from_path)
	if not source.exists:
		raise PathNotFoundError(f"Source path does not exist: {operation.from_path}", path=operation.from_path)
	if source.root:
		raise ShapeMismatchError("Cannot move the document root", path=operation.from_path)

	without_source = remove_at(document, operation.from_path)
	if not can_set_at(without_source, operation.to_path):
		raise PathNotFoundError(
			f"Destination parent does not exist: {operation.to_path}", path=operation.to_path
		)

	new_document = set_at(without_source, operation.to_path, source.value)
	return new_document, ToolResult(
		success=True,
		path=operation.to_path,
		value=source.value,
		message=f'Value moved from {operation.from_path} to {operation.to_path}',
		operation='move',
	)


def handle_copy(document: Any, operation: Operation) -> HandlerResult:
	source = resolve(document, operation.from_path)
	if not source.exists:
		raise PathNotFoundError(f"Source path does not exist: {operation.from_path}", path=operation.from_path)
	if not can_set_at(document, operation.to_path):
		return document, ToolResult(
			success=True, path=operation.to_path, message=NOT_WRITTEN_MESSAGE, operation='copy'
		)

	# set_at stores a deep clone, so the copy shares nothing with the source
	new_document = set_at(document, operation.to_path, source.value)
	return new_document, ToolResult(
		success=True,
		path=operation.to_path,
		value=source.value,
		message=f'Value copied from {operation.from_path} to {operation.to_path}',
		operation='copy',
	)


def _evaluate_contains(value: Any, expected: Any) -> Tuple[bool, str]:
	if isinstance(value, list):
		found = any(strictly_equal(item, expected) for item in value)
		return found, 'Array contains value' if found else 'Array does not contain value'
	if isinstance(value, str):
		found = not isinstance(expected, (list, dict)) and js_string(expected) in value
		return found, 'String contains substring' if found else 'String does not contain substring'
	if isinstance(value, dict):
		found = (isinstance(expected, str) or is_number(expected)) and js_string(expected) in value
		return found, 'Object has key' if found else 'Object does not have key'
	return False, f'Cannot check containment in {json_type_of(value)}'


def evaluate_condition(exists: bool, value: Any, condition: Any, expected: Any) -> Tuple[bool, str]:
	"""Evaluate a test condition; malformed input yields False rather than an error."""
	if condition == TestCondition.EXISTS:
		return exists, 'Path exists' if exists else 'Path does not exist'

	if condition == TestCondition.EQUALS:
		result = exists and values_equal(value, expected)
		return result, 'Values are equal' if result else 'Values are not equal'

	if condition == TestCondition.TYPE:
		actual_type = json_type_of(value) if exists else 'undefined'
		result = exists and actual_type == expected
		return result, f'Type is {expected}' if result else f'Type is {actual_type}, not {expected}'

	if condition in (TestCondition.GREATER, TestCondition.LESS):
		comparable = exists and is_number(value) and is_number(expected)
		shown = js_string(value) if exists else 'undefined'
		if condition == TestCondition.GREATER:
			result = comparable and value > expected
			return result, f'{shown} > {js_string(expected)}' if result else f'{shown} <= {js_string(expected)}'
		result = comparable and value < expected
		return result, f'{shown} < {js_string(expected)}' if result else f'{shown} >= {js_string(expected)}'

	if condition == TestCondition.CONTAINS:
		if not exists:
			return False, 'Path does not exist'
		return _evaluate_contains(value, expected)

	return False, f'Unknown condition: {condition}'


def handle_test(document: Any, operation: Operation) -> HandlerResult:
	resolution = resolve(document, operation.path)
	test_result, message = evaluate_condition(
		resolution.exists, resolution.value, operation.condition, operation.value
	)
	return document, ToolResult(
		success=test_result,
		path=operation.path,
		value=resolution.value if resolution.exists else UNSET,
		message=message,
		test_result=test_result,
		operation='test',
	)


def _require(value: Any, expected: str, path: str):
	checks = {
		'string': lambda v: isinstance(v, str),
		'number': is_number,
		'array': lambda v: isinstance(v, list),
	}
	if not checks[expected](value):
		article = 'an' if expected[0] in 'aeiou' else 'a'
		raise TypeMismatchError(f'Value must be {article} {expected}, got {json_type_of(value)}', path=path)


def _numeric_parameter(parameter: Any, path: str) -> Any:
	if parameter is None:
		return 1
	if not is_number(parameter):
		raise TypeMismatchError(f'Parameter must be a number, got {json_type_of(parameter)}', path=path)
	return parameter


def flatten(items: List[Any], depth: float) -> List[Any]:
	"""Flatten nested arrays up to depth levels."""
	result = []
	for item in items:
		if isinstance(item, list) and depth >= 1:
			result.extend(flatten(item, depth - 1))
		else:
			result.append(item)
	return result


def unique(items: List[Any]) -> List[Any]:
	"""Drop repeated scalars, keeping first occurrences in order; objects and arrays are all kept."""
	seen = set()
	result = []
	for item in items:
		key = strict_key(item)
		if key is None:
			result.append(item)
			continue
		if key in seen:
			continue
		seen.add(key)
		result.append(item)
	return result


def _arithmetic(kind: TransformKind, current: Any, amount: Any) -> Any:
	if kind == TransformKind.INCREMENT:
		return current + amount
	if kind == TransformKind.DECREMENT:
		return current - amount
	if kind == TransformKind.MULTIPLY:
		return current * amount
	return current / amount


def _finite(result: Any, path: str) -> Any:
	"""Reject results JSON cannot represent (overflow to infinity, NaN)."""
	if isinstance(result, float) and not math.isfinite(result):
		raise ShapeMismatchError(f'Result is not a finite number: {result}', path=path)
	return normalize_number(result)


def apply_transform(kind: TransformKind, current: Any, parameter: Any, path: str) -> Any:
	"""Compute the transformed value; raises on type mismatch, a zero divisor or a non-finite result."""
	if kind in (TransformKind.UPPERCASE, TransformKind.LOWERCASE):
		_require(current, 'string', path)
		return current.upper() if kind == TransformKind.UPPERCASE else current.lower()

	if kind in (TransformKind.INCREMENT, TransformKind.DECREMENT, TransformKind.MULTIPLY, TransformKind.DIVIDE):
		_require(current, 'number', path)
		amount = _numeric_parameter(parameter, path)
		if kind == TransformKind.DIVIDE and amount == 0:
			raise ShapeMismatchError('Cannot divide by zero', path=path)
		try:
			result = _arithmetic(kind, current, amount)
		except OverflowError as e:
			raise ShapeMismatchError(f'Result is not a finite number: {e}', path=path) from e
		return _finite(result, path)

	_require(current, 'array', path)
	if kind == TransformKind.SORT:
		# Default ordering compares elements by their string form
		return sorted(current, key=js_string)
	if kind == TransformKind.REVERSE:
		return list(reversed(current))
	if kind == TransformKind.UNIQUE:
		return unique(current)
	if kind == TransformKind.FLATTEN:
		depth = _numeric_parameter(parameter, path)
		return flatten(current, depth)

	raise InvalidOperationError(f'Unknown operation: {kind}', path=path)


def handle_transform(document: Any, operation: Operation) -> HandlerResult:
	resolution = resolve(document, operation.path)
	if not resolution.exists:
		raise PathNotFoundError(f"Path does not exist: {operation.path}", path=operation.path)

	new_value = apply_transform(operation.transform, resolution.value, operation.value, operation.path)
	new_document = set_at(document, operation.path, new_value)
	return new_document, ToolResult(
		success=True,
		path=operation.path,
		old_value=resolution.value,
		value=new_value,
		message=f'Transformed with {operation.transform.value}',
		operation='transform',
	)


HANDLERS: Dict[OperationType, Callable[[Any, Operation], HandlerResult]] = {
	OperationType.READ: handle_read,
	OperationType.GET: handle_get,
	OperationType.SET: handle_set,
	OperationType.REMOVE: handle_remove,
	OperationType.ADD: handle_add,
	OperationType.REPLACE: handle_replace,
	OperationType.MOVE: handle_move,
	OperationType.COPY: handle_copy,
	OperationType.TEST: handle_test,
	OperationType.TRANSFORM: handle_transform,
}


def handle(document: Any, operation: Operation) -> HandlerResult:
	"""Dispatch an operation to its handler."""
	handler = HANDLERS.get(operation.operation)
	if handler is None:
		raise InvalidOperationError(f"No single-call handler for '{operation.operation.value}'")
	logger.debug("Handling %s", operation.describe())
	return handler(document, operation)
