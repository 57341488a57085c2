"""
Data model for JSON edit operations.

Operations are declarative data objects describing a read or a change at a
path. Each verb's required fields are checked when the operation is built, so
a handler never sees a half-specified operation.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Union

from .errors import InvalidOperationError


class OperationType(Enum):
	"""Verbs understood by the engine."""
	READ = "read"
	GET = "get"
	SET = "set"
	REMOVE = "remove"
	ADD = "add"
	REPLACE = "replace"
	MOVE = "move"
	COPY = "copy"
	TEST = "test"
	TRANSFORM = "transform"
	BATCH = "batch"


# Verbs allowed as batch steps
MUTATING_OPERATIONS = frozenset(
	[
		OperationType.SET,
		OperationType.REMOVE,
		OperationType.ADD,
		OperationType.REPLACE,
		OperationType.MOVE,
		OperationType.COPY,
	]
)

# Verbs whose successful result is written back to the document
WRITING_OPERATIONS = MUTATING_OPERATIONS | {OperationType.TRANSFORM, OperationType.BATCH}

_PATH_OPERATIONS = frozenset(
	[
		OperationType.GET,
		OperationType.SET,
		OperationType.REMOVE,
		OperationType.ADD,
		OperationType.REPLACE,
		OperationType.TEST,
		OperationType.TRANSFORM,
	]
)


class TestCondition(Enum):
	"""Conditions checked by the test verb."""
	__test__ = False

	EXISTS = "exists"
	EQUALS = "equals"
	TYPE = "type"
	GREATER = "greater"
	LESS = "less"
	CONTAINS = "contains"


class TransformKind(Enum):
	"""In-place value transformations."""
	UPPERCASE = "uppercase"
	LOWERCASE = "lowercase"
	INCREMENT = "increment"
	DECREMENT = "decrement"
	MULTIPLY = "multiply"
	DIVIDE = "divide"
	SORT = "sort"
	REVERSE = "reverse"
	UNIQUE = "unique"
	FLATTEN = "flatten"


@dataclass
class Operation:
	"""
	A single operation against a JSON document.

	Fields used per verb:
		get, remove: path
		set: path, value
		add: path, value, key (objects), index (arrays)
		replace: path, value (the new value), old_value (substring to replace)
		move, copy: from_path, to_path
		test: path, condition (default exists), value
		transform: path, transform, value (operation parameter)
		batch: operations
	"""
	operation: OperationType
	path: Optional[str] = None
	value: Any = None
	key: Optional[str] = None
	index: Optional[int] = None
	old_value: Any = None
	from_path: Optional[str] = None
	to_path: Optional[str] = None
	condition: Union[TestCondition, str, None] = None
	transform: Optional[TransformKind] = None
	operations: List[Any] = field(default_factory=list)

	def __post_init__(self):
		if not isinstance(self.operation, OperationType):
			self.operation = _coerce_operation_type(self.operation)

		if self.operation in _PATH_OPERATIONS and not isinstance(self.path, str):
			raise InvalidOperationError(f"'{self.operation.value}' requires a path")

		if self.operation in (OperationType.MOVE, OperationType.COPY):
			if not isinstance(self.from_path, str) or not isinstance(self.to_path, str):
				raise InvalidOperationError(f"'{self.operation.value}' requires both from and to paths")

		if self.index is not None and (isinstance(self.index, bool) or not isinstance(self.index, int)):
			raise InvalidOperationError(f"index must be an integer, got {self.index!r}")

		if self.key is not None and not isinstance(self.key, str):
			raise InvalidOperationError(f"key must be a string, got {self.key!r}")

		if self.operation == OperationType.TEST:
			# Unknown conditions are kept as-is: a test never fails to build, it just evaluates to False
			if self.condition is None:
				self.condition = TestCondition.EXISTS
			elif not isinstance(self.condition, TestCondition):
				try:
					self.condition = TestCondition(self.condition)
				except ValueError:
					pass

		if self.operation == OperationType.TRANSFORM and not isinstance(self.transform, TransformKind):
			try:
				self.transform = TransformKind(self.transform)
			except ValueError:
				raise InvalidOperationError(f"Unknown operation: {self.transform}", path=self.path) from None

		if self.operation == OperationType.BATCH:
			if not isinstance(self.operations, list):
				raise InvalidOperationError("'batch' requires a list of operations")

	@classmethod
	def read(cls) -> "Operation":
		return cls(OperationType.READ)

	@classmethod
	def get(cls, path: str) -> "Operation":
		return cls(OperationType.GET, path=path)

	@classmethod
	def set(cls, path: str, value: Any) -> "Operation":
		return cls(OperationType.SET, path=path, value=value)

	@classmethod
	def remove(cls, path: str) -> "Operation":
		return cls(OperationType.REMOVE, path=path)

	@classmethod
	def add(cls, path: str, value: Any, key: Optional[str] = None, index: Optional[int] = None) -> "Operation":
		return cls(OperationType.ADD, path=path, value=value, key=key, index=index)

	@classmethod
	def replace(cls, path: str, new_value: Any, old_value: Any = None) -> "Operation":
		return cls(OperationType.REPLACE, path=path, value=new_value, old_value=old_value)

	@classmethod
	def move(cls, from_path: str, to_path: str) -> "Operation":
		return cls(OperationType.MOVE, from_path=from_path, to_path=to_path)

	@classmethod
	def copy(cls, from_path: str, to_path: str) -> "Operation":
		return cls(OperationType.COPY, from_path=from_path, to_path=to_path)

	@classmethod
	def test(cls, path: str, condition: Union[TestCondition, str, None] = None, value: Any = None) -> "Operation":
		return cls(OperationType.TEST, path=path, condition=condition, value=value)

	@classmethod
	def transform_value(cls, path: str, transform: Union[TransformKind, str], value: Any = None) -> "Operation":
		return cls(OperationType.TRANSFORM, path=path, transform=transform, value=value)

	@classmethod
	def batch(cls, operations: List[Any]) -> "Operation":
		"""Steps may be Operations or raw {op, path, ...} mappings."""
		return cls(OperationType.BATCH, operations=list(operations))

	@classmethod
	def from_dict(cls, data: Mapping[str, Any]) -> "Operation":
		"""
		Build a batch step from its wire form: {op, path, value?, from?, index?}.

		For move/copy "from" is the source and "path" the destination; for
		replace "from" is the substring to replace.
		"""
		if not isinstance(data, Mapping):
			raise InvalidOperationError(f"Batch step must be an object, got {type(data).__name__}")
		operation_type = _coerce_operation_type(data.get("op"))
		if operation_type not in MUTATING_OPERATIONS:
			raise InvalidOperationError(f"Unknown operation: {data.get('op')}")

		if operation_type in (OperationType.MOVE, OperationType.COPY):
			return cls(operation_type, from_path=data.get("from"), to_path=data.get("path"))
		if operation_type == OperationType.REPLACE:
			return cls(operation_type, path=data.get("path"), value=data.get("value"), old_value=data.get("from"))
		return cls(operation_type, path=data.get("path"), value=data.get("value"), index=data.get("index"))

	def describe(self) -> str:
		"""One-line human-readable summary of the operation."""
		verb = self.operation.value
		if self.operation in (OperationType.MOVE, OperationType.COPY):
			return f"{verb} {self.from_path} -> {self.to_path}"
		if self.operation == OperationType.TRANSFORM:
			return f"{verb} {self.path} ({self.transform.value})"
		if self.operation == OperationType.TEST:
			condition = self.condition.value if isinstance(self.condition, TestCondition) else self.condition
			return f"{verb} {self.path} ({condition})"
		if self.operation == OperationType.BATCH:
			return f"{verb} of {len(self.operations)} operations"
		if self.path is None:
			return verb
		return f"{verb} {self.path}"


def _coerce_operation_type(raw: Any) -> OperationType:
	try:
		return OperationType(raw)
	except ValueError:
		raise InvalidOperationError(f"Unknown operation: {raw}") from None
