"""
Path-addressable JSON document editing.

Resolve, read, create, update, delete, move, copy, test and transform values
inside a JSON document by simplified JSONPath, one call at a time or in batches.
"""

from .batch import BatchExecutor, BatchResult
from .common.errors import (
	DocumentInvalidError,
	InvalidOperationError,
	JsonEditError,
	PathNotFoundError,
	ShapeMismatchError,
	TypeMismatchError,
	UnknownToolError,
)
from .common.operations import Operation, OperationType, TestCondition, TransformKind
from .common.path_resolver import Resolution, get_at, resolve
from .common.mutators import remove_at, set_at
from .text_edits import TextEditTools
from .tool_schemas import TOOL_SCHEMAS, get_all_tool_schemas
from .tools import JsonDocumentTools

__all__ = [
	'BatchExecutor',
	'BatchResult',
	'DocumentInvalidError',
	'InvalidOperationError',
	'JsonDocumentTools',
	'JsonEditError',
	'Operation',
	'OperationType',
	'PathNotFoundError',
	'Resolution',
	'ShapeMismatchError',
	'TOOL_SCHEMAS',
	'TestCondition',
	'TextEditTools',
	'TransformKind',
	'TypeMismatchError',
	'UnknownToolError',
	'get_all_tool_schemas',
	'get_at',
	'remove_at',
	'resolve',
	'set_at',
]
