"""
Tool surface over a host-held JSON document.

The host supplies two callables: one returning the current document text and
one receiving new text. Every call reads the text fresh, parses it, applies a
single operation (or a batch) and, only if a mutating call succeeded, writes
the re-serialized document back. Nothing is cached between calls.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from pydantic import ValidationError

from .batch import BatchExecutor
from .common.errors import JsonEditError, UnknownToolError
from .common.operations import Operation, OperationType, WRITING_OPERATIONS
from .common.results import ToolResult
from .common.serialization import DEFAULT_INDENT, parse_document, stringify_document
from .handlers import handle
from .tool_schemas import TOOL_SCHEMAS

logger = logging.getLogger(__name__)


class JsonDocumentTools:
	"""Runs JSON operations against text supplied by a host."""

	def __init__(
		self,
		get_content: Callable[[], str],
		set_content: Callable[[str], None],
		indent: int = DEFAULT_INDENT,
		ensure_ascii: bool = False,
	):
		self.get_content = get_content
		self.set_content = set_content
		self.indent = indent
		self.ensure_ascii = ensure_ascii
		self.batch_executor = BatchExecutor()

	def execute(self, operation: Operation) -> Dict[str, Any]:
		"""
		Run one operation against the current document text.

		Returns:
			The result record as a dict; failures come back with success False
			and the document left untouched.
		"""
		op_name = operation.operation.value
		try:
			document = parse_document(self.get_content())
		except JsonEditError as e:
			logger.debug("Document rejected before %s: %s", op_name, e.message)
			return ToolResult.failure(e).to_dict()

		try:
			if operation.operation == OperationType.BATCH:
				new_document, result = self._run_batch(document, operation.operations)
			else:
				new_document, result = handle(document, operation)
			# Only valid JSON text reaches the host
			if result.success and operation.operation in WRITING_OPERATIONS:
				new_text = self._stringify(new_document)
				self.set_content(new_text)
		except JsonEditError as e:
			logger.debug("%s failed: %s", operation.describe(), e.message)
			return ToolResult.failure(e, operation=op_name).to_dict()

		return result.to_dict()

	def call(self, tool_name: str, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
		"""Validate tool-call parameters against the tool's schema and run it."""
		schema = TOOL_SCHEMAS.get(tool_name)
		if schema is None:
			return ToolResult.failure(UnknownToolError(f"Unknown tool: {tool_name}")).to_dict()
		try:
			validated = schema.params_model.model_validate(dict(params or {}))
			operation = validated.to_operation()
		except (ValidationError, TypeError, ValueError) as e:
			return ToolResult(success=False, error=f"Invalid parameters for {tool_name}: {e}").to_dict()
		except JsonEditError as e:
			return ToolResult.failure(e).to_dict()
		return self.execute(operation)

	def read_json(self) -> Dict[str, Any]:
		return self._build_and_execute(OperationType.READ)

	def get_value(self, path: str) -> Dict[str, Any]:
		return self._build_and_execute(OperationType.GET, path=path)

	def set_value(self, path: str, value: Any) -> Dict[str, Any]:
		return self._build_and_execute(OperationType.SET, path=path, value=value)

	def remove_value(self, path: str) -> Dict[str, Any]:
		return self._build_and_execute(OperationType.REMOVE, path=path)

	def add_value(self, path: str, value: Any, key: Optional[str] = None, index: Optional[int] = None) -> Dict[str, Any]:
		return self._build_and_execute(OperationType.ADD, path=path, value=value, key=key, index=index)

	def replace_value(self, path: str, new_value: Any, old_value: Any = None) -> Dict[str, Any]:
		return self._build_and_execute(OperationType.REPLACE, path=path, value=new_value, old_value=old_value)

	def move_value(self, from_path: str, to_path: str) -> Dict[str, Any]:
		return self._build_and_execute(OperationType.MOVE, from_path=from_path, to_path=to_path)

	def copy_value(self, from_path: str, to_path: str) -> Dict[str, Any]:
		return self._build_and_execute(OperationType.COPY, from_path=from_path, to_path=to_path)

	def test_value(self, path: str, condition: Optional[str] = None, value: Any = None) -> Dict[str, Any]:
		return self._build_and_execute(OperationType.TEST, path=path, condition=condition, value=value)

	def transform_value(self, path: str, operation: str, value: Any = None) -> Dict[str, Any]:
		return self._build_and_execute(OperationType.TRANSFORM, path=path, transform=operation, value=value)

	def batch_operations(self, operations: List[Any]) -> Dict[str, Any]:
		"""Run steps ({op, path, value?, from?, index?} or Operation) in order."""
		return self._build_and_execute(OperationType.BATCH, operations=list(operations))

	def _build_and_execute(self, operation_type: OperationType, **fields) -> Dict[str, Any]:
		try:
			operation = Operation(operation_type, **fields)
		except JsonEditError as e:
			return ToolResult.failure(e, operation=operation_type.value).to_dict()
		return self.execute(operation)

	def _run_batch(self, document: Any, steps: List[Any]):
		batch_result = self.batch_executor.apply(document, steps)
		logger.debug(
			"Batch finished: %d applied, %d failed", batch_result.applied_count, batch_result.failed_count
		)
		return batch_result.document, ToolResult(
			success=True,
			message=f'Executed {len(steps)} operations',
			content=[outcome.to_dict() for outcome in batch_result.outcomes],
			operation='batch',
		)

	def _stringify(self, document: Any) -> str:
		return stringify_document(document, indent=self.indent, ensure_ascii=self.ensure_ascii)
