"""
Engine for applying ordered batches of mutating operations.

Steps run against one evolving in-memory document. A failing step is
recorded and skipped; it never aborts the batch or rolls back earlier steps.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Union

from .common.errors import InvalidOperationError, JsonEditError
from .common.mutators import can_set_at, set_at
from .common.operations import MUTATING_OPERATIONS, Operation, OperationType
from .common.path_resolver import resolve
from .common.results import StepOutcome
from .handlers import NOT_WRITTEN_MESSAGE, handle_copy, handle_move, handle_remove, handle_set, replace_first

logger = logging.getLogger(__name__)

BatchStep = Union[Operation, Mapping[str, Any]]


@dataclass
class BatchResult:
	"""Final document plus one outcome per step, in order."""
	document: Any
	outcomes: List[StepOutcome] = field(default_factory=list)

	@property
	def applied_count(self) -> int:
		return sum(1 for outcome in self.outcomes if outcome.success)

	@property
	def failed_count(self) -> int:
		return sum(1 for outcome in self.outcomes if not outcome.success)


class BatchExecutor:
	"""Applies batch steps sequentially with per-step failure isolation."""

	def apply(self, document: Any, steps: List[BatchStep]) -> BatchResult:
		"""
		Apply steps in order against a running copy of the document.

		Args:
			document: Parsed JSON document; it is not modified.
			steps: Operations, or raw {op, path, value?, from?, index?} mappings.

		Returns:
			BatchResult with the final document and per-step outcomes.
		"""
		result = BatchResult(document=document)

		for position, step in enumerate(steps, start=1):
			try:
				operation = step if isinstance(step, Operation) else Operation.from_dict(step)
				if operation.operation not in MUTATING_OPERATIONS:
					raise InvalidOperationError(f"Unknown operation: {operation.operation.value}")
				result.document, outcome = self._apply_step(result.document, operation)
			except (JsonEditError, KeyError, TypeError, ValueError, IndexError) as e:
				message = e.message if isinstance(e, JsonEditError) else str(e)
				outcome = self._failed_outcome(step, message)
				logger.debug("Batch step %d failed: %s", position, message)
			else:
				logger.debug("Batch step %d applied: %s", position, operation.describe())
			result.outcomes.append(outcome)

		return result

	def _apply_step(self, document: Any, operation: Operation):
		op_name = operation.operation.value

		if operation.operation == OperationType.SET:
			new_document, _ = handle_set(document, operation)
			return new_document, StepOutcome(
				success=True, op=op_name, path=operation.path, note=_unwritten_note(document, operation.path)
			)

		if operation.operation == OperationType.REMOVE:
			new_document, _ = handle_remove(document, operation)
			return new_document, StepOutcome(success=True, op=op_name, path=operation.path)

		if operation.operation == OperationType.MOVE:
			new_document, _ = handle_move(document, operation)
			return new_document, StepOutcome(
				success=True, op=op_name, from_path=operation.from_path, to_path=operation.to_path
			)

		if operation.operation == OperationType.COPY:
			new_document, _ = handle_copy(document, operation)
			return new_document, StepOutcome(
				success=True,
				op=op_name,
				from_path=operation.from_path,
				to_path=operation.to_path,
				note=_unwritten_note(document, operation.to_path),
			)

		if operation.operation == OperationType.ADD:
			return self._apply_add(document, operation)

		return self._apply_replace(document, operation)

	def _apply_add(self, document: Any, operation: Operation):
		"""Insert into an array target; any other target is overwritten as with set."""
		resolution = resolve(document, operation.path)
		if resolution.exists and isinstance(resolution.value, list):
			new_array = list(resolution.value)
			if operation.index is None:
				new_array.append(operation.value)
			else:
				new_array.insert(min(max(operation.index, 0), len(new_array)), operation.value)
			return set_at(document, operation.path, new_array), StepOutcome(
				success=True, op='add', path=operation.path
			)

		return set_at(document, operation.path, operation.value), StepOutcome(
			success=True,
			op='add',
			path=operation.path,
			note=_unwritten_note(document, operation.path) or 'Used set for non-array target',
		)

	def _apply_replace(self, document: Any, operation: Operation):
		"""Substring replace on strings when a source substring is given, else overwrite."""
		current = resolve(document, operation.path)
		if current.exists and isinstance(current.value, str) and operation.old_value is not None:
			new_value = replace_first(current.value, operation.old_value, operation.value)
		else:
			new_value = operation.value

		return set_at(document, operation.path, new_value), StepOutcome(
			success=True, op='replace', path=operation.path, note=_unwritten_note(document, operation.path)
		)

	@staticmethod
	def _failed_outcome(step: BatchStep, message: str) -> StepOutcome:
		if isinstance(step, Operation):
			op_name = step.operation.value
			path, from_path, to_path = step.path, step.from_path, step.to_path
		elif isinstance(step, Mapping):
			op_name = str(step.get('op'))
			path = step.get('path')
			from_path = step.get('from') if op_name in ('move', 'copy') else None
			to_path = path if op_name in ('move', 'copy') else None
		else:
			op_name, path, from_path, to_path = str(step), None, None, None
		return StepOutcome(
			success=False, op=op_name, path=path, from_path=from_path, to_path=to_path, error=message
		)


def _unwritten_note(document: Any, path: str) -> Optional[str]:
	if can_set_at(document, path):
		return None
	return NOT_WRITTEN_MESSAGE
