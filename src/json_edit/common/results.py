"""
Result records returned by tool calls and batch steps.
"""

from dataclasses import dataclass
from typing import Any, Optional

from .errors import JsonEditError


class _Unset:
	"""Marks a result field that was never filled in (distinct from JSON null)."""

	def __repr__(self):
		return "UNSET"


UNSET = _Unset()


@dataclass
class ToolResult:
	"""
	Outcome of a single tool call.

	Only success is always present in the serialized form; value-like fields
	use UNSET so that a JSON null value still round-trips.
	"""
	success: bool
	message: Optional[str] = None
	error: Optional[str] = None
	operation: Optional[str] = None
	path: Optional[str] = None
	content: Any = UNSET
	value: Any = UNSET
	old_value: Any = UNSET
	exists: Optional[bool] = None
	test_result: Optional[bool] = None

	@classmethod
	def failure(cls, error: JsonEditError, operation: Optional[str] = None) -> "ToolResult":
		"""Build a failed result from an engine error."""
		return cls(success=False, error=error.message, path=error.path, operation=operation)

	def to_dict(self) -> dict:
		"""Convert to the wire shape, omitting unset fields."""
		data = {'success': self.success}
		optional_fields = [
			('message', self.message),
			('error', self.error),
			('path', self.path),
			('content', self.content),
			('value', self.value),
			('oldValue', self.old_value),
			('exists', self.exists),
			('testResult', self.test_result),
			('operation', self.operation),
		]
		for name, field_value in optional_fields:
			if field_value is UNSET:
				continue
			if field_value is None and name not in ('content', 'value', 'oldValue'):
				continue
			data[name] = field_value
		return data


@dataclass
class StepOutcome:
	"""Record of one batch step, applied or failed."""
	success: bool
	op: str
	path: Optional[str] = None
	from_path: Optional[str] = None
	to_path: Optional[str] = None
	error: Optional[str] = None
	note: Optional[str] = None

	def to_dict(self) -> dict:
		data = {'success': self.success, 'op': self.op}
		if self.from_path is not None or self.to_path is not None:
			data['from'] = self.from_path
			data['to'] = self.to_path
		elif self.path is not None:
			data['path'] = self.path
		if self.error:
			data['error'] = self.error
		if self.note:
			data['note'] = self.note
		return data
