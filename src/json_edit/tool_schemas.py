"""
Parameter schemas for the JSON tools, as exposed to a tool-calling agent.

Each tool has a pydantic model describing its parameters. Field aliases keep
the wire names agents send (newValue, oldValue, from); Python names work too.
"""

from abc import abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Type

from pydantic import BaseModel, ConfigDict, Field

from .common.operations import Operation

ConditionName = Literal['exists', 'equals', 'type', 'greater', 'less', 'contains']
TransformName = Literal[
	'uppercase', 'lowercase', 'increment', 'decrement', 'multiply', 'divide', 'sort', 'reverse', 'unique',
	'flatten'
]
BatchOpName = Literal['set', 'remove', 'add', 'replace', 'move', 'copy']


class WireModel(BaseModel):
	"""Accepts both wire aliases and Python field names."""
	model_config = ConfigDict(populate_by_name=True)


class ToolParams(WireModel):
	"""Base for tool parameter models; each tool converts its parameters to an Operation."""

	@abstractmethod
	def to_operation(self) -> Operation:
		pass


class ReadJsonParams(ToolParams):

	def to_operation(self) -> Operation:
		return Operation.read()


class GetValueParams(ToolParams):
	path: str = Field(description='JSONPath to the value. Examples: "$.name", "$.config.port", "$.items[0]"')

	def to_operation(self) -> Operation:
		return Operation.get(self.path)


class SetValueParams(ToolParams):
	path: str = Field(description='JSONPath where to set the value. Examples: "$.config.port", "$.items[2]"')
	value: Any = Field(description='The value to set. Any JSON type: string, number, boolean, object, array, or null')

	def to_operation(self) -> Operation:
		return Operation.set(self.path, self.value)


class RemoveValueParams(ToolParams):
	path: str = Field(description='JSONPath to remove. Examples: "$.oldField", "$.items[1]"')

	def to_operation(self) -> Operation:
		return Operation.remove(self.path)


class AddValueParams(ToolParams):
	path: str = Field(description='JSONPath to the target object or array. Examples: "$.config", "$.users"')
	value: Any = Field(description='The value to add. Any JSON type')
	key: Optional[str] = Field(
		default=None, description='Property name when adding to an object. Required for objects, ignored for arrays.'
	)
	index: Optional[int] = Field(
		default=None, ge=0, description='Position to insert in an array (0-based). Omit to append.'
	)

	def to_operation(self) -> Operation:
		return Operation.add(self.path, self.value, key=self.key, index=self.index)


class ReplaceValueParams(ToolParams):
	path: str = Field(description='JSONPath to the value to replace. Examples: "$.description", "$.version"')
	new_value: Any = Field(alias='newValue', description='The new value to set')
	old_value: Any = Field(
		default=None,
		alias='oldValue',
		description='For strings: the substring to replace. Only the first occurrence is replaced.',
	)

	def to_operation(self) -> Operation:
		return Operation.replace(self.path, self.new_value, old_value=self.old_value)


class MoveValueParams(ToolParams):
	from_path: str = Field(alias='from', description='Source JSONPath to move from. Example: "$.temp.data"')
	to_path: str = Field(alias='to', description='Destination JSONPath to move to. Example: "$.permanent.data"')

	def to_operation(self) -> Operation:
		return Operation.move(self.from_path, self.to_path)


class CopyValueParams(ToolParams):
	from_path: str = Field(alias='from', description='Source JSONPath to copy from. Example: "$.template"')
	to_path: str = Field(alias='to', description='Destination JSONPath to copy to. Example: "$.instances[0]"')

	def to_operation(self) -> Operation:
		return Operation.copy(self.from_path, self.to_path)


class TestValueParams(ToolParams):
	__test__ = False

	path: str = Field(description='JSONPath to test. Examples: "$.config.enabled", "$.stats.count"')
	condition: Optional[ConditionName] = Field(default=None, description='Test condition. Default: "exists".')
	value: Any = Field(
		default=None,
		description='Value to test against. For "type" use one of: string, number, boolean, object, array, null.',
	)

	def to_operation(self) -> Operation:
		return Operation.test(self.path, condition=self.condition, value=self.value)


class TransformValueParams(ToolParams):
	path: str = Field(description='JSONPath to the value to transform. Examples: "$.title", "$.count", "$.tags"')
	operation: TransformName = Field(description='Transform to apply')
	value: Any = Field(
		default=None,
		description='Operation parameter: amount for increment/decrement, factor for multiply/divide (default 1), '
		'depth for flatten (default 1).',
	)

	def to_operation(self) -> Operation:
		return Operation.transform_value(self.path, self.operation, value=self.value)


class BatchStepParams(WireModel):
	op: BatchOpName = Field(description='Operation type')
	path: str = Field(description='Target JSONPath for the operation (destination for move/copy)')
	value: Any = Field(default=None, description='Value for set/add/replace operations')
	from_path: Optional[str] = Field(
		default=None, alias='from', description='Source path for move/copy, or the substring to replace for replace'
	)
	index: Optional[int] = Field(default=None, description='Array index for add operation')

	def to_wire(self) -> Dict[str, Any]:
		return self.model_dump(by_alias=True, exclude_none=True)


class BatchOperationsParams(ToolParams):
	operations: List[BatchStepParams] = Field(description='Operations to execute in sequence')

	def to_operation(self) -> Operation:
		return Operation.batch([step.to_wire() for step in self.operations])


@dataclass
class ToolSchema:
	"""A tool's name, description and parameter model."""
	name: str
	description: str
	params_model: Type[ToolParams]

	def to_dict(self) -> dict:
		return {
			'name': self.name,
			'description': self.description,
			'parameters': self.params_model.model_json_schema(by_alias=True),
		}


TOOL_SCHEMAS: Dict[str, ToolSchema] = {
	schema.name: schema for schema in [
		ToolSchema(
			'read_json',
			'Read and parse the entire JSON document. Use this to understand the structure before making changes.',
			ReadJsonParams,
		),
		ToolSchema(
			'get_value',
			'Retrieve the value at a JSONPath. Supports nested objects ($.config.port) and array access '
			'($.items[0]). Returns the value and whether the path exists.',
			GetValueParams,
		),
		ToolSchema(
			'set_value',
			'Set or update a value at a JSONPath. Creates the final key if it does not exist; the parent must exist.',
			SetValueParams,
		),
		ToolSchema(
			'remove_value',
			'Remove an object property or array element at a JSONPath. Removing an array element shifts later '
			'elements down. Fails if the path does not exist.',
			RemoveValueParams,
		),
		ToolSchema(
			'add_value',
			'Add a value to an object (as a new property named by "key") or to an array (append, or insert at '
			'"index").',
			AddValueParams,
		),
		ToolSchema(
			'replace_value',
			'Replace a value at a path. For strings, provide oldValue to replace the first occurrence of that '
			'substring; otherwise the value is replaced with newValue.',
			ReplaceValueParams,
		),
		ToolSchema(
			'move_value',
			'Move a value from one JSONPath to another. The source is removed and the value is written at the '
			'destination.',
			MoveValueParams,
		),
		ToolSchema(
			'copy_value',
			'Copy a value from one JSONPath to another. The source is left intact and a deep clone is written at '
			'the destination.',
			CopyValueParams,
		),
		ToolSchema(
			'test_value',
			'Test a condition on the value at a JSONPath: exists, equals, type, greater, less or contains. '
			'Returns success: true if the condition holds.',
			TestValueParams,
		),
		ToolSchema(
			'transform_value',
			'Transform the value at a JSONPath. Strings: uppercase, lowercase. Numbers: increment, decrement, '
			'multiply, divide. Arrays: sort, reverse, unique, flatten.',
			TransformValueParams,
		),
		ToolSchema(
			'batch_operations',
			'Execute several set/remove/add/replace/move/copy operations in sequence. A failing operation is '
			'reported and skipped; the remaining operations still run.',
			BatchOperationsParams,
		),
	]
}


def get_all_tool_schemas() -> List[dict]:
	"""Return every tool schema as {name, description, parameters}."""
	return [schema.to_dict() for schema in TOOL_SCHEMAS.values()]
