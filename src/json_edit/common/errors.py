"""
Error taxonomy for JSON document edits.

Every failure the engine can report is a JsonEditError. Single tool calls turn
them into failure results; the batch executor records them per step.
"""

from typing import Optional


class JsonEditError(Exception):
	"""Base class for all engine errors."""

	def __init__(self, message: str, path: Optional[str] = None):
		super().__init__(message)
		self.message = message
		self.path = path


class DocumentInvalidError(JsonEditError):
	"""The source text could not be parsed as JSON."""


class PathNotFoundError(JsonEditError):
	"""A path the operation depends on does not exist."""


class TypeMismatchError(JsonEditError):
	"""The value at a path has the wrong runtime type for the operation."""


class ShapeMismatchError(JsonEditError):
	"""The operation parameters do not fit the target (missing key, zero divisor...)."""


class InvalidOperationError(JsonEditError):
	"""An operation descriptor is missing required fields or names an unknown verb."""


class UnknownToolError(JsonEditError):
	"""A tool call named a tool that is not registered."""
