"""
Configuration for json-edit, loaded from a JSON file.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict

from .common.serialization import DEFAULT_INDENT

DEFAULT_CONFIG_FILE = "json_edit.json"


@dataclass
class EditConfig:
	"""Output formatting options."""
	indent: int = DEFAULT_INDENT
	ensure_ascii: bool = False

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "EditConfig":
		"""Build a config, ignoring unknown keys and falling back to defaults for bad values."""
		config = cls()
		indent = data.get('indent', config.indent)
		if isinstance(indent, int) and not isinstance(indent, bool) and indent >= 0:
			config.indent = indent
		else:
			print(f"Ignoring invalid indent {indent!r}, using {config.indent}")
		config.ensure_ascii = bool(data.get('ensure_ascii', config.ensure_ascii))
		return config


def load_config(config_path: str) -> dict:
	"""Load configuration from a JSON file."""
	try:
		with open(config_path, 'r', encoding='utf-8') as f:
			data = json.load(f)
	except (FileNotFoundError, json.JSONDecodeError) as e:
		print(f"Error loading config file {config_path}: {e}")
		return {}
	if not isinstance(data, dict):
		print(f"Error loading config file {config_path}: expected a JSON object")
		return {}
	return data
