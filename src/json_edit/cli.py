"""
Command-line interface for json-edit.
"""

import json
import logging
import sys
import argparse
from importlib.metadata import version, PackageNotFoundError
from pathlib import Path
from typing import Any, Dict, List

from .config import DEFAULT_CONFIG_FILE, EditConfig, load_config
from .text_edits import TextEditTools
from .tools import JsonDocumentTools


def get_version() -> str:
	"""Get package version, with fallback for development/testing."""
	try:
		return version('json-edit')
	except PackageNotFoundError:
		return 'dev'


def parse_value(text: str) -> Any:
	"""Read a command-line value as JSON, falling back to the raw string."""
	try:
		return json.loads(text)
	except json.JSONDecodeError:
		return text


def resolve_config(config_path: str = None) -> EditConfig:
	"""Load the config file given on the command line, or the default one if present."""
	if config_path:
		return EditConfig.from_dict(load_config(config_path))
	if Path(DEFAULT_CONFIG_FILE).exists():
		return EditConfig.from_dict(load_config(DEFAULT_CONFIG_FILE))
	return EditConfig()


def read_batch_steps(source: str) -> List[Dict[str, Any]]:
	"""Read batch steps from a JSON file, or stdin when source is '-'."""
	if source == '-':
		text = sys.stdin.read()
	else:
		text = Path(source).read_text(encoding='utf-8')
	steps = json.loads(text)
	if isinstance(steps, dict) and 'operations' in steps:
		steps = steps['operations']
	if not isinstance(steps, list):
		raise ValueError("batch file must contain a list of operations")
	return steps


def run_command(args, tools: JsonDocumentTools, text_tools: TextEditTools) -> Dict[str, Any]:
	"""Dispatch the parsed command to the matching tool."""
	command = args.command
	if command == 'read':
		return tools.read_json()
	if command == 'get':
		return tools.get_value(args.path)
	if command == 'set':
		return tools.set_value(args.path, parse_value(args.value))
	if command == 'remove':
		return tools.remove_value(args.path)
	if command == 'add':
		return tools.add_value(args.path, parse_value(args.value), key=args.key, index=args.index)
	if command == 'replace':
		old_value = args.old if args.old is None else parse_value(args.old)
		return tools.replace_value(args.path, parse_value(args.new_value), old_value=old_value)
	if command == 'move':
		return tools.move_value(args.from_path, args.to_path)
	if command == 'copy':
		return tools.copy_value(args.from_path, args.to_path)
	if command == 'test':
		value = args.value if args.value is None else parse_value(args.value)
		return tools.test_value(args.path, condition=args.condition, value=value)
	if command == 'transform':
		value = args.value if args.value is None else parse_value(args.value)
		return tools.transform_value(args.path, args.operation, value=value)
	if command == 'batch':
		return tools.batch_operations(read_batch_steps(args.operations_file))
	if command == 'edit':
		return text_tools.edit(args.old_string, args.new_string, replace_all=args.replace_all)
	raise ValueError(f"Unknown command: {command}")


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(description="Read and edit JSON files by path")
	parser.add_argument(
		"--version",
		action="version",
		version=f"%(prog)s {get_version()}",
	)
	parser.add_argument(
		"--config",
		help=f"Path to configuration JSON file (default: {DEFAULT_CONFIG_FILE} if present)",
	)
	parser.add_argument(
		"--dry-run",
		action="store_true",
		help="Show the result and resulting document without writing the file",
	)
	parser.add_argument(
		"--verbose",
		"-v",
		action="store_true",
		help="Log each operation and batch step",
	)
	parser.add_argument("file", help="JSON file to read or edit")

	subparsers = parser.add_subparsers(dest="command", required=True)

	subparsers.add_parser("read", help="Print the whole document")

	get_parser = subparsers.add_parser("get", help="Get the value at a path")
	get_parser.add_argument("path")

	set_parser = subparsers.add_parser("set", help="Create or overwrite the value at a path")
	set_parser.add_argument("path")
	set_parser.add_argument("value", help="JSON value (bare text is taken as a string)")

	remove_parser = subparsers.add_parser("remove", help="Remove the value at a path")
	remove_parser.add_argument("path")

	add_parser = subparsers.add_parser("add", help="Add to an array or object")
	add_parser.add_argument("path")
	add_parser.add_argument("value")
	add_parser.add_argument("--key", help="Property name when the target is an object")
	add_parser.add_argument("--index", type=int, help="Insert position when the target is an array")

	replace_parser = subparsers.add_parser("replace", help="Replace a value or a substring of it")
	replace_parser.add_argument("path")
	replace_parser.add_argument("new_value")
	replace_parser.add_argument("--old", help="Substring to replace (first occurrence only)")

	move_parser = subparsers.add_parser("move", help="Move a value to another path")
	move_parser.add_argument("from_path")
	move_parser.add_argument("to_path")

	copy_parser = subparsers.add_parser("copy", help="Copy a value to another path")
	copy_parser.add_argument("from_path")
	copy_parser.add_argument("to_path")

	test_parser = subparsers.add_parser("test", help="Test a condition on the value at a path")
	test_parser.add_argument("path")
	test_parser.add_argument(
		"--condition",
		choices=["exists", "equals", "type", "greater", "less", "contains"],
		default="exists",
	)
	test_parser.add_argument("--value", help="Value to test against")

	transform_parser = subparsers.add_parser("transform", help="Transform the value at a path")
	transform_parser.add_argument("path")
	transform_parser.add_argument(
		"operation",
		choices=[
			"uppercase", "lowercase", "increment", "decrement", "multiply", "divide", "sort", "reverse", "unique",
			"flatten"
		],
	)
	transform_parser.add_argument("--value", help="Amount, factor or flatten depth")

	batch_parser = subparsers.add_parser("batch", help="Apply a list of operations from a JSON file")
	batch_parser.add_argument("operations_file", help="JSON file with a list of operations, or - for stdin")

	edit_parser = subparsers.add_parser("edit", help="Replace exact text in the file")
	edit_parser.add_argument("old_string")
	edit_parser.add_argument("new_string")
	edit_parser.add_argument("--replace-all", action="store_true", help="Replace every occurrence")

	return parser


def main(argv: List[str] = None):
	"""Main function to read and edit a JSON file by path."""
	parser = build_parser()
	args = parser.parse_args(argv)

	if args.verbose:
		logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

	config = resolve_config(args.config)

	file_path = Path(args.file)
	try:
		original_text = file_path.read_text(encoding='utf-8')
	except (FileNotFoundError, PermissionError, OSError) as e:
		print(f"❌ Error reading file {file_path}: {e}")
		sys.exit(1)

	written: List[str] = []
	tools = JsonDocumentTools(
		lambda: original_text, written.append, indent=config.indent, ensure_ascii=config.ensure_ascii
	)
	text_tools = TextEditTools(lambda: original_text, written.append)

	try:
		result = run_command(args, tools, text_tools)
	except (OSError, ValueError) as e:
		print(f"❌ {e}")
		sys.exit(1)

	print(json.dumps(result, indent=2, ensure_ascii=False))

	if written:
		new_text = written[-1]
		if args.dry_run:
			print("\n🔍 Dry run, file not written. Resulting document:")
			print(new_text)
		else:
			if args.command != "edit" and not new_text.endswith("\n"):
				new_text += "\n"
			file_path.write_text(new_text, encoding="utf-8")
			if args.verbose:
				print(f"\n📝 Wrote {file_path}")

	sys.exit(0 if result.get('success') else 1)


if __name__ == "__main__":
	main()
