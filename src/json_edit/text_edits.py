"""
Exact-string edit tools over host-held text.

These work on the raw text rather than the parsed document, so they can
repair content that does not parse as JSON yet.
"""

from typing import Callable, Dict, List, Mapping


def _ok(**data) -> Dict:
	return {'success': True, **data}


def _err(error: str, **data) -> Dict:
	return {'success': False, 'error': error, **data}


def _check_edit(content: str, old_string: str, new_string: str, replace_all: bool) -> str:
	"""Return an error message if the edit cannot be applied, else an empty string."""
	if old_string == new_string:
		return 'old_string and new_string must be different'
	if old_string not in content:
		return 'old_string not found in file'
	if not replace_all:
		occurrences = content.count(old_string)
		if occurrences > 1:
			return (
				f'old_string appears {occurrences} times. '
				'Use replace_all: true or provide a more specific string'
			)
	return ''


def _apply_edit(content: str, old_string: str, new_string: str, replace_all: bool) -> str:
	return content.replace(old_string, new_string) if replace_all else content.replace(old_string, new_string, 1)


class TextEditTools:
	"""Find-and-replace edits against text supplied by a host."""

	def __init__(self, get_content: Callable[[], str], set_content: Callable[[str], None]):
		self.get_content = get_content
		self.set_content = set_content

	def edit(self, old_string: str, new_string: str, replace_all: bool = False, explanation: str = '') -> Dict:
		"""
		Replace old_string with new_string.

		Unless replace_all is set, old_string must occur exactly once.
		"""
		content = self.get_content()
		error = _check_edit(content, old_string, new_string, replace_all)
		if error:
			return _err(error, explanation=explanation)

		self.set_content(_apply_edit(content, old_string, new_string, replace_all))
		return _ok(
			message=f'Successfully applied edit: {explanation}',
			changes='Replaced all occurrences' if replace_all else 'Replaced 1 occurrence',
			explanation=explanation,
		)

	def multi_edit(self, edits: List[Mapping], explanation: str = '') -> Dict:
		"""
		Apply several edits in order, all or nothing.

		Each edit sees the text produced by the previous ones. The first edit
		that cannot be applied aborts the call and nothing is written.
		"""
		content = self.get_content()
		results = []
		for number, edit in enumerate(edits, start=1):
			old_string = edit.get('old_string', '')
			new_string = edit.get('new_string', '')
			replace_all = bool(edit.get('replace_all', False))

			error = _check_edit(content, old_string, new_string, replace_all)
			if error:
				if error == 'old_string not found in file':
					error = 'old_string not found in current content'
				return _err(f'Edit {number}: {error}', explanation=explanation, completedEdits=number - 1)

			content = _apply_edit(content, old_string, new_string, replace_all)
			results.append(f"Edit {number}: {'Replaced all occurrences' if replace_all else 'Replaced 1 occurrence'}")

		self.set_content(content)
		return _ok(
			message=f'Successfully applied {len(edits)} edits: {explanation}',
			results=results,
			explanation=explanation,
		)

	def read_file(self) -> Dict:
		content = self.get_content()
		return _ok(content=content, lines=len(content.split('\n')))
