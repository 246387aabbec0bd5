"""
Reads the package clause and import declarations of a Go source file.

Only the header of the file is inspected: the parse result is walked from the
top and the walk stops at the first declaration that is not an import.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from tree_sitter import Language, Node, Parser

from .errors import ImportReadError
from .model import GoFileHeader


@lru_cache(maxsize=1)
def go_language() -> Language:
	import tree_sitter_go as tsgo
	return Language(tsgo.language())


def _first_error(node: Node) -> Optional[Node]:
	if node.type == "ERROR" or node.is_missing:
		return node
	for child in node.children:
		if child.has_error or child.type == "ERROR" or child.is_missing:
			found = _first_error(child)
			if found is not None:
				return found
	return None


def _check(node: Node, path: str) -> None:
	if not (node.has_error or node.type == "ERROR" or node.is_missing):
		return
	bad = _first_error(node) or node
	what = f"missing {bad.type}" if bad.is_missing else "syntax error"
	raise ImportReadError(path, what, line=bad.start_point[0] + 1)


def _decode(node: Node, path: str, what: str) -> str:
	try:
		return node.text.decode("utf-8")
	except UnicodeDecodeError:
		raise ImportReadError(path, f"invalid UTF-8 in {what}", line=node.start_point[0] + 1) from None


def _literal(node: Node, path: str) -> str:
	# Quotes (or backticks) are dropped as-is; escapes are not interpreted.
	return _decode(node, path, "import path")[1:-1]


def _import_specs(decl: Node) -> List[Node]:
	specs: List[Node] = []
	for child in decl.named_children:
		if child.type == "import_spec":
			specs.append(child)
		elif child.type == "import_spec_list":
			specs.extend(c for c in child.named_children if c.type == "import_spec")
	return specs


TERMINATORS = {";", "\n", "\0"}


def parse_go_header(source: bytes, path: str) -> GoFileHeader:
	tree = Parser(go_language()).parse(source)
	root = tree.root_node

	package_name: Optional[str] = None
	imports: List[str] = []
	prev: Optional[Node] = None
	terminated = True

	for node in root.children:
		if node.type == "comment":
			continue
		if node.type in TERMINATORS:
			terminated = True
			continue

		# Declarations must be separated by a newline or ';'.
		if prev is not None and not terminated and node.start_point[0] == prev.end_point[0]:
			raise ImportReadError(path, "expected ';'", line=node.start_point[0] + 1)

		if package_name is None:
			if node.type != "package_clause":
				_check(node, path)
				raise ImportReadError(path, "expected 'package'", line=node.start_point[0] + 1)
			_check(node, path)
			ident = next((c for c in node.named_children if c.type == "package_identifier"), None)
			if ident is None:
				raise ImportReadError(path, "expected package name", line=node.start_point[0] + 1)
			package_name = _decode(ident, path, "package name")
			prev, terminated = node, False
			continue

		if node.type == "ERROR" and node.text.lstrip().startswith(b"import"):
			_check(node, path)

		if node.type != "import_declaration":
			break

		_check(node, path)
		for spec in _import_specs(node):
			imports.append(_literal(spec.child_by_field_name("path"), path))
		prev, terminated = node, False

	if package_name is None:
		raise ImportReadError(path, "expected 'package', found EOF")

	return GoFileHeader(package_name=package_name, imports=imports)


def read_go_header(path: str) -> GoFileHeader:
	try:
		with open(path, "rb") as fh:
			source = fh.read()
	except OSError as e:
		raise ImportReadError(path, e.strerror or str(e)) from e
	return parse_go_header(source, path)
