"""
Default platform applicability check for Go files.

Decides whether a file takes part in the build for the configured GOOS,
GOARCH and tags, following the rules the Go toolchain applies:

- file name conventions (``_test``, ``_GOOS``, ``_GOARCH`` suffixes),
- ``//go:build`` expressions, or legacy ``// +build`` lines,
- cgo files (``import "C"``) when cgo is disabled.
"""

from __future__ import annotations

import logging
import os
import re
from typing import Callable, List, Optional, Set

from .config import ImporterConfig
from .errors import BuildConstraintError, ImportReadError

_LOG = logging.getLogger("goanalyzer.constraints")

KNOWN_OS: Set[str] = {
	"aix", "android", "darwin", "dragonfly", "freebsd", "hurd", "illumos",
	"ios", "js", "linux", "nacl", "netbsd", "openbsd", "plan9", "solaris",
	"wasip1", "windows", "zos",
}

UNIX_OS: Set[str] = {
	"aix", "android", "darwin", "dragonfly", "freebsd", "hurd", "illumos",
	"ios", "linux", "netbsd", "openbsd", "solaris",
}

KNOWN_ARCH: Set[str] = {
	"386", "amd64", "amd64p32", "arm", "armbe", "arm64", "arm64be", "loong64",
	"mips", "mipsle", "mips64", "mips64le", "mips64p32", "mips64p32le", "ppc",
	"ppc64", "ppc64le", "riscv", "riscv64", "s390", "s390x", "sparc", "sparc64",
	"wasm",
}

_TAG = re.compile(r"[A-Za-z0-9_.]+")
_EXPR_TOKEN = re.compile(r"\s*(\|\||&&|!|\(|\)|[A-Za-z0-9_.]+)")
_CGO_IMPORT = re.compile(rb'^\s*import\s+"C"\s*(//.*)?$', re.MULTILINE)


class _ExprParser:
	"""Recursive-descent evaluator for ``//go:build`` expressions."""

	def __init__(self, text: str, has_tag: Callable[[str], bool], path: str):
		self.text = text
		self.has_tag = has_tag
		self.path = path
		self.tokens = self._tokenize(text)
		self.pos = 0

	def _tokenize(self, text: str) -> List[str]:
		tokens: List[str] = []
		i = 0
		text = text.rstrip()
		while i < len(text):
			m = _EXPR_TOKEN.match(text, i)
			if not m:
				raise BuildConstraintError(self.path, f"invalid //go:build expression: {text!r}")
			tokens.append(m.group(1))
			i = m.end()
		return tokens

	def _peek(self) -> Optional[str]:
		return self.tokens[self.pos] if self.pos < len(self.tokens) else None

	def _next(self) -> Optional[str]:
		tok = self._peek()
		self.pos += 1
		return tok

	def _fail(self, why: str) -> BuildConstraintError:
		return BuildConstraintError(self.path, f"invalid //go:build expression {self.text!r}: {why}")

	def evaluate(self) -> bool:
		if not self.tokens:
			raise self._fail("empty expression")
		value = self._or()
		if self._peek() is not None:
			raise self._fail(f"unexpected {self._peek()!r}")
		return value

	# Both operands are always parsed so that syntax errors surface regardless of values.
	def _or(self) -> bool:
		value = self._and()
		while self._peek() == "||":
			self._next()
			rhs = self._and()
			value = value or rhs
		return value

	def _and(self) -> bool:
		value = self._not()
		while self._peek() == "&&":
			self._next()
			rhs = self._not()
			value = value and rhs
		return value

	def _not(self) -> bool:
		if self._peek() == "!":
			self._next()
			return not self._not()
		return self._atom()

	def _atom(self) -> bool:
		tok = self._next()
		if tok == "(":
			value = self._or()
			if self._next() != ")":
				raise self._fail("missing )")
			return value
		if tok is None:
			raise self._fail("unexpected end of expression")
		if not _TAG.fullmatch(tok):
			raise self._fail(f"unexpected {tok!r}")
		return self.has_tag(tok)


def _header_lines(source: bytes) -> List[str]:
	"""Leading lines of the file up to (not including) the package clause."""
	lines: List[str] = []
	in_block = False
	for raw in source.decode("utf-8", errors="replace").splitlines():
		line = raw.strip()
		if in_block:
			if "*/" in line:
				in_block = False
			lines.append("")
			continue
		if line.startswith("/*"):
			in_block = "*/" not in line[2:]
			lines.append("")
			continue
		if line == "" or line.startswith("//"):
			lines.append(line)
			continue
		break
	return lines


class BuildMatcher:
	def __init__(self, config: ImporterConfig):
		self.config = config

	def match_tag(self, name: str) -> bool:
		cfg = self.config
		if name == "cgo":
			return cfg.cgo_enabled
		if name in (cfg.goos, cfg.goarch, cfg.compiler):
			return True
		if cfg.goos == "android" and name == "linux":
			return True
		if cfg.goos == "illumos" and name == "solaris":
			return True
		if cfg.goos == "ios" and name == "darwin":
			return True
		if name == "unix" and cfg.goos in UNIX_OS:
			return True
		return name in cfg.build_tags or name in cfg.release_tags

	def good_os_arch_file(self, name: str) -> bool:
		stem = name.split(".", 1)[0]
		i = stem.find("_")
		if i < 0:
			return True
		parts = stem[i:].split("_")
		if parts and parts[-1] == "test":
			parts = parts[:-1]
		n = len(parts)
		if n >= 2 and parts[n - 2] in KNOWN_OS and parts[n - 1] in KNOWN_ARCH:
			return self.match_tag(parts[n - 2]) and self.match_tag(parts[n - 1])
		if n >= 1 and (parts[n - 1] in KNOWN_OS or parts[n - 1] in KNOWN_ARCH):
			return self.match_tag(parts[n - 1])
		return True

	def _plus_build_line(self, line: str, path: str) -> bool:
		for option in line.split():
			ok = True
			for term in option.split(","):
				negated = term.startswith("!")
				tag = term[1:] if negated else term
				if not _TAG.fullmatch(tag):
					raise BuildConstraintError(path, f"invalid +build term {term!r}")
				if self.match_tag(tag) == negated:
					ok = False
			if ok:
				return True
		return False

	def should_build(self, source: bytes, path: str) -> bool:
		lines = _header_lines(source)

		# Constraints must be separated from the package clause by a blank line.
		while lines and lines[-1] != "":
			lines.pop()

		expr: Optional[str] = None
		for line in lines:
			if line.startswith("//go:build"):
				rest = line[len("//go:build"):]
				if rest and not rest[0].isspace():
					continue
				if expr is not None:
					raise BuildConstraintError(path, "multiple //go:build comments")
				expr = rest
		if expr is not None:
			return _ExprParser(expr, self.match_tag, path).evaluate()

		for line in lines:
			if not line.startswith("//"):
				continue
			fields = line[2:].split()
			if not fields or fields[0] != "+build":
				continue
			if not self._plus_build_line(" ".join(fields[1:]), path):
				return False
		return True

	def match_file(self, directory: str, name: str) -> bool:
		if not name.endswith(".go"):
			return False
		if name.startswith("_") or name.startswith("."):
			return False
		if not self.good_os_arch_file(name):
			_LOG.debug("%s: excluded by file name", name)
			return False

		path = os.path.join(directory, name)
		try:
			with open(path, "rb") as fh:
				source = fh.read()
		except OSError as e:
			raise ImportReadError(path, e.strerror or str(e)) from e

		if not self.should_build(source, path):
			_LOG.debug("%s: excluded by build constraints", name)
			return False
		if not self.config.cgo_enabled and _CGO_IMPORT.search(source):
			_LOG.debug("%s: excluded, cgo disabled", name)
			return False
		return True
