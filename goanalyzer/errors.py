"""
Errors raised by the analyzer.

Everything inheriting from GoAnalyzerError is an expected failure that the
CLI and the HTTP API report as a clean message. Anything else is a bug and
propagates with its traceback.
"""

from __future__ import annotations

from typing import Optional


class GoAnalyzerError(Exception):
	"""Base class for user-facing analyzer errors."""
	pass


class BuildConstraintError(GoAnalyzerError):
	"""A file's build constraints could not be evaluated."""

	def __init__(self, path: str, message: str):
		super().__init__(f"{path}: {message}")
		self.path = path


class ImportReadError(GoAnalyzerError):
	"""A Go file could not be read or its import header could not be parsed."""

	def __init__(self, path: str, message: str, line: Optional[int] = None):
		where = f"{path}:{line}" if line is not None else path
		super().__init__(f"{where}: {message}")
		self.path = path
		self.line = line


class GorootNotFoundError(GoAnalyzerError):
	pass


__all__ = [
	"GoAnalyzerError",
	"BuildConstraintError",
	"ImportReadError",
	"GorootNotFoundError",
]
