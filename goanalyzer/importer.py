from __future__ import annotations

import logging
import os
from typing import Callable, Iterable, Optional, Union

from .classify import PackageBuilder
from .config import ImporterConfig
from .constraints import BuildMatcher
from .go_parse import read_go_header
from .model import GoFileHeader, Package
from .modfile import module_path

_LOG = logging.getLogger("goanalyzer.importer")

MatchFile = Callable[[str, str], bool]
ReadHeader = Callable[[str], GoFileHeader]


class Importer:
	"""
	Classifies the Go files of a directory into a Package.

	Args:
		config: toolchain roots and target platform
		match_file: (directory, filename) -> included; defaults to BuildMatcher
		read_header: file path -> GoFileHeader; defaults to read_go_header

	Errors raised by either collaborator propagate unchanged and abort the
	whole import_dir call.
	"""

	def __init__(
		self,
		config: ImporterConfig,
		match_file: Optional[MatchFile] = None,
		read_header: Optional[ReadHeader] = None,
	):
		self.config = config
		self.gorootpkg = config.pkg_root
		self.gorootsrc = config.src_root
		self.match_file = match_file or BuildMatcher(config).match_file
		self.read_header = read_header or read_go_header

	def goroot(self) -> str:
		return self.config.goroot

	def gopath(self) -> str:
		return self.config.gopath

	def module_path(self, data: Union[bytes, str]) -> str:
		return module_path(data)

	def import_dir(self, directory: str, names: Iterable[str]) -> Package:
		builder = PackageBuilder()

		for name in names:
			if not self.match_file(directory, name):
				_LOG.debug("%s: ignored %s", directory, name)
				builder.ignore(name)
				continue

			header = self.read_header(os.path.join(directory, name))
			bucket = builder.add(name, header)
			_LOG.debug("%s: %s -> %s (%d imports)", directory, name, bucket.value, len(header.imports))

		pkg = builder.build(goroot=self.is_goroot_dir(directory))
		_LOG.debug(
			"%s: package %r, %d files, %d ignored",
			directory,
			pkg.name,
			len(pkg.go_file_imports),
			len(pkg.ignored_go_files),
		)
		return pkg

	def is_goroot(self, path: str) -> bool:
		"""True if an import path is found in the standard distribution."""
		# Joined like filepath.Join: a leading separator never escapes the roots.
		pkg = os.path.normpath(self.gorootpkg + os.sep + path + ".a")
		src = os.path.normpath(self.gorootsrc + os.sep + path)
		# os.path.exists reports any stat failure as absent.
		return any(os.path.exists(p) for p in (pkg, src))

	def is_goroot_dir(self, directory: str) -> bool:
		return directory == self.gorootsrc or directory.startswith(self.gorootsrc + os.sep)
