"""
Bucket selection and per-bucket import aggregation for one directory.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from .model import Bucket, GoFileHeader, Package

TEST_FILE_SUFFIX = "_test.go"
XTEST_PACKAGE_SUFFIX = "_test"


def classify_file(filename: str, package_name: str) -> Tuple[Bucket, str]:
	"""Return the bucket of a file and the package name it proposes."""
	if filename.endswith(TEST_FILE_SUFFIX):
		if package_name.endswith(XTEST_PACKAGE_SUFFIX):
			return Bucket.XTEST, package_name[: -len(XTEST_PACKAGE_SUFFIX)]
		return Bucket.TEST, package_name
	return Bucket.MAIN, package_name


class PackageBuilder:
	"""Accumulates classified files in input order and produces a Package."""

	def __init__(self) -> None:
		self.name = ""
		self.ignored: List[str] = []
		self.files: Dict[Bucket, List[str]] = {b: [] for b in Bucket}
		self.imports: Dict[Bucket, List[str]] = {b: [] for b in Bucket}
		self.file_imports: Dict[str, List[str]] = {}

	def ignore(self, filename: str) -> None:
		self.ignored.append(filename)

	def add(self, filename: str, header: GoFileHeader) -> Bucket:
		bucket, name = classify_file(filename, header.package_name)
		if not self.name:
			self.name = name

		self.files[bucket].append(filename)

		raw = self.file_imports[filename] = []
		seen = self.imports[bucket]
		for path in header.imports:
			raw.append(path)
			if path not in seen:
				seen.append(path)
		return bucket

	def build(self, goroot: bool = False) -> Package:
		return Package(
			name=self.name,
			goroot=goroot,
			go_files=sorted(self.files[Bucket.MAIN]),
			test_go_files=sorted(self.files[Bucket.TEST]),
			xtest_go_files=sorted(self.files[Bucket.XTEST]),
			ignored_go_files=list(self.ignored),
			imports=sorted(self.imports[Bucket.MAIN]),
			test_imports=sorted(self.imports[Bucket.TEST]),
			xtest_imports=sorted(self.imports[Bucket.XTEST]),
			go_file_imports={k: list(v) for k, v in self.file_imports.items()},
		)
