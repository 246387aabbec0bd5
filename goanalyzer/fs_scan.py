from __future__ import annotations

import os
from typing import List, Set

SKIP_DIRS: Set[str] = {".git", "node_modules", "vendor", "testdata", "dist", "build", "__pycache__"}


def is_go_file(filename: str) -> bool:
	return filename.endswith(".go")


def list_go_files(directory: str) -> List[str]:
	names: List[str] = []
	with os.scandir(directory) as it:
		for entry in it:
			if is_go_file(entry.name) and entry.is_file():
				names.append(entry.name)
	return sorted(names)


def _skip_dir(name: str) -> bool:
	return name in SKIP_DIRS or name.startswith(".") or name.startswith("_")


def scan_repository(root: str) -> List[str]:
	"""Directories under root (root included) that hold at least one .go file."""
	dirs: List[str] = []
	for dirpath, dirnames, filenames in os.walk(root):
		dirnames[:] = sorted(d for d in dirnames if not _skip_dir(d))
		if any(is_go_file(f) for f in filenames):
			dirs.append(dirpath)
	return sorted(dirs)
