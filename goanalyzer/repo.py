from __future__ import annotations

import os
from typing import Dict, Optional

from .fs_scan import list_go_files, scan_repository
from .importer import Importer
from .model import AnalyzeResult, Package, RepoFacts
from .summarize import summarize_repo


def read_module_path(importer: Importer, root: str) -> Optional[str]:
	go_mod = os.path.join(root, "go.mod")
	if not os.path.isfile(go_mod):
		return None
	with open(go_mod, "rb") as fh:
		return importer.module_path(fh.read()) or None


def analyze_repository(importer: Importer, root: str) -> AnalyzeResult:
	root = os.path.abspath(root)

	packages: Dict[str, Package] = {}
	for directory in scan_repository(root):
		rel_dir = os.path.relpath(directory, root)
		packages[rel_dir] = importer.import_dir(directory, list_go_files(directory))

	facts = RepoFacts(root=root, module_path=read_module_path(importer, root), packages=packages)
	return AnalyzeResult(facts=facts, summaries=summarize_repo(facts))
