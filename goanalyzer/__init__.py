"""Analyzer for Go source directories: file classification and import extraction.

Modules:
- importer.py: Importer, the per-directory entry point, and GOROOT checks.
- classify.py: Bucket selection and import aggregation.
- go_parse.py: Tree-sitter reader for package clauses and imports.
- constraints.py: Default build-constraint and file-name matching.
- modfile.py: Module path extraction from go.mod.
- config.py: Toolchain roots and target platform.
- fs_scan.py / repo.py / summarize.py: Repository-wide scanning and summaries.
"""

from .config import ImporterConfig
from .errors import GoAnalyzerError
from .importer import Importer
from .model import Package

__all__ = [
	"Importer",
	"ImporterConfig",
	"GoAnalyzerError",
	"Package",
]
