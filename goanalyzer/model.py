from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel


class Bucket(str, Enum):
	MAIN = "main"
	TEST = "test"
	XTEST = "xtest"


class GoFileHeader(BaseModel):
	package_name: str
	imports: List[str] = []


class Package(BaseModel):
	name: str = ""
	goroot: bool = False
	go_files: List[str] = []
	test_go_files: List[str] = []
	xtest_go_files: List[str] = []
	ignored_go_files: List[str] = []
	imports: List[str] = []
	test_imports: List[str] = []
	xtest_imports: List[str] = []
	go_file_imports: Dict[str, List[str]] = {}


class RepoFacts(BaseModel):
	root: str
	module_path: Optional[str] = None
	packages: Dict[str, Package]


class Summaries(BaseModel):
	global_overview: str
	per_package: Dict[str, str]


class AnalyzeResult(BaseModel):
	facts: RepoFacts
	summaries: Summaries
