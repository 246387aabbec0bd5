from __future__ import annotations

from typing import Dict, List

from .model import Package, RepoFacts, Summaries


def summarize_package(rel_dir: str, pkg: Package) -> str:
	parts: List[str] = []
	parts.append(f"Package {pkg.name or '?'} at {rel_dir}")
	parts.append(
		f"  Files: {len(pkg.go_files)} go, {len(pkg.test_go_files)} test, "
		f"{len(pkg.xtest_go_files)} xtest, {len(pkg.ignored_go_files)} ignored"
	)
	if pkg.imports:
		parts.append(f"  Imports: {', '.join(pkg.imports[:10])}")
	if pkg.goroot:
		parts.append("  Standard library")
	return "\n".join(parts)


def summarize_repo(facts: RepoFacts) -> Summaries:
	per_package: Dict[str, str] = {}
	for rel_dir, pkg in facts.packages.items():
		per_package[rel_dir] = summarize_package(rel_dir, pkg)

	file_count = sum(len(p.go_file_imports) + len(p.ignored_go_files) for p in facts.packages.values())
	import_count = len({imp for p in facts.packages.values() for imp in p.imports})

	global_overview = (
		f"Repository at {facts.root}: {len(facts.packages)} packages, "
		f"{file_count} go files, {import_count} distinct imports"
	)
	if facts.module_path:
		global_overview += f", module {facts.module_path}"

	return Summaries(global_overview=global_overview, per_package=per_package)
