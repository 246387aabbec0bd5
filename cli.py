from __future__ import annotations

import argparse
import json
import logging
import os
import sys

import uvicorn

from goanalyzer.config import resolve_config
from goanalyzer.errors import GoAnalyzerError
from goanalyzer.fs_scan import list_go_files
from goanalyzer.importer import Importer
from goanalyzer.modfile import module_path
from goanalyzer.repo import analyze_repository


def _setup_logging(verbose: bool) -> None:
	level = logging.DEBUG if verbose or os.environ.get("GOANALYZER_DEBUG") else logging.INFO
	log = logging.getLogger("goanalyzer")
	log.setLevel(level)
	if not log.handlers:
		h = logging.StreamHandler()
		h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
		log.addHandler(h)


def _importer(args: argparse.Namespace) -> Importer:
	tags = [t for t in (args.tags or "").split(",") if t] or None
	return Importer(resolve_config(goroot=args.goroot, goos=args.goos, goarch=args.goarch, tags=tags))


def cmd_analyze(args: argparse.Namespace) -> None:
	result = analyze_repository(_importer(args), args.path)
	print(json.dumps(result.model_dump(), indent=2))


def cmd_import_dir(args: argparse.Namespace) -> None:
	directory = os.path.abspath(args.dir)
	names = args.names or list_go_files(directory)
	pkg = _importer(args).import_dir(directory, names)
	print(json.dumps(pkg.model_dump(), indent=2))


def cmd_goroot(args: argparse.Namespace) -> None:
	importer = _importer(args)
	print(json.dumps({p: importer.is_goroot(p) for p in args.paths}, indent=2))


def cmd_modpath(args: argparse.Namespace) -> None:
	with open(args.go_mod, "rb") as fh:
		print(module_path(fh.read()))


def cmd_serve(args: argparse.Namespace) -> None:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="goanalyzer")
	parser.add_argument("--goroot", help="Go installation root (default: $GOROOT or 'go env GOROOT')")
	parser.add_argument("--goos", help="Target GOOS (default: $GOOS or host)")
	parser.add_argument("--goarch", help="Target GOARCH (default: $GOARCH or host)")
	parser.add_argument("--tags", help="Comma-separated build tags")
	parser.add_argument("-v", "--verbose", action="store_true")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pa = sub.add_parser("analyze", help="Analyze every Go package under a directory and print JSON")
	pa.add_argument("path", help="Path to repository root")
	pa.set_defaults(func=cmd_analyze)

	pi = sub.add_parser("import-dir", help="Classify the Go files of one directory")
	pi.add_argument("dir")
	pi.add_argument("names", nargs="*", help="File names (default: all .go files in dir)")
	pi.set_defaults(func=cmd_import_dir)

	pg = sub.add_parser("goroot", help="Report whether import paths are in the standard library")
	pg.add_argument("paths", nargs="+")
	pg.set_defaults(func=cmd_goroot)

	pm = sub.add_parser("modpath", help="Print the module path of a go.mod file")
	pm.add_argument("go_mod")
	pm.set_defaults(func=cmd_modpath)

	ps = sub.add_parser("serve", help="Run FastAPI server")
	ps.add_argument("--host", default="127.0.0.1")
	ps.add_argument("--port", type=int, default=8000)
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)
	return parser


def main(argv=None) -> int:
	args = build_parser().parse_args(argv)
	_setup_logging(args.verbose)
	try:
		args.func(args)
	except (GoAnalyzerError, OSError) as e:
		print(f"error: {e}", file=sys.stderr)
		return 1
	return 0


if __name__ == "__main__":
	sys.exit(main())
