from pathlib import Path
from textwrap import dedent

import pytest

from goanalyzer.config import ImporterConfig


def write_go(directory: Path, name: str, code: str) -> Path:
	p = directory / name
	p.parent.mkdir(parents=True, exist_ok=True)
	p.write_text(dedent(code).lstrip())
	return p


@pytest.fixture
def goroot(tmp_path: Path) -> Path:
	root = tmp_path / "goroot"
	(root / "src").mkdir(parents=True)
	(root / "pkg" / "linux_amd64").mkdir(parents=True)
	return root


@pytest.fixture
def config(goroot: Path, tmp_path: Path) -> ImporterConfig:
	return ImporterConfig(
		goroot=str(goroot),
		gopath=str(tmp_path / "gopath"),
		goos="linux",
		goarch="amd64",
	)
