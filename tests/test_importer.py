import os

import pytest

from goanalyzer.errors import BuildConstraintError, ImportReadError
from goanalyzer.importer import Importer
from goanalyzer.model import GoFileHeader

from .conftest import write_go


@pytest.fixture
def pkgdir(tmp_path):
	d = tmp_path / "src" / "p"
	write_go(
		d,
		"a.go",
		"""
		package p

		import (
			"fmt"
			"fmt"
		)
		""",
	)
	write_go(
		d,
		"a_test.go",
		"""
		package p

		import "testing"
		""",
	)
	write_go(
		d,
		"a_x_test.go",
		"""
		package p_test

		import (
			"p"
			"os"
		)
		""",
	)
	return d


def test_import_dir(config, pkgdir):
	pkg = Importer(config).import_dir(str(pkgdir), ["a_x_test.go", "a_test.go", "a.go"])
	assert pkg.name == "p"
	assert pkg.goroot is False
	assert pkg.go_files == ["a.go"]
	assert pkg.imports == ["fmt"]
	assert pkg.test_go_files == ["a_test.go"]
	assert pkg.test_imports == ["testing"]
	assert pkg.xtest_go_files == ["a_x_test.go"]
	assert pkg.xtest_imports == ["os", "p"]
	assert pkg.ignored_go_files == []
	assert pkg.go_file_imports == {
		"a.go": ["fmt", "fmt"],
		"a_test.go": ["testing"],
		"a_x_test.go": ["p", "os"],
	}


def test_import_dir_is_repeatable(config, pkgdir):
	importer = Importer(config)
	names = ["a.go", "a_test.go", "a_x_test.go"]
	assert importer.import_dir(str(pkgdir), names) == importer.import_dir(str(pkgdir), names)


def test_ignored_file(config, pkgdir):
	write_go(
		pkgdir,
		"b_windows.go",
		"""
		package p

		import "syscall"
		""",
	)
	pkg = Importer(config).import_dir(str(pkgdir), ["b_windows.go", "a.go"])
	assert pkg.ignored_go_files == ["b_windows.go"]
	assert "b_windows.go" not in pkg.go_file_imports
	assert "syscall" not in pkg.imports
	assert pkg.go_files == ["a.go"]


def test_every_name_lands_in_one_bucket(config, pkgdir):
	write_go(pkgdir, "c_plan9.go", "package p\n")
	names = ["c_plan9.go", "a_x_test.go", "a.go", "a_test.go"]
	pkg = Importer(config).import_dir(str(pkgdir), names)
	buckets = pkg.go_files + pkg.test_go_files + pkg.xtest_go_files + pkg.ignored_go_files
	assert sorted(buckets) == sorted(names)
	assert set(pkg.go_file_imports) == set(names) - set(pkg.ignored_go_files)


def _fake_reader(headers):
	def read(path):
		return headers[os.path.basename(path)]
	return read


def test_collaborators_are_injectable(config):
	seen = []

	def match(directory, name):
		seen.append((directory, name))
		return name != "skip.go"

	importer = Importer(
		config,
		match_file=match,
		read_header=_fake_reader({
			"m.go": GoFileHeader(package_name="first", imports=["b", "a"]),
			"m_test.go": GoFileHeader(package_name="second"),
		}),
	)
	pkg = importer.import_dir("/work/x", ["skip.go", "m_test.go", "m.go"])
	assert seen == [("/work/x", "skip.go"), ("/work/x", "m_test.go"), ("/work/x", "m.go")]
	assert pkg.name == "second"
	assert pkg.ignored_go_files == ["skip.go"]
	assert pkg.imports == ["a", "b"]
	assert pkg.go_file_imports["m_test.go"] == []


def test_match_error_aborts(config):
	def match(directory, name):
		raise BuildConstraintError(name, "bad")

	with pytest.raises(BuildConstraintError):
		Importer(config, match_file=match).import_dir("/work/x", ["a.go"])


def test_read_error_aborts(config, tmp_path):
	write_go(tmp_path, "ok.go", "package ok\n")
	write_go(tmp_path, "bad.go", 'import "fmt"\n')
	with pytest.raises(ImportReadError):
		Importer(config).import_dir(str(tmp_path), ["ok.go", "bad.go"])


def test_is_goroot(config, goroot):
	(goroot / "src" / "net" / "http").mkdir(parents=True)
	(goroot / "pkg" / "linux_amd64" / "fmt.a").write_bytes(b"")
	importer = Importer(config)
	assert importer.is_goroot("net/http")
	assert importer.is_goroot("fmt")
	assert not importer.is_goroot("github.com/x/y")


def test_is_goroot_dir(config, goroot):
	importer = Importer(config)
	src = str(goroot / "src")
	assert importer.is_goroot_dir(src)
	assert importer.is_goroot_dir(os.path.join(src, "fmt"))
	assert not importer.is_goroot_dir(src + "x")
	assert not importer.is_goroot_dir(str(goroot))


def test_goroot_flag_on_package(config, goroot):
	d = goroot / "src" / "strings"
	write_go(d, "strings.go", 'package strings\n\nimport "unicode"\n')
	pkg = Importer(config).import_dir(str(d), ["strings.go"])
	assert pkg.goroot is True
	assert pkg.imports == ["unicode"]


def test_accessors(config):
	importer = Importer(config)
	assert importer.goroot() == config.goroot
	assert importer.gopath() == config.gopath
	assert importer.module_path(b"module example.com/m\n") == "example.com/m"


def test_is_goroot_keeps_roots_for_absolute_paths(config, goroot, tmp_path):
	(goroot / "src" / "fmt").mkdir()
	importer = Importer(config)
	assert not importer.is_goroot(str(tmp_path))
	assert not importer.is_goroot("/tmp")
	assert importer.is_goroot("/fmt")
