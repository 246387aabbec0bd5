import json

from cli import main

from .conftest import write_go


def _args(goroot):
	return ["--goroot", str(goroot), "--goos", "linux", "--goarch", "amd64"]


def test_import_dir(goroot, tmp_path, capsys):
	d = tmp_path / "p"
	write_go(d, "a.go", 'package p\n\nimport "os"\n')
	write_go(d, "a_test.go", 'package p\n\nimport "testing"\n')

	assert main(_args(goroot) + ["import-dir", str(d)]) == 0
	data = json.loads(capsys.readouterr().out)
	assert data["go_files"] == ["a.go"]
	assert data["test_imports"] == ["testing"]


def test_tags_flag(goroot, tmp_path, capsys):
	write_go(tmp_path, "i.go", "//go:build integration\n\npackage p\n")
	assert main(_args(goroot) + ["--tags", "integration", "import-dir", str(tmp_path), "i.go"]) == 0
	assert json.loads(capsys.readouterr().out)["go_files"] == ["i.go"]


def test_modpath(tmp_path, capsys):
	(tmp_path / "go.mod").write_text("module example.com/m\n")
	assert main(["modpath", str(tmp_path / "go.mod")]) == 0
	assert capsys.readouterr().out.strip() == "example.com/m"


def test_error_exit(goroot, tmp_path, capsys):
	write_go(tmp_path, "bad.go", "//go:build linux &&\n\npackage p\n")
	assert main(_args(goroot) + ["import-dir", str(tmp_path), "bad.go"]) == 1
	assert capsys.readouterr().err.startswith("error: ")
