import pytest
from fastapi.testclient import TestClient

from api import create_app
from goanalyzer.importer import Importer

from .conftest import write_go


@pytest.fixture
def client(config):
	return TestClient(create_app(Importer(config)))


def test_import_dir(client, tmp_path):
	d = tmp_path / "p"
	write_go(d, "a.go", 'package p\n\nimport "fmt"\n')
	write_go(d, "a_windows.go", "package p\n")

	resp = client.post("/import-dir", json={"directory": str(d)})
	assert resp.status_code == 200
	data = resp.json()
	assert data["name"] == "p"
	assert data["go_files"] == ["a.go"]
	assert data["ignored_go_files"] == ["a_windows.go"]
	assert data["imports"] == ["fmt"]


def test_import_dir_parse_error(client, tmp_path):
	write_go(tmp_path, "bad.go", 'import "fmt"\n')
	resp = client.post("/import-dir", json={"directory": str(tmp_path), "names": ["bad.go"]})
	assert resp.status_code == 400
	assert "bad.go" in resp.json()["detail"]


def test_analyze_invalid_root(client, tmp_path):
	resp = client.post("/analyze", json={"root_path": str(tmp_path / "nope")})
	assert resp.status_code == 400


def test_goroot(client, goroot):
	(goroot / "src" / "fmt").mkdir()
	assert client.get("/goroot", params={"path": "fmt"}).json() == {"path": "fmt", "goroot": True}
	assert client.get("/goroot", params={"path": "example.com/x"}).json()["goroot"] is False
