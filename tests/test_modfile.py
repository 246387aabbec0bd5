import pytest

from goanalyzer.modfile import module_path


@pytest.mark.parametrize(
	"text,expected",
	[
		("module example.com/m\n\ngo 1.21\n", "example.com/m"),
		("// comment\nmodule   example.com/m // trailing\n", "example.com/m"),
		('module "example.com/quoted"\n', "example.com/quoted"),
		("module `example.com/raw`\n", "example.com/raw"),
		('module "unterminated\n', ""),
		("module\n", ""),
		("modulefoo bar\n", ""),
		("go 1.21\nrequire x v1.0.0\n", ""),
		("", ""),
	],
)
def test_module_path(text, expected):
	assert module_path(text) == expected
	assert module_path(text.encode()) == expected


def test_first_directive_wins():
	assert module_path("module a\nmodule b\n") == "a"


@pytest.mark.parametrize(
	"text,expected",
	[
		('module "ex\\x41mple.com/m"\n', "exAmple.com/m"),
		('module "ex\\101mple.com/m"\n', "exAmple.com/m"),
		('module "ex\\u0041mple.com/m"\n', "exAmple.com/m"),
		('module "a\\/b"\n', ""),
		("module \"a\\'b\"\n", ""),
		('module "a\\x4"\n', ""),
		('module "a\\400"\n', ""),
		('module "a"b"\n', ""),
	],
)
def test_quoted_escapes(text, expected):
	assert module_path(text) == expected
