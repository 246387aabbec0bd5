from __future__ import annotations

from typing import Union

_SIMPLE_ESCAPES = {
	"a": "\a",
	"b": "\b",
	"f": "\f",
	"n": "\n",
	"r": "\r",
	"t": "\t",
	"v": "\v",
	"\\": "\\",
	'"': '"',
}
_HEX = "0123456789abcdefABCDEF"


def _unquote_interpreted(body: str) -> str:
	"""Decode the escapes of a Go double-quoted string body; "" if malformed."""
	out = bytearray()
	i = 0
	while i < len(body):
		c = body[i]
		if c == '"' or c == "\n":
			return ""
		if c != "\\":
			out += c.encode("utf-8")
			i += 1
			continue
		if i + 1 >= len(body):
			return ""
		e = body[i + 1]
		i += 2
		if e in _SIMPLE_ESCAPES:
			out += _SIMPLE_ESCAPES[e].encode("utf-8")
		elif e in "xuU":
			size = {"x": 2, "u": 4, "U": 8}[e]
			digits = body[i:i + size]
			if len(digits) != size or any(d not in _HEX for d in digits):
				return ""
			value = int(digits, 16)
			i += size
			if e == "x":
				out.append(value)
			elif value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
				return ""
			else:
				out += chr(value).encode("utf-8")
		elif e in "01234567":
			digits = body[i - 1:i + 2]
			if len(digits) != 3 or any(d not in "01234567" for d in digits):
				return ""
			value = int(digits, 8)
			if value > 255:
				return ""
			out.append(value)
			i += 2
		else:
			return ""
	return out.decode("utf-8", errors="replace")


def _unquote(text: str) -> str:
	if text[0] == "`":
		if len(text) < 2 or not text.endswith("`") or "`" in text[1:-1]:
			return ""
		return text[1:-1]
	if len(text) < 2 or not text.endswith('"'):
		return ""
	return _unquote_interpreted(text[1:-1])


def module_path(data: Union[bytes, str]) -> str:
	"""
	Return the module path declared by a go.mod file, or "" if there is none.

	Only the first ``module`` directive is looked at; the rest of the file is
	not validated.
	"""
	if isinstance(data, bytes):
		data = data.decode("utf-8", errors="replace")

	for line in data.split("\n"):
		i = line.find("//")
		if i >= 0:
			line = line[:i]
		line = line.strip()
		if not line.startswith("module"):
			continue
		rest = line[len("module"):]
		stripped = rest.strip()
		# "modulefoo" is not a directive, and "module" alone has no path.
		if len(stripped) == len(rest) or not stripped:
			continue
		if stripped[0] in ('"', "`"):
			return _unquote(stripped)
		return stripped
	return ""
