"""
Toolchain configuration for the importer.

The distribution roots and the target platform are resolved once, when the
configuration is built, and then handed to the Importer. Nothing below looks
at the environment again after construction.
"""

from __future__ import annotations

import logging
import os
import platform
import shutil
import subprocess
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .errors import GorootNotFoundError

_LOG = logging.getLogger("goanalyzer.config")

LATEST_GO_MINOR = 23

# platform.system() / platform.machine() -> GOOS / GOARCH
_HOST_OS: Dict[str, str] = {
	"linux": "linux",
	"darwin": "darwin",
	"windows": "windows",
	"freebsd": "freebsd",
	"openbsd": "openbsd",
	"netbsd": "netbsd",
	"dragonfly": "dragonfly",
	"sunos": "solaris",
	"aix": "aix",
}

_HOST_ARCH: Dict[str, str] = {
	"x86_64": "amd64",
	"amd64": "amd64",
	"aarch64": "arm64",
	"arm64": "arm64",
	"i386": "386",
	"i686": "386",
	"x86": "386",
	"armv6l": "arm",
	"armv7l": "arm",
	"ppc64le": "ppc64le",
	"ppc64": "ppc64",
	"s390x": "s390x",
	"riscv64": "riscv64",
	"loongarch64": "loong64",
	"mips64": "mips64",
}


def default_release_tags() -> List[str]:
	return [f"go1.{minor}" for minor in range(1, LATEST_GO_MINOR + 1)]


class ImporterConfig(BaseModel):
	goroot: str
	gopath: str = ""
	goos: str
	goarch: str
	build_tags: List[str] = []
	cgo_enabled: bool = True
	compiler: str = "gc"
	release_tags: List[str] = Field(default_factory=default_release_tags)

	@property
	def src_root(self) -> str:
		return os.path.join(self.goroot, "src")

	@property
	def pkg_root(self) -> str:
		return os.path.join(self.goroot, "pkg", f"{self.goos}_{self.goarch}")

	@classmethod
	def from_environment(cls, **overrides) -> "ImporterConfig":
		"""
		Build a configuration from GOROOT, GOPATH, GOOS, GOARCH and CGO_ENABLED.

		Explicit keyword overrides win over the environment; values that are
		None are ignored. Raises GorootNotFoundError when no Go installation
		can be located.
		"""
		values = {k: v for k, v in overrides.items() if v is not None}

		if "goroot" not in values:
			values["goroot"] = _detect_goroot()
		if "gopath" not in values:
			values["gopath"] = os.environ.get("GOPATH") or os.path.join(os.path.expanduser("~"), "go")
		if "goos" not in values:
			values["goos"] = os.environ.get("GOOS") or _HOST_OS.get(platform.system().lower(), platform.system().lower())
		if "goarch" not in values:
			values["goarch"] = os.environ.get("GOARCH") or _HOST_ARCH.get(platform.machine().lower(), platform.machine().lower())
		if "cgo_enabled" not in values and os.environ.get("CGO_ENABLED"):
			values["cgo_enabled"] = os.environ["CGO_ENABLED"] == "1"

		cfg = cls(**values)
		_LOG.debug("goroot=%s goos=%s goarch=%s", cfg.goroot, cfg.goos, cfg.goarch)
		return cfg


def _detect_goroot() -> str:
	goroot = os.environ.get("GOROOT")
	if goroot:
		return goroot

	go = shutil.which("go")
	if go:
		try:
			out = subprocess.run(
				[go, "env", "GOROOT"],
				capture_output=True,
				text=True,
				check=True,
				timeout=30,
			)
		except (OSError, subprocess.SubprocessError) as e:
			raise GorootNotFoundError(f"'go env GOROOT' failed: {e}") from e
		goroot = out.stdout.strip()
		if goroot:
			return goroot

	raise GorootNotFoundError("cannot determine GOROOT: set GOROOT or put 'go' on PATH")


def resolve_config(
	goroot: Optional[str] = None,
	goos: Optional[str] = None,
	goarch: Optional[str] = None,
	tags: Optional[List[str]] = None,
) -> ImporterConfig:
	return ImporterConfig.from_environment(goroot=goroot, goos=goos, goarch=goarch, build_tags=tags)
