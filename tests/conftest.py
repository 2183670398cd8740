"""Shared fixtures: sample reports, a scriptable fake cargo, and copies of the fixture crates."""

from __future__ import annotations

import shutil
import stat
import sys
from dataclasses import dataclass
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def report_bytes() -> bytes:
    """A real-shaped report for a two-member workspace, with dependencies resolved."""
    return (FIXTURES / "report_with_deps.json").read_bytes()


@dataclass
class FakeCargo:
    """Handle on a shell script that stands in for cargo."""

    path: Path
    args_file: Path
    cwd_file: Path

    def recorded_args(self) -> list[str]:
        return self.args_file.read_text().splitlines()

    def recorded_cwd(self) -> Path:
        return Path(self.cwd_file.read_text().strip())


@pytest.fixture
def fake_cargo(tmp_path: Path):
    """
    Factory writing a fake cargo executable.

    The script records its arguments and working directory, prints the given
    stdout/stderr bytes, and exits with the given status.
    """
    if sys.platform == "win32":
        pytest.skip("fake cargo is a POSIX shell script")

    def make(stdout: bytes = b"", stderr: bytes = b"", returncode: int = 0) -> FakeCargo:
        bin_dir = tmp_path / "fake-bin"
        bin_dir.mkdir(exist_ok=True)
        (bin_dir / "stdout").write_bytes(stdout)
        (bin_dir / "stderr").write_bytes(stderr)
        args_file = bin_dir / "args"
        cwd_file = bin_dir / "cwd"
        script = bin_dir / "cargo"
        script.write_text(
            "#!/bin/sh\n"
            f"printf '%s\\n' \"$@\" > '{args_file}'\n"
            f"pwd > '{cwd_file}'\n"
            f"cat '{bin_dir / 'stdout'}'\n"
            f"cat '{bin_dir / 'stderr'}' >&2\n"
            f"exit {returncode}\n"
        )
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return FakeCargo(path=script, args_file=args_file, cwd_file=cwd_file)

    return make


def _copy_crate(name: str, tmp_path: Path) -> Path:
    dest = tmp_path / name
    shutil.copytree(FIXTURES / "crates" / name, dest)
    return dest


@pytest.fixture
def single_crate(tmp_path: Path) -> Path:
    """Copy of a crate with one lib and one test target; returns its directory."""
    return _copy_crate("single", tmp_path)


@pytest.fixture
def workspace_crate(tmp_path: Path) -> Path:
    """Copy of a two-member workspace (app depends on util); returns its root."""
    return _copy_crate("workspace", tmp_path)


@pytest.fixture
def not_a_crate(tmp_path: Path) -> Path:
    """Directory holding a plain text file and no Cargo.toml."""
    return _copy_crate("notamanifest", tmp_path)
