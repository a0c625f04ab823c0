"""
Shared test fixtures for the Docker installer.
"""

import io
import textwrap
from datetime import datetime
from pathlib import Path
from types import SimpleNamespace
from typing import Dict, List, Optional

import pytest
from rich.console import Console

import docker_installer as di

UBUNTU_2404 = textwrap.dedent("""\
    PRETTY_NAME="Ubuntu 24.04.1 LTS"
    NAME="Ubuntu"
    VERSION_ID="24.04"
    VERSION="24.04.1 LTS (Noble Numbat)"
    VERSION_CODENAME=noble
    ID=ubuntu
    ID_LIKE=debian
    UBUNTU_CODENAME=noble
""")


def make_os_release(version_id: str = "24.04", distro: str = "ubuntu", codename: str = "noble") -> str:
    return (
        f'PRETTY_NAME="{distro.title()} {version_id} LTS"\n'
        f"ID={distro}\n"
        f'VERSION_ID="{version_id}"\n'
        f"VERSION_CODENAME={codename}\n"
    )


def command_key(cmd) -> str:
    """Short name of a command: sudo commands keep their first three words."""
    return " ".join(cmd[:3]) if cmd[0] == "sudo" else cmd[0]


class FakeRunner:
    """Records commands instead of running them."""

    def __init__(self, returncodes: Optional[Dict[str, int]] = None, sudo_returncode: int = 0) -> None:
        self.token = di.CancellationToken()
        self.log_file = Path("/dev/null")
        self.returncodes = returncodes or {}
        self.sudo_returncode = sudo_returncode
        self.commands: List[List[str]] = []
        self.on_command = None

    def run_logged(self, cmd):
        self.token.raise_if_cancelled()
        self.commands.append(list(cmd))
        if self.on_command:
            self.on_command(list(cmd))
        self.token.raise_if_cancelled()
        returncode = self.returncodes.get(command_key(cmd), 0)
        if returncode:
            return di.StepResult.failure(
                di.ErrorKind.COMMAND_FAILED, f"Command failed: {' '.join(cmd)}", returncode=returncode
            )
        return di.StepResult.success()

    def run_interactive(self, cmd):
        self.token.raise_if_cancelled()
        self.commands.append(list(cmd))
        return self.sudo_returncode

    def names(self) -> List[str]:
        return [command_key(c) for c in self.commands]


@pytest.fixture
def output(monkeypatch) -> SimpleNamespace:
    """Capture everything printed through the rich consoles."""
    out = io.StringIO()
    err = io.StringIO()
    monkeypatch.setattr(di, "console", Console(file=out, width=300, color_system=None))
    monkeypatch.setattr(di, "error_console", Console(file=err, width=300, color_system=None))
    return SimpleNamespace(out=out, err=err, text=lambda: out.getvalue() + err.getvalue())


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    for handler in di.logger.handlers[:]:
        di.logger.removeHandler(handler)
        handler.close()
    di.logger.propagate = True


@pytest.fixture
def os_release(tmp_path: Path) -> Path:
    path = tmp_path / "os-release"
    path.write_text(UBUNTU_2404)
    return path


@pytest.fixture
def meminfo(tmp_path: Path) -> Path:
    path = tmp_path / "meminfo"
    path.write_text("MemTotal:        8048576 kB\nMemFree:         1024000 kB\n")
    return path


@pytest.fixture
def config(tmp_path: Path, os_release: Path, meminfo: Path) -> di.InstallerConfig:
    return di.build_config(
        log_dir=str(tmp_path / "logs"),
        now=datetime(2026, 10, 18, 9, 5, 3),
        os_release_file=os_release,
        meminfo_file=meminfo,
    )


@pytest.fixture
def non_root(monkeypatch):
    monkeypatch.setattr(di.os, "geteuid", lambda: 1000)


@pytest.fixture
def x86_64(monkeypatch):
    monkeypatch.setattr(di.platform, "machine", lambda: "x86_64")


@pytest.fixture
def plenty_of_disk(monkeypatch):
    monkeypatch.setattr(di, "get_free_disk_space", lambda path="/": 50 * 1024**3)


@pytest.fixture
def fake_download(monkeypatch):
    """Serve a tiny install script instead of hitting the network."""
    calls = []

    class FakeResponse:
        content = b"#!/bin/bash\necho installing docker\n"

        def raise_for_status(self):
            return None

    def fake_get(url, *args, **kwargs):
        calls.append(url)
        return FakeResponse()

    monkeypatch.setattr(di.requests, "get", fake_get)
    return calls


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def started_log(config):
    di.start_logging(config)
    return config.log_file
