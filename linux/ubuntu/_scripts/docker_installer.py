#!/usr/bin/env python3
"""
Docker Installer
--------------------------------------------------

Installs Docker on Ubuntu 22.04 LTS (Jammy) and Ubuntu 24.04 LTS (Noble).

The installer runs a fixed sequence of steps and stops at the first failure:
  1. Privilege check (must NOT be root, must be able to use sudo).
  2. System compatibility check (Ubuntu release and CPU architecture).
  3. System requirements check (disk space and memory, warnings only).
  4. System package update (apt-get update + upgrade).
  5. Remote installation script download and execution.
  6. Post-installation summary.

All command output is written to a timestamped log file in /tmp.

Usage:
  Run the script as a regular user with sudo rights:
      ./docker_installer.py [--debug] [--log-dir DIR]

Version: 0.1.0
"""

import logging
import os
import platform
import signal
import subprocess
import sys
import tempfile
import threading
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import click
import pyfiglet
import requests
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.style import Style
from rich.text import Text
from rich.traceback import install as install_rich_traceback

# ----------------------------------------------------------------
# Global Configuration & Constants
# ----------------------------------------------------------------
APP_NAME: str = "docker"
APP_SECTION: str = "tools"
VERSION: str = "0.1.0"
SCRIPT_NAME: str = f"Installer for {APP_NAME}"
BASE_URL: str = "https://raw.githubusercontent.com/agonza05/runap/refs/heads/main"
OS_RELEASE_FILE: str = "/etc/os-release"
MEMINFO_FILE: str = "/proc/meminfo"
DEFAULT_LOG_DIR: str = "/tmp"

SUPPORTED_DISTRO: str = "ubuntu"
SUPPORTED_VERSIONS: Tuple[str, ...] = ("22.04", "24.04")
# kernel architecture -> package architecture
SUPPORTED_ARCHITECTURES: Tuple[Tuple[str, str], ...] = (("x86_64", "amd64"),)

MIN_DISK_BYTES: int = 10 * 1024**3
MIN_MEMORY_BYTES: int = 2 * 1024**3

EXIT_SUCCESS: int = 0
EXIT_FAILURE: int = 1
EXIT_INTERRUPTED: int = 130

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("docker_installer")


# ----------------------------------------------------------------
# Nord-Themed Colors for Styling
# ----------------------------------------------------------------
class NordColors:
    """Nord color palette for consistent theming."""

    SNOW_STORM_1 = "#D8DEE9"
    SNOW_STORM_2 = "#E5E9F0"

    FROST_1 = "#8FBCBB"
    FROST_2 = "#88C0D0"
    FROST_3 = "#81A1C1"
    FROST_4 = "#5E81AC"

    RED = "#BF616A"
    YELLOW = "#EBCB8B"
    GREEN = "#A3BE8C"


console: Console = Console()
error_console: Console = Console(stderr=True)


# ----------------------------------------------------------------
# Data Structures
# ----------------------------------------------------------------
@dataclass(frozen=True)
class InstallerConfig:
    """Settings for a single installer run. Built once, never mutated."""

    log_file: Path
    app_name: str = APP_NAME
    app_section: str = APP_SECTION
    version: str = VERSION
    base_url: str = BASE_URL
    os_release_file: Path = Path(OS_RELEASE_FILE)
    meminfo_file: Path = Path(MEMINFO_FILE)
    supported_distro: str = SUPPORTED_DISTRO
    supported_versions: Tuple[str, ...] = SUPPORTED_VERSIONS
    supported_architectures: Tuple[Tuple[str, str], ...] = SUPPORTED_ARCHITECTURES
    min_disk_bytes: int = MIN_DISK_BYTES
    min_memory_bytes: int = MIN_MEMORY_BYTES

    @property
    def script_name(self) -> str:
        return f"Installer for {self.app_name}"

    @property
    def script_path(self) -> str:
        return f"/{self.app_section}/{self.app_name}"

    @property
    def install_url(self) -> str:
        return f"{self.base_url}{self.script_path}/install.sh"


def build_config(
    log_dir: str = DEFAULT_LOG_DIR, now: Optional[datetime] = None, **overrides: Any
) -> InstallerConfig:
    """Create the run configuration; the log file name embeds the start time."""
    now = now or datetime.now()
    app_name = overrides.get("app_name", APP_NAME)
    log_file = Path(log_dir) / f"{app_name}_{now.strftime('%Y%m%d_%H%M%S')}.log"
    return InstallerConfig(log_file=log_file, **overrides)


@dataclass(frozen=True)
class OSDescriptor:
    """Detected operating system, filled in by the compatibility check."""

    distro: str
    codename: str
    version: str
    arch: str
    arch_alt: str
    pretty_name: str = ""


@dataclass(frozen=True)
class ResourceReport:
    """Disk and memory figures; a value is None when it could not be read."""

    disk_free_bytes: Optional[int]
    memory_total_bytes: Optional[int]
    warnings: Tuple[str, ...] = ()


class ErrorKind(Enum):
    """Why a step failed."""

    ROOT_USER = "root_user"
    SUDO_UNAVAILABLE = "sudo_unavailable"
    OS_RELEASE_MISSING = "os_release_missing"
    UNSUPPORTED_DISTRO = "unsupported_distro"
    UNSUPPORTED_VERSION = "unsupported_version"
    UNSUPPORTED_ARCH = "unsupported_arch"
    COMMAND_FAILED = "command_failed"
    FETCH_FAILED = "fetch_failed"
    SCRIPT_FAILED = "script_failed"


@dataclass(frozen=True)
class StepResult:
    """Outcome of a single installer step."""

    ok: bool
    error: Optional[ErrorKind] = None
    message: str = ""
    hint: str = ""
    returncode: int = 0
    value: Any = None

    @classmethod
    def success(cls, value: Any = None) -> "StepResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(
        cls, error: ErrorKind, message: str, hint: str = "", returncode: int = 1
    ) -> "StepResult":
        return cls(ok=False, error=error, message=message, hint=hint, returncode=returncode)


# ----------------------------------------------------------------
# Cancellation
# ----------------------------------------------------------------
class InstallInterrupted(Exception):
    """Raised when the run is cancelled by SIGINT or SIGTERM."""

    def __init__(self, signum: Optional[int] = None) -> None:
        self.signum = signum
        name = signal.Signals(signum).name if signum else "cancellation"
        super().__init__(f"Interrupted by {name}")


class CancellationToken:
    """
    Shared cancellation state between the signal handler and the step that
    is currently blocked on an external command.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._process: Optional[subprocess.Popen] = None
        self._starting = False
        self.signum: Optional[int] = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def has_active_process(self) -> bool:
        return self._process is not None and self._process.poll() is None

    @property
    def busy(self) -> bool:
        """True while a command is being started or is still running."""
        return self._starting or self.has_active_process

    def spawn(self, cmd: Sequence[str], **kwargs: Any) -> subprocess.Popen:
        """Start ``cmd`` and attach it; signals during startup only cancel."""
        self._starting = True
        try:
            process = subprocess.Popen(list(cmd), **kwargs)
            self.attach(process)
        finally:
            self._starting = False
        return process

    def attach(self, process: subprocess.Popen) -> None:
        self._process = process
        # a signal during spawn() only set the event
        if self.cancelled:
            self._terminate()

    def detach(self) -> None:
        self._process = None

    def cancel(self, signum: Optional[int] = None) -> None:
        self.signum = signum
        self._event.set()
        self._terminate()

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise InstallInterrupted(self.signum)

    def _terminate(self) -> None:
        if self.has_active_process:
            logger.warning("Terminating running command (pid %s)", self._process.pid)
            self._process.terminate()


def install_signal_handlers(token: CancellationToken) -> Dict[int, Any]:
    """Route SIGINT/SIGTERM into the token. Returns the previous handlers."""

    def signal_handler(signum: int, frame: Any) -> None:
        first = not token.cancelled
        token.cancel(signum)
        # a running command is terminated and the waiting step raises
        if first and not token.busy:
            raise InstallInterrupted(signum)

    previous = {}
    for sig in (signal.SIGINT, signal.SIGTERM):
        previous[sig] = signal.getsignal(sig)
        signal.signal(sig, signal_handler)
    return previous


# ----------------------------------------------------------------
# UI Helpers: Banner & Messages
# ----------------------------------------------------------------
def create_header(config: InstallerConfig) -> Panel:
    """Generate an ASCII art header using Pyfiglet with Nord styling."""
    fonts = ["slant", "small", "mini"]
    ascii_art = ""
    for font in fonts:
        try:
            ascii_art = pyfiglet.Figlet(font=font, width=60).renderText(config.app_name)
            if ascii_art.strip():
                break
        except pyfiglet.FontNotFound:
            continue
    if not ascii_art.strip():
        ascii_art = config.app_name

    colors = [NordColors.FROST_1, NordColors.FROST_2, NordColors.FROST_3, NordColors.FROST_2]
    styled_lines = [
        f"[bold {colors[i % len(colors)]}]{escape(line)}[/]"
        for i, line in enumerate(ascii_art.splitlines())
        if line.strip()
    ]
    return Panel(
        Text.from_markup("\n".join(styled_lines)),
        border_style=Style(color=NordColors.FROST_1),
        padding=(1, 1),
        title=f"[bold {NordColors.SNOW_STORM_2}]v{config.version}[/]",
        title_align="right",
        subtitle=f"[bold {NordColors.SNOW_STORM_1}]{config.script_name}[/]",
        subtitle_align="center",
    )


def print_step(text: str) -> None:
    """Print a top-level step heading."""
    console.print(f"[bold {NordColors.FROST_4}]▸ {escape(text)}[/]")


def print_substep(text: str) -> None:
    """Print an indented sub-step."""
    console.print(f"  [{NordColors.FROST_2}]▹ {escape(text)}[/]")


def print_success(text: str) -> None:
    """Print a success message."""
    console.print(f"[{NordColors.GREEN}]✓ {escape(text)}[/]")


def print_warning(text: str) -> None:
    """Print a warning message."""
    console.print(f"[{NordColors.YELLOW}]⚠ {escape(text)}[/]")


def print_info(text: str) -> None:
    """Print an informational message."""
    console.print(f"[{NordColors.FROST_3}]ℹ {escape(text)}[/]")


def print_error(text: str) -> None:
    """Print an error message to stderr."""
    error_console.print(f"[bold {NordColors.RED}]✗ {escape(text)}[/]")


def format_size(num_bytes: float) -> str:
    """Convert bytes to a human-readable string."""
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if num_bytes < 1024:
            return f"{num_bytes:.1f} {unit}"
        num_bytes /= 1024
    return f"{num_bytes:.1f} PB"


# ----------------------------------------------------------------
# Logging
# ----------------------------------------------------------------
def start_logging(config: InstallerConfig, debug: bool = False) -> logging.Logger:
    """Create the run's log file and attach handlers to the module logger."""
    config.log_file.parent.mkdir(parents=True, exist_ok=True)
    with open(config.log_file, "w") as f:
        f.write(f"{config.script_name} Log - {datetime.now().strftime('%a %b %d %H:%M:%S %Y')}\n")

    logger.setLevel(logging.DEBUG)
    for h in logger.handlers[:]:
        logger.removeHandler(h)
        h.close()
    file_handler = logging.FileHandler(config.log_file)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
    logger.addHandler(file_handler)
    if debug:
        console_handler = RichHandler(console=error_console, rich_tracebacks=True)
        console_handler.setLevel(logging.DEBUG)
        logger.addHandler(console_handler)
    logger.propagate = False
    return logger


# ----------------------------------------------------------------
# Command Execution Helper
# ----------------------------------------------------------------
class CommandRunner:
    """Runs external commands, sending their output to the log file."""

    def __init__(self, log_file: Path, token: CancellationToken) -> None:
        self.log_file = Path(log_file)
        self.token = token

    def run_logged(self, cmd: Sequence[str]) -> StepResult:
        """Run ``cmd`` with stdout and stderr appended to the log file."""
        self.token.raise_if_cancelled()
        command_line = " ".join(cmd)
        with open(self.log_file, "a") as log_fh:
            log_fh.write(f"[{datetime.now().strftime(LOG_DATE_FORMAT)}] Executing: {command_line}\n")
        print_info("Executing command. Please wait...")
        with open(self.log_file, "ab") as log_fh:
            try:
                process = self.token.spawn(cmd, stdout=log_fh, stderr=subprocess.STDOUT)
            except OSError as e:
                self.token.raise_if_cancelled()
                logger.error("Could not start %s: %s", cmd[0], e)
                return StepResult.failure(
                    ErrorKind.COMMAND_FAILED, f"Could not start {cmd[0]}: {e}", returncode=127
                )
            returncode = self._wait(process)
        if returncode != 0:
            logger.error("Command failed with exit code %d: %s", returncode, command_line)
            return StepResult.failure(
                ErrorKind.COMMAND_FAILED,
                f"Command failed with exit code {returncode}: {command_line}",
                hint=f"See {self.log_file} for details",
                returncode=returncode,
            )
        return StepResult.success()

    def run_interactive(self, cmd: Sequence[str]) -> int:
        """Run ``cmd`` attached to the terminal (used for password prompts)."""
        self.token.raise_if_cancelled()
        logger.debug("Running interactive command: %s", " ".join(cmd))
        try:
            process = self.token.spawn(cmd)
        except OSError as e:
            self.token.raise_if_cancelled()
            logger.error("Could not start %s: %s", cmd[0], e)
            return 127
        return self._wait(process)

    def _wait(self, process: subprocess.Popen) -> int:
        try:
            returncode = process.wait()
        finally:
            self.token.detach()
        self.token.raise_if_cancelled()
        return returncode


# ----------------------------------------------------------------
# Privilege Guard
# ----------------------------------------------------------------
def check_privileges(runner: CommandRunner) -> StepResult:
    """Refuse to run as root, then make sure sudo is usable."""
    if os.geteuid() == 0:
        return StepResult.failure(
            ErrorKind.ROOT_USER,
            "This script should not be run as root for security reasons.",
            hint="Please run as a regular user. The script will use sudo when needed.",
        )
    print_step("Checking sudo privileges")
    returncode = runner.run_interactive(["sudo", "-v"])
    if returncode != 0:
        return StepResult.failure(
            ErrorKind.SUDO_UNAVAILABLE,
            "Unable to obtain sudo privileges.",
            hint="Make sure your user is allowed to run commands with sudo.",
            returncode=returncode,
        )
    print_success("Privileges successfully granted.")
    return StepResult.success()


# ----------------------------------------------------------------
# System Compatibility
# ----------------------------------------------------------------
def parse_os_release(text: str) -> Dict[str, str]:
    """Parse the KEY=value lines of an os-release file."""
    info: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        info[key.strip()] = value
    return info


def check_system_compatibility(
    config: InstallerConfig, machine: Optional[str] = None
) -> StepResult:
    """Verify the Ubuntu release and CPU architecture. Value: OSDescriptor."""
    print_step("Checking system compatibility")
    print_substep("Checking OS version")

    if not config.os_release_file.is_file():
        return StepResult.failure(
            ErrorKind.OS_RELEASE_MISSING,
            f"Cannot determine OS version. {config.os_release_file} not found.",
        )
    os_info = parse_os_release(config.os_release_file.read_text())
    distro = os_info.get("ID", "")
    version = os_info.get("VERSION_ID", "")
    logger.info("Detected OS: %s %s", distro or "unknown", version or "unknown")

    supported = " and ".join(config.supported_versions)
    if distro != config.supported_distro:
        return StepResult.failure(
            ErrorKind.UNSUPPORTED_DISTRO,
            f"Unsupported distribution: {distro or 'unknown'}",
            hint=f"This script supports Ubuntu {supported} only",
        )
    if version not in config.supported_versions:
        return StepResult.failure(
            ErrorKind.UNSUPPORTED_VERSION,
            f"Unsupported Ubuntu version: {version}",
            hint=f"This script supports Ubuntu {supported} only",
        )
    pretty_name = os_info.get("PRETTY_NAME", f"Ubuntu {version}")
    print_success(f"{pretty_name} detected - Supported")

    print_substep("Checking system architecture")
    arch_alt = machine if machine is not None else platform.machine()
    arch = dict(config.supported_architectures).get(arch_alt)
    if arch is None:
        return StepResult.failure(
            ErrorKind.UNSUPPORTED_ARCH, f"Unsupported architecture: {arch_alt}"
        )
    print_success(f"Architecture {arch} is supported")

    return StepResult.success(
        OSDescriptor(
            distro=distro,
            codename=os_info.get("VERSION_CODENAME", ""),
            version=version,
            arch=arch,
            arch_alt=arch_alt,
            pretty_name=pretty_name,
        )
    )


# ----------------------------------------------------------------
# System Requirements
# ----------------------------------------------------------------
def get_free_disk_space(path: str = "/") -> int:
    """Bytes available to unprivileged users on the filesystem holding ``path``."""
    stat = os.statvfs(path)
    return stat.f_bavail * stat.f_frsize


def get_total_memory(meminfo_file: Path = Path(MEMINFO_FILE)) -> int:
    """Total memory in bytes from the MemTotal line of /proc/meminfo."""
    with open(meminfo_file) as f:
        for line in f:
            if line.startswith("MemTotal:"):
                return int(line.split()[1]) * 1024
    raise ValueError(f"MemTotal not found in {meminfo_file}")


def check_system_requirements(config: InstallerConfig) -> StepResult:
    """Warn about low disk space or memory. Never fails."""
    print_step("Checking system requirements")
    warnings: List[str] = []

    disk_free: Optional[int] = None
    try:
        disk_free = get_free_disk_space("/")
    except OSError as e:
        warnings.append(f"Could not check disk space: {e}")
    if disk_free is not None:
        if disk_free < config.min_disk_bytes:
            warnings.append(
                f"Low disk space detected. Minimum {format_size(config.min_disk_bytes)} recommended."
            )
        else:
            print_success(f"Sufficient disk space available ({format_size(disk_free)})")

    memory: Optional[int] = None
    try:
        memory = get_total_memory(config.meminfo_file)
    except (OSError, ValueError) as e:
        warnings.append(f"Could not check memory: {e}")
    if memory is not None:
        if memory < config.min_memory_bytes:
            warnings.append(
                f"Low memory detected. Minimum {format_size(config.min_memory_bytes)} recommended."
            )
        else:
            print_success(f"Sufficient memory available ({memory // 1024**2} MB)")

    for warning in warnings:
        logger.warning(warning)
        print_warning(warning)
    return StepResult.success(ResourceReport(disk_free, memory, tuple(warnings)))


# ----------------------------------------------------------------
# Package Update
# ----------------------------------------------------------------
def update_system(runner: CommandRunner) -> StepResult:
    """Refresh the package index, then upgrade installed packages."""
    print_step("Updating system packages")

    print_substep("Updating package index")
    result = runner.run_logged(["sudo", "apt-get", "update"])
    if not result.ok:
        return result

    print_substep("Upgrading packages")
    result = runner.run_logged(["sudo", "apt-get", "upgrade", "-y"])
    if not result.ok:
        return result

    print_success("System packages updated successfully")
    return StepResult.success()


# ----------------------------------------------------------------
# Remote Installation Script
# ----------------------------------------------------------------
def fetch_install_script(url: str) -> bytes:
    """Download the installation script as raw bytes. Raises requests.RequestException."""
    logger.info("Fetching installation script from %s", url)
    response = requests.get(url)
    response.raise_for_status()
    return response.content


def run_install_script(config: InstallerConfig, runner: CommandRunner) -> StepResult:
    """Download the remote script, then run it with bash."""
    print_step("Running installation script")
    print_info(f"Installing from: {config.base_url}")
    print_info(f"Script located at: {config.script_path}")

    result = runner.run_logged(["whoami"])
    if not result.ok:
        return result

    runner.token.raise_if_cancelled()
    try:
        script = fetch_install_script(config.install_url)
    except requests.RequestException as e:
        logger.error("Download failed: %s", e)
        return StepResult.failure(
            ErrorKind.FETCH_FAILED, f"Failed to download installation script: {e}"
        )

    fd, script_file = tempfile.mkstemp(prefix=f"{config.app_name}_install_", suffix=".sh")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(script)
        result = runner.run_logged(["bash", script_file])
    finally:
        os.remove(script_file)
    if not result.ok:
        return StepResult.failure(
            ErrorKind.SCRIPT_FAILED,
            f"Installation script exited with code {result.returncode}",
            hint=result.hint,
            returncode=result.returncode,
        )

    print_success("Docker installed successfully")
    return StepResult.success()


# ----------------------------------------------------------------
# Post-installation
# ----------------------------------------------------------------
def show_post_install_info(config: InstallerConfig, descriptor: OSDescriptor) -> None:
    """Print the log location and detected system details."""
    print_step("Post-installation information")
    print_info(f"Log file saved to: {config.log_file}")
    print_info(
        f"System information: {descriptor.distro} {descriptor.codename} "
        f"({descriptor.version}) on {descriptor.arch} ({descriptor.arch_alt})"
    )
    console.print()
    console.print(
        Panel(
            Text.from_markup(f"[bold {NordColors.GREEN}]{config.script_name} completed successfully![/]"),
            border_style=Style(color=NordColors.GREEN),
            padding=(1, 2),
            title=f"[bold {NordColors.GREEN}]Done[/]",
        )
    )


# ----------------------------------------------------------------
# Main Installation Routine
# ----------------------------------------------------------------
def abort(result: StepResult) -> int:
    """Report a failed step and return the failure exit code."""
    logger.error("%s: %s", result.error.value if result.error else "error", result.message)
    print_error(result.message)
    if result.hint:
        print_info(result.hint)
    return EXIT_FAILURE


def report_interrupted(config: InstallerConfig, error: InstallInterrupted) -> int:
    """Print the interruption notice and return the interrupted exit code."""
    logger.error("%s", error)
    print_error("Script interrupted by user")
    print_info(f"Log file saved to: {config.log_file}")
    return EXIT_INTERRUPTED


def run_installer(
    config: InstallerConfig,
    token: Optional[CancellationToken] = None,
    runner: Optional[CommandRunner] = None,
) -> int:
    """Run every step in order and return the process exit code."""
    token = token or CancellationToken()
    runner = runner or CommandRunner(config.log_file, token)
    try:
        console.print(create_header(config))

        result = check_privileges(runner)
        if not result.ok:
            return abort(result)

        result = check_system_compatibility(config)
        if not result.ok:
            return abort(result)
        descriptor: OSDescriptor = result.value

        check_system_requirements(config)

        result = update_system(runner)
        if not result.ok:
            return abort(result)

        result = run_install_script(config, runner)
        if not result.ok:
            return abort(result)

        show_post_install_info(config, descriptor)
        return EXIT_SUCCESS
    except InstallInterrupted as e:
        return report_interrupted(config, e)


# ----------------------------------------------------------------
# Main CLI Entry Point with Click
# ----------------------------------------------------------------
@click.command()
@click.option(
    "--log-dir",
    default=DEFAULT_LOG_DIR,
    show_default=True,
    type=click.Path(file_okay=False),
    help="Directory for the run's log file",
)
@click.option("--debug", is_flag=True, help="Mirror the log to the console")
@click.version_option(VERSION, prog_name=SCRIPT_NAME)
def main(log_dir: str, debug: bool) -> None:
    """Install Docker on a supported Ubuntu system."""
    if debug:
        install_rich_traceback(show_locals=True)
    config = build_config(log_dir=log_dir)
    try:
        start_logging(config, debug=debug)
    except OSError as e:
        print_error(f"Could not create log file {config.log_file}: {e}")
        sys.exit(EXIT_FAILURE)

    token = CancellationToken()
    previous = install_signal_handlers(token)
    try:
        try:
            exit_code = run_installer(config, token)
        finally:
            for sig, handler in previous.items():
                signal.signal(sig, handler)
    except InstallInterrupted as e:
        exit_code = report_interrupted(config, e)
    except Exception as e:
        logger.exception("Unexpected error")
        print_error(f"Unexpected error: {e}")
        if debug:
            error_console.print_exception()
        exit_code = EXIT_FAILURE
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
