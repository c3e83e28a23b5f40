from __future__ import annotations

from dataclasses import dataclass
import importlib.util
import subprocess
import sys
from typing import Sequence

SUPPORTED_BROWSERS = {"chromium", "firefox", "webkit", "chrome", "msedge"}


class ToolMissingError(RuntimeError):
    def __init__(self, tool: str) -> None:
        super().__init__(f"Required tool not installed: {tool}")
        self.tool = tool


class ProcessFailedError(RuntimeError):
    def __init__(self, cmd: Sequence[str], returncode: int, stdout: str, stderr: str) -> None:
        super().__init__(f"Process failed with code {returncode}: {' '.join(cmd)}")
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


@dataclass(frozen=True)
class ProcessResult:
    stdout: str
    stderr: str
    returncode: int


def ensure_module(name: str) -> None:
    if importlib.util.find_spec(name) is None:
        raise ToolMissingError(name)


def run_checked(cmd: Sequence[str]) -> ProcessResult:
    proc = subprocess.run(list(cmd), capture_output=True, text=True)
    if proc.returncode != 0:
        raise ProcessFailedError(cmd, proc.returncode, proc.stdout, proc.stderr)
    return ProcessResult(stdout=proc.stdout, stderr=proc.stderr, returncode=proc.returncode)


def build_install_command(browser: str, *, with_deps: bool = False) -> list[str]:
    if browser not in SUPPORTED_BROWSERS:
        raise ValueError(f"Unsupported browser: {browser}")
    cmd = [sys.executable, "-m", "playwright", "install"]
    if with_deps:
        cmd.append("--with-deps")
    cmd.append(browser)
    return cmd
