"""Pytest configuration and fixtures"""

import logging
import stat
from pathlib import Path
from typing import Callable, List, Optional, Set, Tuple

import pytest
import structlog


class RecordingRunner:
    """Stands in for the script runner and remembers every call"""

    def __init__(self, failing: Optional[Set[Tuple[str, str]]] = None):
        # (script, package name) pairs that should report failure
        self.failing = failing or set()
        self.calls: List[Tuple[str, str, str]] = []

    def __call__(self, script: str, name: str, origin: str) -> bool:
        self.calls.append((script, name, origin))
        return (script, name) not in self.failing


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging setup done by CLI invocations"""
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def invocation_log(tmp_path: Path) -> Path:
    """File the test scripts append their arguments to"""
    return tmp_path / "invocations.log"


@pytest.fixture
def make_script(tmp_path: Path, invocation_log: Path) -> Callable[..., Path]:
    """Create an executable shell script that logs its arguments"""

    def _make_script(name: str = "notify.sh", exit_code: int = 0, body: str = "") -> Path:
        script = tmp_path / name
        script.write_text(
            "#!/bin/sh\n"
            f'echo "$0 $1 $2" >> "{invocation_log}"\n'
            f"{body}\n"
            f"exit {exit_code}\n"
        )
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _make_script


@pytest.fixture
def read_invocations(invocation_log: Path) -> Callable[[], List[str]]:
    """Lines written by the test scripts, one per invocation"""

    def _read() -> List[str]:
        if not invocation_log.exists():
            return []
        return invocation_log.read_text().splitlines()

    return _read
