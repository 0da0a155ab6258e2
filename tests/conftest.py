"""Shared pytest fixtures for integration and unit tests."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Callable

import pytest

if TYPE_CHECKING:
    from _pytest.monkeypatch import MonkeyPatch

PROJECT_ROOT = Path(__file__).resolve().parent.parent
ENTRYPOINT = PROJECT_ROOT / "main.py"
ENGINE_ENV_VARS = (
    "DOCKER_CERT_PATH",
    "DOCKER_TLS_VERIFY",
    "DOCKER_CONFIG",
    "ENGINE_LOG_DESTINATION",
    "ENGINE_LOG_FORMAT",
)


@pytest.fixture(autouse=True)
def clean_engine_environment(monkeypatch: "MonkeyPatch") -> None:
    """Keep the developer's own engine settings out of the tests."""
    for name in ENGINE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Expose the repository root path to tests."""

    return PROJECT_ROOT


@pytest.fixture(name="run_entrypoint")
def _run_entrypoint() -> Callable[..., subprocess.CompletedProcess[str]]:
    """Run main.py in a subprocess with a controlled environment."""

    def run(
        args: list[str], env: dict[str, str] | None = None
    ) -> subprocess.CompletedProcess[str]:
        process_env = {
            key: value
            for key, value in os.environ.items()
            if key not in ENGINE_ENV_VARS
        }
        if env:
            process_env.update(env)
        return subprocess.run(
            [sys.executable, str(ENTRYPOINT), *args],
            cwd=PROJECT_ROOT,
            env=process_env,
            capture_output=True,
            text=True,
            timeout=30,
            check=False,
        )

    return run
