"""Environment snapshot used to seed flag defaults."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

CERT_PATH_ENV = "DOCKER_CERT_PATH"
TLS_VERIFY_ENV = "DOCKER_TLS_VERIFY"
CONFIG_DIR_ENV = "DOCKER_CONFIG"
CONFIG_FILE_DIR = ".docker"


def _env_str(mapping: Mapping[str, str], name: str) -> str:
    return mapping.get(name) or ""


def _env_flag(mapping: Mapping[str, str], name: str) -> bool:
    # Presence with any non-empty value counts, "0" included.
    return _env_str(mapping, name) != ""


def resolve_config_dir(
    mapping: Mapping[str, str], home: Optional[str] = None
) -> str:
    """Return the user configuration directory for the engine CLI."""
    config_dir = _env_str(mapping, CONFIG_DIR_ENV)
    if config_dir:
        return config_dir
    base = home if home is not None else str(Path.home())
    return os.path.join(base, CONFIG_FILE_DIR)


@dataclass(frozen=True)
class Environment:
    """Immutable view of the deployment environment relevant to flags."""

    cert_path: str
    tls_verify: bool
    config_dir: str

    @classmethod
    def from_mapping(
        cls, mapping: Mapping[str, str], home: Optional[str] = None
    ) -> "Environment":
        """Build a snapshot from an arbitrary environment mapping."""
        config_dir = resolve_config_dir(mapping, home)
        cert_path = _env_str(mapping, CERT_PATH_ENV) or config_dir
        return cls(
            cert_path=cert_path,
            tls_verify=_env_flag(mapping, TLS_VERIFY_ENV),
            config_dir=config_dir,
        )

    @classmethod
    def from_os(cls) -> "Environment":
        """Snapshot the current process environment."""
        return cls.from_mapping(os.environ)
