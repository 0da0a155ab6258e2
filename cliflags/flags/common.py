"""Flags shared by the engine client and daemon."""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional, Sequence

from cliflags.bootstrap.environment import Environment
from cliflags.bootstrap.log_level import set_log_level
from cliflags.bootstrap.logging_setup import ComponentLoggerAdapter
from cliflags.domain.hosts import validate_host
from cliflags.domain.tls_options import TLSOptions
from cliflags.flags.flag_set import FlagSet

FLAGS_LOGGER = ComponentLoggerAdapter(logging.getLogger("engine.flags"), {})

DEFAULT_TRUST_KEY_FILE = "key.json"
DEFAULT_CA_FILE = "ca.pem"
DEFAULT_KEY_FILE = "key.pem"
DEFAULT_CERT_FILE = "cert.pem"
TLS_VERIFY_KEY = "tlsverify"


@dataclass
class CommonFlags:
    """Configuration populated by the common flags."""

    flag_set: FlagSet
    debug: bool = False
    hosts: list[str] = field(default_factory=list)
    log_level: str = "info"
    tls: bool = False
    tls_verify: bool = False
    tls_options: Optional[TLSOptions] = None
    trust_key: str = ""

    def parse(self, argv: Sequence[str]):
        """Parse ``argv`` into this configuration."""
        return self.flag_set.parse(argv)

    def post_parse(self) -> None:
        """Run the single reconciliation pass after parsing."""
        post_parse_common(self)


def init_common_flags(environment: Optional[Environment] = None) -> CommonFlags:
    """Register the common flags and return a configuration with defaults set."""
    env = environment if environment is not None else Environment.from_os()
    common_flags = CommonFlags(flag_set=FlagSet())
    cmd = common_flags.flag_set

    cmd.bool_var(common_flags, "debug", ["-D", "--debug"], False, "Enable debug mode")
    cmd.string_var(
        common_flags,
        "log_level",
        ["-l", "--log-level"],
        "info",
        "Set the logging level",
    )
    cmd.bool_var(
        common_flags, "tls", ["--tls"], False, "Use TLS; implied by --tlsverify"
    )
    cmd.bool_var(
        common_flags,
        "tls_verify",
        ["--" + TLS_VERIFY_KEY],
        env.tls_verify,
        "Use TLS and verify the remote",
    )

    tls_options = TLSOptions()
    common_flags.tls_options = tls_options
    cmd.string_var(
        tls_options,
        "ca_file",
        ["--tlscacert"],
        os.path.join(env.cert_path, DEFAULT_CA_FILE),
        "Trust certs signed only by this CA",
    )
    cmd.string_var(
        tls_options,
        "cert_file",
        ["--tlscert"],
        os.path.join(env.cert_path, DEFAULT_CERT_FILE),
        "Path to TLS certificate file",
    )
    cmd.string_var(
        tls_options,
        "key_file",
        ["--tlskey"],
        os.path.join(env.cert_path, DEFAULT_KEY_FILE),
        "Path to TLS key file",
    )

    cmd.list_var(
        common_flags,
        "hosts",
        ["-H", "--host"],
        validate_host,
        "Daemon socket(s) to connect to",
    )
    return common_flags


def _missing_file(path: str) -> bool:
    try:
        os.stat(path)
    except FileNotFoundError:
        return True
    except OSError:
        # Present but not stat-able; keep the path.
        return False
    return False


def post_parse_common(common_flags: CommonFlags) -> None:
    """Reconcile TLS flags and apply the log level after argument parsing."""
    cmd = common_flags.flag_set

    set_log_level(common_flags.log_level)

    # Giving --tlsverify at all, with either value, turns TLS on. The value
    # can also be true without the flag because of DOCKER_TLS_VERIFY.
    if cmd.is_set(TLS_VERIFY_KEY) or common_flags.tls_verify:
        if not common_flags.tls:
            FLAGS_LOGGER.debug(
                "TLS enabled by --tlsverify",
                extra={"event": "tls_inferred", "tls_verify": common_flags.tls_verify},
            )
        common_flags.tls = True

    if not common_flags.tls:
        common_flags.tls_options = None
        return

    tls_options = common_flags.tls_options
    tls_options.insecure_skip_verify = not common_flags.tls_verify

    # Defaulted cert and key paths that point at nothing mean "no client
    # credentials". The CA path is left alone.
    if not cmd.is_set("tlscert") and _missing_file(tls_options.cert_file):
        FLAGS_LOGGER.debug(
            "Default TLS certificate not found",
            extra={
                "event": "tls_path_cleared",
                "flag": "tlscert",
                "path": tls_options.cert_file,
            },
        )
        tls_options.cert_file = ""
    if not cmd.is_set("tlskey") and _missing_file(tls_options.key_file):
        FLAGS_LOGGER.debug(
            "Default TLS key not found",
            extra={
                "event": "tls_path_cleared",
                "flag": "tlskey",
                "path": tls_options.key_file,
            },
        )
        tls_options.key_file = ""
