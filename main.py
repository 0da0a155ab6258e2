"""Resolve the flags shared by the engine client and daemon."""

import json
import logging
import os
import sys
from dataclasses import asdict
from typing import Any, Optional, Sequence

from cliflags.bootstrap.environment import Environment
from cliflags.bootstrap.logging_setup import ComponentLoggerAdapter, configure_logging
from cliflags.domain.errors import ConfigurationError
from cliflags.flags.common import CommonFlags, init_common_flags

MAIN_LOGGER = ComponentLoggerAdapter(logging.getLogger("engine.main"), {})


def build_common_flags(environment: Optional[Environment] = None) -> CommonFlags:
    """Register the common flags plus the entry point's logging output flags."""
    common_flags = init_common_flags(environment)
    parser = common_flags.flag_set.parser
    parser.add_argument(
        "--log-destination",
        default=os.getenv("ENGINE_LOG_DESTINATION", "stderr"),
        help="stderr, stdout or a file path; stdout is shared with the result",
    )
    parser.add_argument(
        "--log-format",
        default=os.getenv("ENGINE_LOG_FORMAT", "json").lower(),
        choices=["json", "text"],
        type=str.lower,
    )
    return common_flags


def resolved_configuration(common_flags: CommonFlags) -> dict[str, Any]:
    """Return the normalized configuration as plain data."""
    tls_options = common_flags.tls_options
    return {
        "debug": common_flags.debug,
        "hosts": list(common_flags.hosts),
        "log_level": common_flags.log_level,
        "tls": common_flags.tls,
        "tls_verify": common_flags.tls_verify,
        "tls_options": asdict(tls_options) if tls_options is not None else None,
        "trust_key": common_flags.trust_key,
    }


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse and normalize the common flags, then print the result as JSON."""
    common_flags = build_common_flags()
    namespace = common_flags.parse(sys.argv[1:] if argv is None else argv)
    try:
        common_flags.post_parse()
    except ConfigurationError as error:
        print(error, file=sys.stderr)
        return 1

    level = "debug" if common_flags.debug else common_flags.log_level
    configure_logging(
        level, namespace.log_destination, use_json=namespace.log_format == "json"
    )

    configuration = resolved_configuration(common_flags)
    tls_options = configuration["tls_options"] or {}
    MAIN_LOGGER.info(
        "Resolved common flags",
        extra={
            "event": "configuration_resolved",
            "debug": common_flags.debug,
            "hosts": configuration["hosts"],
            "log_level": level,
            "log_destination": namespace.log_destination,
            "tls": common_flags.tls,
            "tls_verify": common_flags.tls_verify,
            "ca_file": tls_options.get("ca_file"),
            "cert_file": tls_options.get("cert_file"),
            "key_file": tls_options.get("key_file"),
            "insecure_skip_verify": tls_options.get("insecure_skip_verify"),
        },
    )
    print(json.dumps(configuration, sort_keys=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
