"""Validation of daemon socket addresses given with ``-H/--host``."""

import argparse

SIMPLE_PROTOCOLS = {"unix", "npipe"}
MAX_PORT = 65535


def _invalid(value: str) -> argparse.ArgumentTypeError:
    return argparse.ArgumentTypeError(f"Invalid bind address format: {value}")


def _split_host_port(host_port: str, original: str) -> tuple[str, str]:
    """Split ``host[:port]`` or ``[v6addr][:port]``; port may be empty."""
    if host_port.startswith("["):
        end = host_port.find("]")
        if end == -1:
            raise _invalid(original)
        rest = host_port[end + 1 :]
        if rest and not rest.startswith(":"):
            raise _invalid(original)
        return host_port[1:end], rest[1:]
    if host_port.count(":") > 1:
        # Unbracketed IPv6 address with no port.
        return host_port, ""
    host, _, port = host_port.partition(":")
    return host, port


def _check_tcp_address(address: str, original: str) -> None:
    if address.startswith("tcp://"):
        address = address[len("tcp://") :]
    if not address:
        return
    if "://" in address:
        raise _invalid(original)

    host_port = address.split("/", 1)[0]
    _, port = _split_host_port(host_port, original)
    if not port:
        return
    if not port.isdigit() or int(port) > MAX_PORT:
        raise _invalid(original)


def _check_simple_address(proto: str, address: str, original: str) -> None:
    remainder = address[len(proto) + 3 :]
    if "://" in remainder:
        raise _invalid(original)


def validate_host(value: str) -> str:
    """Check a socket address and hand it back untouched.

    An empty value means "use the default socket" and is accepted. The
    caller keeps what the user typed so TLS can be applied to it later.
    """
    host = value.strip()
    if not host:
        return value

    proto, sep, _ = host.partition("://")
    if not sep:
        _check_tcp_address(host, value)
    elif proto == "tcp":
        _check_tcp_address(host, value)
    elif proto in SIMPLE_PROTOCOLS:
        _check_simple_address(proto, host, value)
    elif proto == "fd":
        pass
    else:
        raise _invalid(value)
    return value
