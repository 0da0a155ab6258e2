"""TLS option bundle handed to the TLS configuration consumer."""

from dataclasses import dataclass


@dataclass
class TLSOptions:
    """Paths to TLS material plus the skip-verification switch."""

    ca_file: str = ""
    cert_file: str = ""
    key_file: str = ""
    insecure_skip_verify: bool = False
