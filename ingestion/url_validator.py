"""
URL Validator - reject malformed URLs before any network activity.

Optionally also blocks URLs that target internal infrastructure
(loopback, private ranges, link-local / cloud metadata endpoints) so a
deployment that ingests untrusted URLs is not an SSRF vector.
"""

import ipaddress
from urllib.parse import urlparse

from .exceptions import InvalidInputError

# Blocked IP ranges (private, loopback, link-local, metadata)
BLOCKED_IP_RANGES = [
    # IPv4 private ranges
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
    # Loopback
    ipaddress.ip_network("127.0.0.0/8"),
    # Link-local
    ipaddress.ip_network("169.254.0.0/16"),
    # Reserved
    ipaddress.ip_network("0.0.0.0/8"),
    # IPv6 equivalents
    ipaddress.ip_network("::1/128"),
    ipaddress.ip_network("fc00::/7"),
    ipaddress.ip_network("fe80::/10"),
]

BLOCKED_HOSTNAMES = {
    "localhost",
    "localhost.localdomain",
    "metadata",
    "metadata.google.internal",
}

ALLOWED_SCHEMES = {"http", "https"}


def is_ip_blocked(ip_str: str) -> bool:
    """Check if an IP address is in a blocked range."""
    try:
        ip = ipaddress.ip_address(ip_str)
    except ValueError:
        return False
    return any(ip in network for network in BLOCKED_IP_RANGES)


def validate_url(url: str, block_private: bool = False) -> str:
    """
    Validate that a URL is well-formed and fetchable.

    Args:
        url: The URL to validate
        block_private: Also reject hosts on internal networks

    Returns:
        The URL, unchanged

    Raises:
        InvalidInputError: If the URL fails validation
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidInputError("URL must be a non-empty string")

    if any(ch.isspace() for ch in url.strip()):
        raise InvalidInputError(f"Invalid URL format: {url!r}")

    try:
        parsed = urlparse(url.strip())
        parsed.port  # raises ValueError on a malformed port
    except ValueError as e:
        raise InvalidInputError(f"Invalid URL format: {e}") from e

    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        raise InvalidInputError(
            f"URL scheme '{parsed.scheme}' is not allowed. Use http or https."
        )

    if not parsed.hostname:
        raise InvalidInputError("URL must include a hostname")

    if block_private:
        _check_host(parsed.hostname.lower())

    return url


def _check_host(hostname: str) -> None:
    if hostname in BLOCKED_HOSTNAMES:
        raise InvalidInputError(f"Access to '{hostname}' is not allowed")

    try:
        ip = ipaddress.ip_address(hostname)
    except ValueError:
        ip = None

    if ip is not None:
        if is_ip_blocked(str(ip)):
            raise InvalidInputError(f"Access to IP address '{ip}' is not allowed")
        return

    for suffix in (".local", ".internal", ".localhost"):
        if hostname.endswith(suffix):
            raise InvalidInputError(f"Access to {suffix} domains is not allowed")

