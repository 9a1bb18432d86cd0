"""Local network address discovery for operator-facing startup output."""

from __future__ import annotations

import ipaddress
import logging
import socket

import psutil

logger = logging.getLogger(__name__)

FALLBACK_ADDRESS = "localhost"


def network_resolve_local_ipv4(fallback: str = FALLBACK_ADDRESS) -> str:
    """Return the first non-loopback IPv4 address of this host.

    Interfaces are scanned in enumeration order. Failure to enumerate is not
    fatal because the address is only used for display.

    Args:
        fallback: Value returned when no external IPv4 address is found.

    Returns:
        str: Dotted-quad IPv4 address or the fallback value.
    """

    try:
        interface_addresses = psutil.net_if_addrs()
    except (OSError, psutil.Error) as error:
        logger.warning("Network interface enumeration failed, using %s: %s", fallback, error)
        return fallback

    for interface_name, addresses in interface_addresses.items():
        for address in addresses:
            if address.family != socket.AF_INET:
                continue
            try:
                candidate = ipaddress.IPv4Address(address.address)
            except ValueError:
                continue
            if candidate.is_loopback:
                continue
            logger.debug("Resolved network address %s on interface %s", candidate, interface_name)
            return str(candidate)
    return fallback
