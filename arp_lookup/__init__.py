"""
Resolve the MAC address of a device on the local network from the system's
ARP / neighbor table, using the ping and arp utilities shipped with Linux,
macOS and Windows.
"""

from arp_lookup.dispatcher import lookup, lookup_sync
from arp_lookup.errors import (
    ArpLookupError,
    InvalidAddress,
    NotFound,
    ProcessError,
    Timeout,
    UnsupportedPlatform,
)
from arp_lookup.gateway import get_gateway_ipv4, get_gateway_ipv6
from arp_lookup.mac import MacAddress

__version__ = "1.0.0"

__all__ = [
    "ArpLookupError",
    "InvalidAddress",
    "MacAddress",
    "NotFound",
    "ProcessError",
    "Timeout",
    "UnsupportedPlatform",
    "get_gateway_ipv4",
    "get_gateway_ipv6",
    "lookup",
    "lookup_sync",
]
