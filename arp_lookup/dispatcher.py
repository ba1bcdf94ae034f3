import asyncio
import ipaddress
import logging
from functools import lru_cache
from typing import Optional, Union

from arp_lookup.errors import InvalidAddress
from arp_lookup.platforms import NeighborTable, select_strategy
from arp_lookup.process import PROCESS_TIMEOUT

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def get_strategy() -> NeighborTable:
    """Strategy for the running OS, chosen on first use and kept for the process"""
    return select_strategy()


def validate_ip(ip) -> Union[ipaddress.IPv4Address, ipaddress.IPv6Address]:
    """Parses ip as an IPv4 or IPv6 address or raises InvalidAddress"""
    # ip_address() also accepts integers and bytes; only text is an address here
    if not isinstance(ip, str):
        raise InvalidAddress(ip)
    try:
        return ipaddress.ip_address(ip)
    except ValueError:
        raise InvalidAddress(ip) from None


async def lookup(ip: str, separator: str = ":", timeout: Optional[float] = PROCESS_TIMEOUT) -> str:
    """
    Retrieves the MAC address of the directly connected device at ip.

    Pings the target once so the neighbor table holds a fresh entry, then
    reads that entry with the system arp utility. The octets are returned as
    uppercase hex joined by separator ('AA:BB:CC:DD:EE:FF' by default,
    'AABBCCDDEEFF' for an empty separator).

    Raises InvalidAddress, UnsupportedPlatform, ProcessError, NotFound or
    Timeout (all ArpLookupError).
    """
    address = validate_ip(ip)
    strategy = get_strategy()

    if address.version == 6:
        logger.warning("IPv6 neighbor lookup is not supported by arp; %s will most likely not be found", ip)

    logger.debug("Looking up %s with %r", ip, strategy)
    mac = await strategy.resolve(ip, timeout=timeout)

    return separator.join(str(mac).split(":"))


def lookup_sync(ip: str, separator: str = ":", timeout: Optional[float] = PROCESS_TIMEOUT) -> str:
    """Blocking lookup() for code that does not run an event loop"""
    return asyncio.run(lookup(ip, separator, timeout=timeout))
