import asyncio
import logging
from typing import Optional

import netifaces

logger = logging.getLogger(__name__)


def _default_gateway(family) -> Optional[str]:
    """
    Reads the default route for an address family from the routing table.
    netifaces.gateways() returns {'default': {AF_INET: ('192.168.1.1', 'eth0'), ...}, ...}
    """
    try:
        default = netifaces.gateways().get("default", {}).get(family)
    except Exception as e:
        # A missing gateway is normal (offline host, container without routes)
        logger.debug("Could not read the routing table: %s", e)
        return None

    if not default:
        return None
    return default[0]


async def get_gateway_ipv4() -> Optional[str]:
    """Returns the system default gateway IPv4 address, or None if there isn't one"""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, _default_gateway, netifaces.AF_INET)


async def get_gateway_ipv6() -> Optional[str]:
    """Same as get_gateway_ipv4(), for the IPv6 default route"""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, _default_gateway, netifaces.AF_INET6)
