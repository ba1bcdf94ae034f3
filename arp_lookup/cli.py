#!/usr/bin/env python3
"""
MAC Lookup Tool
Resolves IP addresses on the local network to MAC addresses through the ARP table
"""

import argparse
import asyncio
import logging
import sys
from datetime import datetime

from tabulate import tabulate

from arp_lookup.dispatcher import lookup
from arp_lookup.errors import ArpLookupError
from arp_lookup.gateway import get_gateway_ipv4
from arp_lookup.process import PROCESS_TIMEOUT


def build_parser():
    parser = argparse.ArgumentParser(
        prog="lookup-mac",
        description="Look up the MAC address of devices on the local network segment."
    )
    parser.add_argument("ips", nargs="*", metavar="IP", help="IPv4 or IPv6 address to look up")
    parser.add_argument("-g", "--gateway", action="store_true",
                        help="also look up the default IPv4 gateway")
    parser.add_argument("-s", "--separator", default=":",
                        help="separator between MAC octets (default ':', use '' for none)")
    parser.add_argument("-t", "--timeout", type=float, default=PROCESS_TIMEOUT,
                        help=f"seconds allowed for each ping/arp process (default {PROCESS_TIMEOUT})")
    parser.add_argument("-v", "--verbose", action="store_true", help="print debug logging")
    return parser


async def lookup_one(ip, separator, timeout):
    """Returns a table row [ip, mac, status] for one address"""
    try:
        mac = await lookup(ip, separator, timeout=timeout)
        return [ip, mac, "🟢 Found"]
    except ArpLookupError as e:
        return [ip, "N/A", f"🔴 {type(e).__name__}: {e}"]


async def lookup_all(ips, separator, timeout):
    """Look up every address concurrently, keeping the input order"""
    return await asyncio.gather(*(lookup_one(ip, separator, timeout) for ip in ips))


async def run(args):
    ips = list(args.ips)

    if args.gateway:
        gateway = await get_gateway_ipv4()
        if gateway:
            print(f"🌐 Default gateway: {gateway}")
            ips.append(gateway)
        else:
            print("⚠️  No default IPv4 gateway found")

    if not ips:
        print("❌ Nothing to look up: pass at least one IP or --gateway")
        return 2

    print("=" * 70)
    print(f"🔍 MAC LOOKUP ({datetime.now().strftime('%Y-%m-%d %H:%M:%S')})")
    print("=" * 70)

    rows = await lookup_all(ips, args.separator, args.timeout)

    print(tabulate(rows, headers=["IP", "MAC", "Status"], tablefmt="grid"))

    found = sum(1 for row in rows if row[1] != "N/A")
    print(f"\n📊 Summary: {found} found, {len(rows) - found} failed (of {len(rows)} total)")

    return 0 if found == len(rows) else 1


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        print("\n\n⏹️  Lookup stopped by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
