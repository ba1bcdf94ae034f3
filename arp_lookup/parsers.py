"""
Parsers for the text printed by each platform's arp utility.

These are pure functions: raw table text in, MacAddress out (or NotFound).
Column positions are a contract with the utility's output format, so every
layout handled here has a captured sample in arp_lookup_test/test_parsers.py.

Sample outputs:

    Linux (net-tools `arp -n 192.168.1.1`):
        Address                  HWtype  HWaddress           Flags Mask            Iface
        192.168.1.1              ether   aa:bb:cc:dd:ee:ff   C                     eth0

    Windows (`arp -a 192.168.1.1`, CRLF line endings):

        Interface: 192.168.1.10 --- 0xb
          Internet Address      Physical Address      Type
          192.168.1.1           aa-bb-cc-dd-ee-ff     dynamic

    Darwin (`arp -n 192.168.1.1`):
        ? (192.168.1.1) at a:b:c:d:e:f on en0 ifscope [ethernet]
"""

from typing import NamedTuple

from arp_lookup.errors import NotFound
from arp_lookup.mac import MacAddress

# Windows prints a blank line, the interface banner and the column header first
WINDOWS_HEADER_LINES = 3


class NeighborRow(NamedTuple):
    """One matched line of a neighbor table"""
    address: str
    hardware_address: str


def _to_mac(row: NeighborRow, ip: str) -> MacAddress:
    # Rows like '(incomplete)' or '<incomplete>' have no usable hardware address
    try:
        return MacAddress.parse(row.hardware_address)
    except ValueError:
        raise NotFound(ip) from None


def parse_linux(output: str, ip: str) -> MacAddress:
    """
    The first line is the column header and the second one the entry.
    A full row has 5 columns with the MAC third; shorter rows (no HWtype
    column) carry it second.
    """
    table = output.split("\n")
    if len(table) < 2:
        raise NotFound(ip)

    parts = table[1].split()
    index = 2 if len(parts) == 5 else 1
    if len(parts) <= index:
        raise NotFound(ip)

    return _to_mac(NeighborRow(parts[0], parts[index]), ip)


def parse_windows(output: str, ip: str) -> MacAddress:
    """Scans the rows below the header for the one whose address is exactly ip."""
    table = output.split("\r\n")

    for line in table[WINDOWS_HEADER_LINES:]:
        parts = line.split()
        if len(parts) >= 2 and parts[0] == ip:
            return _to_mac(NeighborRow(parts[0], parts[1].replace("-", ":")), ip)

    raise NotFound(ip)


def parse_darwin(output: str, ip: str) -> MacAddress:
    """
    BSD arp prints one sentence per entry; the hardware address is the fourth
    word, or the word 'no' in '<ip> (<ip>) -- no entry'. Octets come without
    leading zeros and are padded by MacAddress.parse.
    """
    parts = output.split()
    if len(parts) < 4 or parts[3] == "no":
        raise NotFound(ip)

    return _to_mac(NeighborRow(parts[1].strip("()"), parts[3]), ip)
