import re
from typing import Tuple

# One or two hex digits per octet; some BSD-style tables drop the leading zero
_OCTET_RE = re.compile(r"^[0-9A-Fa-f]{1,2}$")


class MacAddress:
    """
    Hardware address held as exactly six byte octets.

    str() renders uppercase hex pairs joined by ':', which is the canonical
    internal form. format() re-joins the same octets with any separator.
    """

    __slots__ = ("octets",)

    def __init__(self, octets):
        octets = tuple(octets)
        if len(octets) != 6 or not all(isinstance(o, int) and 0 <= o <= 0xFF for o in octets):
            raise ValueError(f"A MAC address needs six octets in 0..255, got {octets!r}")
        self.octets: Tuple[int, ...] = octets

    @classmethod
    def parse(cls, raw: str, separator: str = ":") -> "MacAddress":
        """
        Parses a raw table token such as 'aa:bb:cc:dd:ee:ff' or 'a:b:c:d:e:f'.
        Single-digit octets are zero-padded. Raises ValueError for anything else.
        """
        parts = raw.strip().split(separator)
        if len(parts) != 6 or not all(_OCTET_RE.match(part) for part in parts):
            raise ValueError(f"{raw!r} is not a MAC address")
        return cls(int(part, 16) for part in parts)

    def format(self, separator: str = ":") -> str:
        return separator.join(f"{octet:02X}" for octet in self.octets)

    def __str__(self):
        return self.format(":")

    def __repr__(self):
        return f"MacAddress('{self}')"

    def __eq__(self, other):
        if not isinstance(other, MacAddress):
            return NotImplemented
        return self.octets == other.octets

    def __hash__(self):
        return hash(self.octets)
