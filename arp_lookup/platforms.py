import logging
import math
import platform  # For recognizing OS
from typing import Optional, Tuple

from arp_lookup import process
from arp_lookup.errors import ProcessError, Timeout, UnsupportedPlatform
from arp_lookup.mac import MacAddress
from arp_lookup.parsers import parse_darwin, parse_linux, parse_windows
from arp_lookup.process import PROCESS_TIMEOUT, ProcessResult

logger = logging.getLogger(__name__)

# How long ping waits for the echo reply. Kept well below PROCESS_TIMEOUT so an
# unreachable host ends the probe on its own instead of being killed.
PING_WAIT = 1  # seconds


class NeighborTable:
    """
    Probe, table read and parser for one OS family.

    Subclasses supply the ping and arp argument vectors, the rule deciding
    whether arp failed, and the parser for its output.
    """

    name = ""

    def ping_command(self, ip: str) -> Tuple[str, ...]:
        raise NotImplementedError

    def arp_command(self, ip: str) -> Tuple[str, ...]:
        raise NotImplementedError

    def parse(self, output: str, ip: str) -> MacAddress:
        raise NotImplementedError

    def is_failure(self, result: ProcessResult) -> bool:
        return result.returncode != 0

    async def probe(self, ip: str, timeout: Optional[float] = PROCESS_TIMEOUT) -> str:
        """
        Sends one echo request so the kernel (re)learns the neighbor entry.
        The exit code does not matter; stderr is returned for error reports.
        """
        command = self.ping_command(ip)
        try:
            result = await process.run(command, timeout=timeout)
        except Timeout:
            # TimeoutError is an OSError; a hung probe still fails the lookup
            raise
        except OSError as e:
            logger.warning("Could not run %s, reading the table without a probe: %s", command[0], e)
            return str(e)

        return result.stderr

    async def read_and_parse(self, ip: str, timeout: Optional[float] = PROCESS_TIMEOUT,
                             probe_stderr: str = "") -> MacAddress:
        command = self.arp_command(ip)
        try:
            result = await process.run(command, timeout=timeout)
        except Timeout:
            raise
        except OSError as e:
            raise ProcessError(command, None, str(e), probe_stderr) from e

        if self.is_failure(result):
            raise ProcessError(command, result.returncode, result.stderr, probe_stderr)

        return self.parse(result.stdout, ip)

    async def resolve(self, ip: str, timeout: Optional[float] = PROCESS_TIMEOUT) -> MacAddress:
        """Probe first, then read the table; the two processes never overlap"""
        probe_stderr = await self.probe(ip, timeout=timeout)
        return await self.read_and_parse(ip, timeout=timeout, probe_stderr=probe_stderr)

    def __repr__(self):
        return f"<{type(self).__name__}>"


class LinuxNeighborTable(NeighborTable):
    name = "linux"

    def ping_command(self, ip):
        # Linux takes the reply wait in whole seconds and rejects 0
        return ("ping", "-c", "1", "-W", str(max(1, math.ceil(PING_WAIT))), ip)

    def arp_command(self, ip):
        return ("arp", "-n", ip)

    def parse(self, output, ip):
        return parse_linux(output, ip)


class WindowsNeighborTable(NeighborTable):
    name = "windows"

    def ping_command(self, ip):
        # Windows expects milliseconds
        return ("ping", "-n", "1", "-w", str(int(PING_WAIT * 1000)), ip)

    def arp_command(self, ip):
        return ("arp", "-a", ip)

    def parse(self, output, ip):
        return parse_windows(output, ip)


class DarwinNeighborTable(NeighborTable):
    name = "darwin"

    def ping_command(self, ip):
        # BSD ping's -W is in milliseconds
        return ("ping", "-c", "1", "-W", str(int(PING_WAIT * 1000)), ip)

    def arp_command(self, ip):
        return ("arp", "-n", ip)

    def is_failure(self, result):
        # macOS arp can exit non-zero with nothing on stderr for a lookup that
        # still printed a usable answer; only a non-zero exit with stderr counts.
        # This also hides failures reported through the exit code alone.
        return result.returncode != 0 and result.stderr != ""

    def parse(self, output, ip):
        return parse_darwin(output, ip)


def select_strategy(system: Optional[str] = None) -> NeighborTable:
    """
    Picks the neighbor table strategy for an OS name as returned by
    platform.system() ('Linux', 'Darwin', 'Windows', 'CYGWIN_NT-10.0', ...).
    Defaults to the running OS.
    """
    if system is None:
        system = platform.system()  # Retrieves OS name
    name = system.lower()

    if "linux" in name:
        return LinuxNeighborTable()
    if "darwin" in name:
        return DarwinNeighborTable()
    if name.startswith(("windows", "cygwin", "msys", "mingw")):
        return WindowsNeighborTable()

    raise UnsupportedPlatform(system)
