"""
Exceptions raised by the neighbor table lookup.
Every error derives from ArpLookupError so callers can catch them in one place.
"""


class ArpLookupError(Exception):
    """Base class for all lookup failures"""


class InvalidAddress(ArpLookupError, ValueError):
    """The requested IP is not a valid IPv4 or IPv6 address"""

    def __init__(self, ip):
        self.ip = ip
        super().__init__(f"{ip!r} is not a valid IP address")


class UnsupportedPlatform(ArpLookupError):
    """No neighbor table strategy exists for the running OS"""

    def __init__(self, system):
        self.system = system
        super().__init__(f"Unknown platform detected: {system or 'unknown'}")


class ProcessError(ArpLookupError):
    """
    The neighbor table utility failed (or could not be started).
    Carries the command line, exit code and both stderr buffers for operators.
    """

    def __init__(self, command, returncode, stderr="", probe_stderr=""):
        self.command = tuple(command)
        self.returncode = returncode
        self.stderr = stderr
        self.probe_stderr = probe_stderr

        if returncode is None:
            message = f"Could not start [{' '.join(self.command)}]"
        else:
            message = f"Error running arp via [{' '.join(self.command)}]: Code #{returncode}"
        if stderr:
            message += "\n" + stderr.rstrip()
        if probe_stderr:
            message += "\nping stderr: " + probe_stderr.rstrip()
        super().__init__(message)


class NotFound(ArpLookupError, LookupError):
    """The table was read successfully but holds no entry for the IP"""

    def __init__(self, ip):
        self.ip = ip
        super().__init__(f"Could not find ip in arp table: {ip}")


class Timeout(ArpLookupError, TimeoutError):
    """A spawned process ran past its time limit and was killed"""

    def __init__(self, command, timeout):
        self.command = tuple(command)
        self.timeout = timeout
        super().__init__(f"[{' '.join(self.command)}] did not finish within {timeout} seconds and was killed")
