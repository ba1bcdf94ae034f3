"""
Runs external utilities (ping, arp) as child processes.

Each child is held by the spawn() context manager, which kills it together
with anything it started if the caller leaves early: on error, on timeout or
when the awaiting task is cancelled.
"""

import asyncio
import locale
import logging
import sys
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import psutil

from arp_lookup.errors import Timeout

logger = logging.getLogger(__name__)

PROCESS_TIMEOUT = 10  # seconds, per spawned process


@dataclass(frozen=True)
class ProcessResult:
    """Exit code and decoded output of one finished process"""
    command: Tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str


def _output_encoding() -> str:
    # Console tools on Windows print in the OEM code page (cp437, cp850, ...),
    # not the ANSI one locale reports
    if sys.platform == "win32":
        return "oem"
    return locale.getpreferredencoding(False)


def _decode(data: Optional[bytes]) -> str:
    if not data:
        return ""
    return data.decode(_output_encoding(), errors="replace")


def _kill_tree(proc) -> None:
    # Children have to be collected before the parent dies, or they get re-parented
    try:
        children = psutil.Process(proc.pid).children(recursive=True)
    except psutil.Error:
        children = []

    for child in children:
        try:
            child.kill()
        except psutil.Error:
            pass  # already gone

    try:
        proc.kill()
    except ProcessLookupError:
        pass


async def _reap(proc, command) -> None:
    if proc.returncode is None:
        logger.debug("Killing pid %s [%s]", proc.pid, " ".join(command))
        _kill_tree(proc)
        await proc.wait()


@asynccontextmanager
async def spawn(command: Sequence[str]):
    """
    Starts command with stdout and stderr piped and yields the process handle.
    The process is guaranteed to be dead once the block is left.
    """
    starting = asyncio.ensure_future(asyncio.create_subprocess_exec(
        *command,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE
    ))
    try:
        proc = await asyncio.shield(starting)
    except asyncio.CancelledError:
        # The child may already exist; wait for the handle so it can be killed
        if not starting.cancelled():
            try:
                await _reap(await starting, command)
            except OSError:
                pass  # never started
        raise
    logger.debug("Started [%s] as pid %s", " ".join(command), proc.pid)

    try:
        yield proc
    finally:
        await _reap(proc, command)


async def run(command: Sequence[str], timeout: Optional[float] = PROCESS_TIMEOUT) -> ProcessResult:
    """
    Runs command to completion and returns its exit code and output.
    Raises Timeout (after killing the process) if it runs longer than timeout seconds.
    OSError (FileNotFoundError, PermissionError, ...) propagates when the binary cannot be started.
    """
    command = tuple(command)

    async with spawn(command) as proc:
        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            raise Timeout(command, timeout) from None

    result = ProcessResult(command, proc.returncode, _decode(stdout), _decode(stderr))
    logger.debug("[%s] exited with code %s", " ".join(command), result.returncode)
    return result
