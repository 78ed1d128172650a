"""Command channel to the FRR daemons over their vty Unix sockets.

A command is sent the way ``vtysh`` sends it: the session first switches to
``enable`` mode, then the null-terminated command follows. The daemon ends
its reply with a null byte.
"""

from __future__ import annotations

import os
import socket
import time
from dataclasses import dataclass
from typing import Union

OSPF_SOCKET = "ospfd.vty"
ZEBRA_SOCKET = "zebra.vty"

_CHUNK_SIZE = 4096
_TERMINATOR = b"\x00"

PathLike = Union[str, "os.PathLike[str]"]


@dataclass
class FRRCommandExecutor:
    """Runs commands against the daemons whose sockets live in ``dir_path``.

    ``timeout`` is the time, in seconds, one command may take in total.
    """

    dir_path: str
    timeout: float = 2.0

    def exec_ospf_cmd(self, cmd: str) -> bytes:
        """Run ``cmd`` on ospfd and return its reply without the terminator."""
        return execute_cmd(os.path.join(self.dir_path, OSPF_SOCKET), cmd, self.timeout)

    def exec_zebra_cmd(self, cmd: str) -> bytes:
        """Run ``cmd`` on zebra and return its reply without the terminator."""
        return execute_cmd(os.path.join(self.dir_path, ZEBRA_SOCKET), cmd, self.timeout)


def new_connection(dir_path: str, timeout: float) -> FRRCommandExecutor:
    """Create an executor for the sockets in ``dir_path``."""
    return FRRCommandExecutor(dir_path=dir_path, timeout=timeout)


def execute_cmd(socket_path: PathLike, cmd: str, timeout: float) -> bytes:
    """Send ``cmd`` to the daemon listening on ``socket_path``.

    The whole exchange must finish within ``timeout`` seconds, otherwise
    :class:`TimeoutError` is raised. A connection closed before the reply is
    complete raises :class:`ConnectionError`; other socket failures raise
    :class:`OSError`.
    """
    deadline = time.monotonic() + timeout

    def remaining() -> float:
        left = deadline - time.monotonic()
        if left <= 0:
            raise TimeoutError(f"timed out talking to {os.fspath(socket_path)}")
        return left

    with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as conn:
        conn.settimeout(remaining())
        conn.connect(os.fspath(socket_path))

        conn.settimeout(remaining())
        conn.sendall(b"enable" + _TERMINATOR)
        conn.settimeout(remaining())
        if not conn.recv(_CHUNK_SIZE):
            raise ConnectionError("connection closed while entering enable mode")

        conn.settimeout(remaining())
        conn.sendall(cmd.encode() + _TERMINATOR)

        response = bytearray()
        while True:
            conn.settimeout(remaining())
            chunk = conn.recv(_CHUNK_SIZE)
            if not chunk:
                raise ConnectionError("connection closed before the end of the response")
            response += chunk
            if chunk.endswith(_TERMINATOR):
                return bytes(response).rstrip(_TERMINATOR)