"""Packets: an operation code plus a payload buffer, framed for a stream socket.

On the wire a packet is the operation code as a uint32, the payload size as a
uint32 (both little-endian) and then the payload bytes.
"""

from __future__ import annotations

import socket
import struct
from dataclasses import dataclass, field
from enum import IntEnum

from kernelwire.buffer import Buffer

_HEADER = struct.Struct("<II")


class OpCode(IntEnum):
    """Operation codes that tell the receiver how to read a packet's payload."""

    IO_REQUEST = 1
    CPU_PROCESS = 2
    PCB = 3
    SYSCALL = 4
    INTERRUPT = 5
    PAGE_TABLE_INFO = 6
    DELETE_PROCESS = 7
    SUSPEND_PROCESS = 8
    LOAD_PROCESS = 9
    DUMP_MEMORY = 10
    FRAME_REQUEST = 11
    FRAME = 12
    READ = 13
    WRITE = 14


def _as_op_code(value: int) -> OpCode | int:
    try:
        return OpCode(value)
    except ValueError:
        return value


@dataclass
class Packet:
    """An operation code and the buffer that carries its payload."""

    op_code: OpCode | int
    buffer: Buffer = field(default_factory=Buffer)

    def to_stream(self) -> bytes:
        """The bytes that represent this packet on the wire."""
        payload = self.buffer.getvalue()
        return _HEADER.pack(int(self.op_code), len(payload)) + payload


def pack_buffer(op_code: OpCode | int, buffer: Buffer) -> Packet:
    """Wrap a serialized buffer in a packet with the given operation code."""
    return Packet(op_code, buffer)


def send_packet(sock: socket.socket, packet: Packet) -> None:
    """Send the whole packet over ``sock``; raises ``OSError`` on failure."""
    sock.sendall(packet.to_stream())


def _receive_exactly(sock: socket.socket, size: int) -> bytes:
    chunks = bytearray()
    while len(chunks) < size:
        chunk = sock.recv(size - len(chunks))
        if not chunk:
            break
        chunks.extend(chunk)
    return bytes(chunks)


def receive_packet(sock: socket.socket) -> Packet | None:
    """Receive one packet from ``sock``.

    Returns ``None`` when the peer closed the connection before a packet
    started; raises ``ConnectionError`` if it closed in the middle of one.
    The returned packet's buffer has its offset at the start.
    """
    header = _receive_exactly(sock, _HEADER.size)
    if not header:
        return None
    if len(header) < _HEADER.size:
        raise ConnectionError("connection closed while receiving a packet header")
    code, size = _HEADER.unpack(header)

    payload = _receive_exactly(sock, size) if size else b""
    if len(payload) < size:
        raise ConnectionError(
            f"connection closed after {len(payload)} of {size} payload bytes"
        )
    return Packet(_as_op_code(code), Buffer.from_bytes(payload))