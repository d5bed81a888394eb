"""TCP connections, length-prefixed string messages and module handshakes.

Integers travel as 4-byte little-endian values. A string message is its
byte length (including a trailing NUL) followed by the bytes and the NUL.
"""

from __future__ import annotations

import re
import socket
import struct
import sys
from enum import IntEnum

_INT32 = struct.Struct("<i")
_BOOL = struct.Struct("<?")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

LOCAL_IP = "127.0.0.1"


class ModuleId(IntEnum):
    """Identifiers each module announces during a handshake."""

    CPU = 1
    KERNEL = 2
    MEMORY = 3
    IO = 4


_MODULE_NAMES = {
    ModuleId.CPU: "CPU",
    ModuleId.KERNEL: "KERNEL",
    ModuleId.MEMORY: "MEMORIA",
    ModuleId.IO: "IO",
}


def module_name(module: ModuleId | int) -> str | None:
    """Display name of a module, or ``None`` for an unknown identifier."""
    try:
        return _MODULE_NAMES[ModuleId(module)]
    except ValueError:
        return None


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _receive_exactly(sock: socket.socket, size: int) -> bytes:
    data = bytearray()
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        if not chunk:
            break
        data.extend(chunk)
    return bytes(data)


def _receive_int32(sock: socket.socket, what: str) -> int:
    raw = _receive_exactly(sock, _INT32.size)
    if len(raw) < _INT32.size:
        raise ConnectionError(f"connection closed while receiving {what}")
    return _INT32.unpack(raw)[0]


# Connections


def start_server(port: str | int) -> socket.socket:
    """Create an IPv4 TCP socket bound to ``port`` on all interfaces and listen.

    Raises ``OSError`` if the address cannot be resolved, bound or listened on.
    """
    infos = socket.getaddrinfo(
        None, port, socket.AF_INET, socket.SOCK_STREAM, 0, socket.AI_PASSIVE
    )
    family, socktype, proto, _, address = infos[0]
    server = socket.socket(family, socktype, proto)
    try:
        if hasattr(socket, "SO_REUSEPORT"):
            server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEPORT, 1)
        server.bind(address)
        server.listen(socket.SOMAXCONN)
    except OSError:
        server.close()
        raise
    print(f"Servidor escuchando en el puerto {port} !")
    return server


def create_connection(ip: str, port: str | int) -> socket.socket:
    """Connect an IPv4 TCP socket to ``ip:port``; raises ``OSError`` on failure."""
    infos = socket.getaddrinfo(ip, port, socket.AF_INET, socket.SOCK_STREAM)
    family, socktype, proto, _, address = infos[0]
    client = socket.socket(family, socktype, proto)
    try:
        client.connect(address)
    except OSError as exc:
        client.close()
        print(f"Fallo al conectar con {ip}:{port} - {exc}", file=sys.stderr)
        raise
    print(f"Conectado con exito a {ip} puerto {port}")
    return client


def wait_client(server: socket.socket) -> socket.socket:
    """Accept one incoming connection and return its socket."""
    client, _ = server.accept()
    print("Se conecto un cliente!")
    return client


# Messages


def send_message(message: str | None, sock: socket.socket) -> None:
    """Send a string with its length prefix; ``None`` sends nothing."""
    if message is None:
        return
    raw = message.encode("utf-8") + b"\0"
    sock.sendall(_INT32.pack(len(raw)))
    sock.sendall(raw)


def receive_message(sock: socket.socket) -> str | None:
    """Receive one string message.

    Returns ``None`` if the peer closed before a message started; raises
    ``ConnectionError`` if it closed partway or sent an invalid size.
    """
    header = _receive_exactly(sock, _INT32.size)
    if not header:
        return None
    if len(header) < _INT32.size:
        raise ConnectionError("connection closed while receiving a message size")
    size = _INT32.unpack(header)[0]
    if size <= 0:
        raise ConnectionError(f"invalid message size: {size}")
    raw = _receive_exactly(sock, size)
    if not raw:
        return None
    if len(raw) < size:
        raise ConnectionError(f"connection closed after {len(raw)} of {size} bytes")
    text = raw[: size - 1].split(b"\0", 1)[0]
    return text.decode("utf-8")


# Handshakes


def send_handshake(sock: socket.socket, value: int) -> None:
    """Send an integer handshake value."""
    sock.sendall(_INT32.pack(value))
    print("Handshake enviado!")


def receive_handshake(sock: socket.socket) -> int:
    """Receive an integer handshake value."""
    value = _receive_int32(sock, "a handshake")
    print("Handshake recibido!")
    return value


def send_bool(sock: socket.socket, value: bool) -> None:
    """Send a boolean as a single byte."""
    sock.sendall(_BOOL.pack(bool(value)))


def receive_bool(sock: socket.socket) -> bool:
    """Receive a single-byte boolean; raises ``ConnectionError`` if closed."""
    raw = sock.recv(_BOOL.size)
    if not raw:
        raise ConnectionError("connection closed while receiving a bool")
    return raw != b"\0"


def send_io_handshake(sock: socket.socket, io_name: str) -> None:
    """Announce an IO device by name."""
    send_message(io_name, sock)


def receive_io_handshake(sock: socket.socket) -> str:
    """Receive an IO device's name; raises ``ConnectionError`` if none arrives."""
    name = receive_message(sock)
    if name is None:
        raise ConnectionError("connection closed before the IO handshake")
    return name


def send_cpu_handshake(sock: socket.socket, cpu_id: int) -> None:
    """Announce a CPU by its numeric id, sent as text."""
    send_message(str(cpu_id), sock)


def receive_cpu_handshake(sock: socket.socket) -> int:
    """Receive a CPU id; raises ``ConnectionError`` if none arrives."""
    text = receive_message(sock)
    if text is None:
        raise ConnectionError("connection closed before the CPU handshake")
    return _atoi(text)


def send_frame(sock: socket.socket, frame_number: int) -> None:
    """Send a frame number as text."""
    send_message(str(frame_number), sock)


def receive_frame(sock: socket.socket) -> int:
    """Receive a frame number; raises ``ConnectionError`` if none arrives."""
    text = receive_message(sock)
    if text is None:
        raise ConnectionError("connection closed before the frame number")
    return _atoi(text) & 0xFFFFFFFF