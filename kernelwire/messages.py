"""Messages exchanged between the kernel, CPU, memory and IO modules.

Each message serializes to a ``Buffer`` whose fields are little-endian
uint32 values. Strings and raw data carry a uint32 length prefix.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from kernelwire.buffer import Buffer
from kernelwire.process import Pcb

_UINT32_SIZE = 4


class FrameStatus(IntEnum):
    """Result of a frame lookup answered by memory."""

    FRAME_OBTAINED = 1
    MEMORY_ERROR = 2


class InterruptReason(IntEnum):
    """Why a running process is interrupted."""

    BLOCK = 1
    END_EXECUTION = 2


def _as_reason(value: int) -> InterruptReason | int:
    try:
        return InterruptReason(value)
    except ValueError:
        return value


def _read_raw(buffer: Buffer) -> bytes:
    """Read a uint32 length followed by that many raw bytes."""
    length = buffer.read_uint32()
    return buffer.read(length)


@dataclass
class IoRequest:
    """An IO request: the process asking and how long the IO lasts."""

    pid: int
    time: int

    def serialize(self) -> Buffer:
        buffer = Buffer(2 * _UINT32_SIZE)
        buffer.add_uint32(self.pid)
        buffer.add_uint32(self.time)
        return buffer

    @classmethod
    def deserialize(cls, buffer: Buffer) -> "IoRequest":
        pid = buffer.read_uint32()
        time = buffer.read_uint32()
        return cls(pid, time)


@dataclass
class CpuProcess:
    """A process handed to a CPU: its PID and program counter."""

    pid: int
    pc: int

    def serialize(self) -> Buffer:
        buffer = Buffer(2 * _UINT32_SIZE)
        buffer.add_uint32(self.pid)
        buffer.add_uint32(self.pc)
        return buffer

    @classmethod
    def deserialize(cls, buffer: Buffer) -> "CpuProcess":
        pid = buffer.read_uint32()
        pc = buffer.read_uint32()
        return cls(pid, pc)


@dataclass
class PageTableInfo:
    """Page table layout sent by memory to a CPU during the handshake."""

    page_size: int
    table_entries: int
    levels: int

    def serialize(self) -> Buffer:
        buffer = Buffer(3 * _UINT32_SIZE)
        buffer.add_uint32(self.page_size)
        buffer.add_uint32(self.table_entries)
        buffer.add_uint32(self.levels)
        return buffer

    @classmethod
    def deserialize(cls, buffer: Buffer) -> "PageTableInfo":
        page_size = buffer.read_uint32()
        table_entries = buffer.read_uint32()
        levels = buffer.read_uint32()
        return cls(page_size, table_entries, levels)


@dataclass
class MemoryRead:
    """A request to read ``size`` bytes at a physical address."""

    pid: int
    physical_address: int
    size: int

    def serialize(self) -> Buffer:
        buffer = Buffer(3 * _UINT32_SIZE)
        buffer.add_uint32(self.pid)
        buffer.add_uint32(self.physical_address)
        buffer.add_uint32(self.size)
        return buffer

    @classmethod
    def deserialize(cls, buffer: Buffer) -> "MemoryRead":
        pid = buffer.read_uint32()
        physical_address = buffer.read_uint32()
        size = buffer.read_uint32()
        return cls(pid, physical_address, size)


@dataclass
class MemoryWrite:
    """A request to write ``data`` at a physical address."""

    pid: int
    physical_address: int
    data: bytes = b""

    @property
    def size(self) -> int:
        return len(self.data)

    def serialize(self) -> Buffer:
        data = bytes(self.data)
        buffer = Buffer(4 * _UINT32_SIZE + len(data))
        buffer.add_uint32(self.pid)
        buffer.add_uint32(self.physical_address)
        buffer.add_uint32(len(data))
        buffer.add_uint32(len(data))
        buffer.add(data)
        return buffer

    @classmethod
    def deserialize(cls, buffer: Buffer) -> "MemoryWrite":
        pid = buffer.read_uint32()
        physical_address = buffer.read_uint32()
        buffer.read_uint32()  # declared size; the data's own length prefix wins
        data = _read_raw(buffer)
        return cls(pid, physical_address, data)


@dataclass
class FrameRequest:
    """A CPU's request for the frame holding a page, with one entry per level."""

    pid: int
    level_entries: list[int] = field(default_factory=list)
    page_number: int = 0

    def serialize(self) -> Buffer:
        buffer = Buffer((2 + len(self.level_entries)) * _UINT32_SIZE)
        buffer.add_uint32(self.pid)
        for entry in self.level_entries:
            buffer.add_uint32(entry)
        buffer.add_uint32(self.page_number)
        return buffer

    @classmethod
    def deserialize(cls, buffer: Buffer, levels: int) -> "FrameRequest":
        if levels < 0:
            raise ValueError("the number of levels cannot be negative")
        pid = buffer.read_uint32()
        entries = [buffer.read_uint32() for _ in range(levels)]
        page_number = buffer.read_uint32()
        return cls(pid, entries, page_number)


@dataclass
class Syscall:
    """A syscall line (instruction then parameters) and the calling process."""

    syscall: str
    pid: int

    def serialize(self) -> Buffer:
        raw = self.syscall.encode("utf-8")
        buffer = Buffer(2 * _UINT32_SIZE + len(raw))
        buffer.add_uint32(self.pid)
        buffer.add_string(raw)
        return buffer

    @classmethod
    def deserialize(cls, buffer: Buffer) -> "Syscall":
        pid = buffer.read_uint32()
        syscall = buffer.read_string()
        return cls(syscall, pid)


@dataclass
class Interrupt:
    """An interruption of a process, with its PC and the reason."""

    pid: int
    pc: int
    reason: InterruptReason | int

    def serialize(self) -> Buffer:
        buffer = Buffer(3 * _UINT32_SIZE)
        buffer.add_uint32(self.pid)
        buffer.add_uint32(self.pc)
        buffer.add_uint32(int(self.reason))
        return buffer

    @classmethod
    def deserialize(cls, buffer: Buffer) -> "Interrupt":
        pid = buffer.read_uint32()
        pc = buffer.read_uint32()
        reason = _as_reason(buffer.read_uint32())
        return cls(pid, pc, reason)


def serialize_pcb(pcb: Pcb) -> Buffer:
    """Serialize the PCB fields that memory and CPUs need."""
    raw = pcb.pseudocode_file.encode("utf-8")
    buffer = Buffer(4 * _UINT32_SIZE + len(raw))
    buffer.add_uint32(pcb.pid)
    buffer.add_uint32(pcb.pc)
    buffer.add_uint32(pcb.process_size)
    buffer.add_string(raw)
    return buffer


def deserialize_pcb(buffer: Buffer) -> Pcb:
    """Rebuild a PCB holding the serialized fields."""
    pid = buffer.read_uint32()
    pc = buffer.read_uint32()
    process_size = buffer.read_uint32()
    pseudocode_file = buffer.read_string()
    return Pcb(pid=pid, pseudocode_file=pseudocode_file, process_size=process_size, pc=pc)