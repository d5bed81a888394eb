import pytest

from kernelwire.buffer import Buffer, BufferOverflowError
from kernelwire.messages import (
    CpuProcess,
    FrameRequest,
    Interrupt,
    InterruptReason,
    IoRequest,
    MemoryRead,
    MemoryWrite,
    PageTableInfo,
    Syscall,
    deserialize_pcb,
    serialize_pcb,
)
from kernelwire.process import Pcb


def _reopen(buffer):
    return Buffer.from_bytes(buffer.getvalue())


def test_io_request_wire_bytes():
    buffer = IoRequest(pid=1, time=2).serialize()
    assert buffer.getvalue() == b"\x01\x00\x00\x00\x02\x00\x00\x00"
    assert buffer.remaining == 0


@pytest.mark.parametrize(
    "message",
    [
        IoRequest(7, 3000),
        CpuProcess(12, 45),
        PageTableInfo(64, 4, 3),
        MemoryRead(5, 1024, 16),
        Syscall("IO DISCO 25000", 9),
        Interrupt(3, 10, InterruptReason.BLOCK),
    ],
)
def test_round_trip(message):
    buffer = message.serialize()
    assert buffer.remaining == 0
    assert type(message).deserialize(_reopen(buffer)) == message


def test_memory_write_round_trip_and_size():
    message = MemoryWrite(4, 256, b"hola mundo")
    assert message.size == len(b"hola mundo")
    restored = MemoryWrite.deserialize(_reopen(message.serialize()))
    assert restored == message
    assert restored.size == message.size


def test_memory_write_long_data_fits():
    data = bytes(range(200))
    buffer = MemoryWrite(1, 2, data).serialize()
    assert buffer.remaining == 0
    assert MemoryWrite.deserialize(_reopen(buffer)).data == data


def test_frame_request_round_trip():
    message = FrameRequest(8, [1, 2, 3], 17)
    restored = FrameRequest.deserialize(_reopen(message.serialize()), 3)
    assert restored == message


def test_frame_request_without_levels():
    message = FrameRequest(8, [], 5)
    buffer = message.serialize()
    assert buffer.size == 8
    assert FrameRequest.deserialize(_reopen(buffer), 0) == message


def test_frame_request_too_many_levels_overflows():
    buffer = _reopen(FrameRequest(1, [2], 3).serialize())
    with pytest.raises(BufferOverflowError):
        FrameRequest.deserialize(buffer, 5)


def test_frame_request_negative_levels():
    with pytest.raises(ValueError):
        FrameRequest.deserialize(Buffer(0), -1)


def test_interrupt_reason_enum_and_unknown_value():
    restored = Interrupt.deserialize(
        _reopen(Interrupt(1, 2, InterruptReason.END_EXECUTION).serialize())
    )
    assert restored.reason is InterruptReason.END_EXECUTION
    unknown = Interrupt.deserialize(_reopen(Interrupt(1, 2, 99).serialize()))
    assert unknown.reason == 99


@pytest.mark.parametrize(
    "reason, wire",
    [
        (InterruptReason.BLOCK, b"\x01\x00\x00\x00"),
        (InterruptReason.END_EXECUTION, b"\x02\x00\x00\x00"),
    ],
)
def test_interrupt_reason_wire_values(reason, wire):
    buffer = Interrupt(1, 2, reason).serialize()
    assert buffer.getvalue() == b"\x01\x00\x00\x00\x02\x00\x00\x00" + wire


def test_syscall_non_ascii_round_trip():
    message = Syscall("INIT_PROC tamaño", 2)
    assert Syscall.deserialize(_reopen(message.serialize())) == message


def test_pcb_round_trip():
    pcb = Pcb.create(6, "proceso1", 128, 10.0)
    pcb.pc = 4
    restored = deserialize_pcb(_reopen(serialize_pcb(pcb)))
    assert restored.pid == 6
    assert restored.pc == 4
    assert restored.process_size == 128
    assert restored.pseudocode_file == "proceso1"


def test_pcb_buffer_is_exactly_filled():
    pcb = Pcb.create(1, "abc", 32, 0.0)
    buffer = serialize_pcb(pcb)
    assert buffer.remaining == 0
    assert buffer.size == 16 + len("abc")


def test_truncated_buffer_raises():
    data = CpuProcess(1, 2).serialize().getvalue()[:6]
    with pytest.raises(BufferOverflowError):
        CpuProcess.deserialize(Buffer.from_bytes(data))


def test_value_out_of_range_rejected():
    with pytest.raises(ValueError):
        IoRequest(-1, 0).serialize()