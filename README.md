# kernelwire

Building blocks for the modules of a small operating-system simulator (kernel,
CPU, memory and I/O), where each module runs as its own process and the modules
talk over TCP.

## Contents

- `kernelwire.configs`: reads `KEY=VALUE` configuration files, one pair per
  line, with `#` starting a comment line. `load_config(path)` returns a
  `Config`; `get_int`, `get_double` and `get_string` return `-1`, `-1.0` and
  `None` for a missing key.
- `kernelwire.logs`: `create_logger(log_file, module_name)` builds an
  INFO-level logger that writes to the given file and to standard output.
- `kernelwire.process`: the `Pcb` process control block, the `ProcessState`
  enum and the `StateMetric` / `TimeMetric` records kept for every state.
  `Pcb.create(...)` starts a process in `NEW`, counted once there, and
  `elapsed_in_state()` gives the milliseconds since its state timer started.
  `SyncEvent` names the synchronisation events.
- `kernelwire.buffer`: a fixed-size binary `Buffer` with one offset for writes
  and reads: little-endian `uint32` and `uint8`, length-prefixed UTF-8 strings
  and raw bytes. Going past the end raises `BufferOverflowError`.
- `kernelwire.packets`: a `Packet` holds an `OpCode` and a `Buffer`. On the
  wire it is the operation code and the payload size as little-endian `uint32`
  values, then the payload. `pack_buffer`, `send_packet` and `receive_packet`
  build, send and receive them.
- `kernelwire.messages`: the messages that cross the wire (`IoRequest`,
  `CpuProcess`, `PageTableInfo`, `MemoryRead`, `MemoryWrite`, `FrameRequest`,
  `Syscall`, `Interrupt`), each with `serialize()` and a `deserialize` class
  method, plus `serialize_pcb` / `deserialize_pcb`. `FrameStatus` and
  `InterruptReason` are the enums they use.
- `kernelwire.sockets`: `start_server`, `create_connection` and `wait_client`
  for TCP over IPv4; `send_message` / `receive_message` for NUL-terminated,
  length-prefixed strings; and the handshakes between modules
  (`send_handshake`, `send_bool`, `send_io_handshake`, `send_cpu_handshake`,
  `send_frame` and their `receive_*` counterparts). `ModuleId` and
  `module_name` identify the modules.
- `kernelwire.lists`: `find_with_param(items, compare, param)` returns the
  first item for which `compare(item, param)` is true.
- `kernelwire.greeting`: `greet(who)` prints a greeting.

## Installing

```
pip install .
```

## Example

```python
from kernelwire.messages import IoRequest
from kernelwire.packets import OpCode, pack_buffer, send_packet, receive_packet
from kernelwire.sockets import create_connection

sock = create_connection("127.0.0.1", "8002")
send_packet(sock, pack_buffer(OpCode.IO_REQUEST, IoRequest(pid=3, time=250).serialize()))

reply = receive_packet(sock)  # None if the peer closed the connection
```

On the receiving side, look at `packet.op_code` and hand `packet.buffer` to the
matching `deserialize` class method.

## What it does not do

This is a library only. It has no command to run and does not contain the
kernel, CPU, memory or I/O modules themselves: no scheduler, no page tables and
no device emulation. It supplies the data types, wire format and connection
helpers those modules share.

## Running the tests

```
pip install .[test]
pytest
```