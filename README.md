# mdk

A small toolkit of building blocks for network servers and the tools around
them. It is plain Python with no third-party dependencies.

## What is inside

| Module | Contents |
| --- | --- |
| `mdk.utils` | String trimming, IPv4 address packing, byte order reversal, file size, CPU count, thread id, clocks |
| `mdk.configfile` | `ConfigFile`, `ConfigSection`, `ConfigItem`: read and write section-based `key = value` files |
| `mdk.iobuffer` | `IOBuffer` and `IOBufferBlock`: an ordered byte buffer built from 8192-byte blocks |
| `mdk.ringqueue` | `BoundedQueue`: a fixed-capacity ring queue |
| `mdk.notify` | `Signal`: a wake-one signal where notifications without a waiter collapse to one |
| `mdk.task` | `Task` (a deferred call) and `FinishedTime` (times a block and reports once) |
| `mdk.threads` | `Thread` and `ThreadPool` |
| `mdk.logger` | `Logger`: daily log files under `log/<name>/`, size-based renaming, age-based cleanup |
| `mdk.sockopt` | Host name lookup and socket option helpers for socket objects or raw descriptors |
| `mdk.sockets` | `Socket`: an IPv4 TCP/UDP socket wrapper with waits and recorded addresses |

## Install

```
pip install .
```

For the test suite:

```
pip install .[test]
pytest
```

## Utilities

`mdk.utils` provides:

- `trim_string(text, chars)` removes every occurrence of the given characters;
  `trim_string_left` and `trim_string_right` strip them from one end only.
- `trim`, `trim_left`, `trim_right` do the same for spaces and tabs.
- `addr_to_i64(ip, port)` packs a dotted IPv4 address and a port into one
  64-bit integer (raising `ValueError` for a malformed address);
  `i64_to_addr(addr64)` gives back `(ip, port)`.
- `reversal(value)` reverses the byte order of a signed 32-bit integer.
- `get_file_size(path)` (0 if the file cannot be examined),
  `get_cpu_number(max_cpu, default_cpu_number)`, `current_thread_id()`,
  `get_exe_dir()`, `today_start()` (epoch seconds of local midnight),
  `mill_time()` (milliseconds since the epoch) and `sleep_ms(ms)`.

## Configuration files

A configuration file is split into sections. Lines starting with `#`, `//`
or `\\` are comments; they become the description of the section or entry
that follows them.

```
[ser config]
ip = 192.168.0.1
port = 8888
[/ser config]
```

```python
from mdk.configfile import ConfigFile

cfg = ConfigFile("./test.cfg")
ip = str(cfg["ser config"]["ip"])
cfg["ser config"]["ip"] = "127.0.0.1"
cfg["ser config"]["port"] = 8080
port = cfg["ser config"]["port"].as_int()
cfg.save()
```

Whitespace inside names and values is kept, and whitespace around them is
dropped, so `  ip list = \t 10.0.0.1 \t 10.0.0.2 ` reads as key `ip list`
and value `10.0.0.1 \t 10.0.0.2`.

- Looking up a missing section or key creates it; `ConfigItem.is_null()`
  tells whether it has ever been given a value.
- `ConfigItem.set(value)` stores strings, integers and floats;
  `as_int()` and `as_float()` read the leading number of the value (0 if none).
- `set_description(text)` on a section or item sets the comment written above it.
- `save()` writes sections and entries in the order they were created, with
  `\r\n` line endings. A `ConfigFile` reads one file only; `read_config` on an
  object that has already read a file raises `RuntimeError`, and `save()`
  without a file raises `ValueError`.

## Buffers and queues

```python
from mdk.iobuffer import IOBuffer

buf = IOBuffer()
buf.write(b"\x00\x05hello")
header = buf.read(2, consume=False)   # peek at the length prefix
if len(buf) >= 2 + header[1]:
    message = buf.read(2 + header[1])
```

`IOBuffer.read(length, consume=True)` returns exactly `length` bytes, or
`None` while fewer are held; a length of zero or less raises `ValueError`.

```python
from mdk.ringqueue import BoundedQueue

queue = BoundedQueue(4)
queue.push("job")      # False once the queue is full
item = queue.pop()     # None when the queue is empty
```

`None` itself cannot be queued.

## Signals, tasks, threads and timing

```python
from mdk.notify import Signal

signal = Signal()
signal.notify()
assert signal.wait(100)   # False if the wait runs out first
```

```python
from mdk.task import FinishedTime
from mdk.threads import Thread, ThreadPool

pool = ThreadPool()
pool.start(4)
pool.accept(print, "hello from the pool")
pool.stop()        # drops tasks still waiting, then stops the workers

thread = Thread()
thread.run(print, "hello from a thread")
thread.wait_stop()

with FinishedTime(lambda timer: print(timer.use_time(), "ms")):
    do_work()
```

`Thread.run` returns `False` while a previous call is still running;
`Thread.stop(timeout_ms)` waits for it to end and returns whether it did.
`ThreadPool.set_on_start(func, param)` sets a call each worker makes once when
it begins, and `task_count()` gives the number of tasks waiting.

## Logging

```python
from mdk.logger import Logger

with Logger("server", base_dir="/var/tmp/myapp") as log:
    log.set_print_log(True)
    log.info("startup", "listening on port %d", 8888)
    log.stream_info("packet", b"\x01\x02\xff", "received %d bytes", 3)
```

Entries go to `<base_dir>/log/<name>/YYYY-MM-DD.log` (`run` when no name is
given; `base_dir` defaults to the running program's directory) as
`time Tid:<thread id> [key] message`. When the day's file reaches
`set_max_log_size` megabytes (50 by default) it is renamed aside with a
numbered suffix. Files not modified within `set_max_exist_day` days (30 by
default) are deleted before each entry, or on demand with `del_log(days)`.
The log name can be set only once.

## Sockets

```python
from mdk.sockets import Socket, Protocol

server = Socket()
server.init(Protocol.TCP)
server.start_server(8888)
client = server.accept()          # None if non-blocking and nothing pending
data = client.receive(1024, seconds=5)
client.send(b"ok")
```

`receive` raises `SocketTimeoutError` when a positive wait runs out and
`SocketClosedError` when the peer has closed. UDP sockets use `send_to` and
`receive_from`, which returns `(data, (ip, port))`. `peer_address()` and
`local_address()` return the addresses recorded on connect, accept or bind;
`attach` and `detach` move a raw descriptor in and out of the wrapper.
`mdk.sockopt` offers `host_name_to_ip` and the option setters
(`set_no_delay`, buffer sizes, send and receive timeouts) for plain
sockets or descriptors.

## What it does not do

These are building blocks only. The package has no event-driven network
server, no connection manager with heartbeats, groups or broadcasting, and
no reconnecting client; those have to be built on top of `Socket`,
`IOBuffer` and `ThreadPool`. It installs no command-line command.