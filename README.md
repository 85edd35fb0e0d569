# cassobee

Building blocks for long-running server processes, in plain modules you
import directly:

| Module | What it provides |
| --- | --- |
| `cassobee.ring_buffer` | `RingBuffer`, a circular byte buffer that never overwrites unread data |
| `cassobee.fixed_buffer` | `FixedBuffer`, a linear byte buffer of fixed capacity |
| `cassobee.block_list` | `BlockList`, a zero-filled sequence that grows in blocks of 128 slots |
| `cassobee.stringfy` | `to_string`, `is_container`, `type_name`, `short_type_name` |
| `cassobee.lock` | `EmptyLock`, `SpinLock`, `AtomicSpinLock`, `RWLock` |
| `cassobee.left_right` | `LeftRight` with `AtomicCounterIndicator` and `DistributedCounterIndicator` |
| `cassobee.lr_map` | `LRMap`, a dictionary built on `LeftRight` |
| `cassobee.delegate` | `Delegate`, `MulticastDelegate`, `ListStorage`, `MapStorage` |
| `cassobee.threadpool` | `ThreadPool`, `ThreadGroup`, `ThreadPoolError`, `parse_groups` |
| `cassobee.async_threadpool` | `AsyncThreadPool`, whose tasks return `concurrent.futures.Future` objects |
| `cassobee.crypt` | `Crypt`, `AESCrypt` (AES-CBC with PKCS#7 padding), `CryptError` |
| `cassobee.log_event` | `LogLevel` (TRACE … FATAL) and the `LogEvent` dataclass |
| `cassobee.log_formatter` | `LogFormatter`, driven by `%` patterns |
| `cassobee.logger` | `Logger`, forwarding to a root appender and keeping named appenders |
| `cassobee.log_appender` | `ConsoleAppender`, `FileAppender`, `AsyncAppender`, `TimeRotater`, `RotateType` |
| `cassobee.log_manager` | `LogManager`, a file-backed log sink with a fallback |
| `cassobee.logclient` | `LogClient`, which builds events and routes them |

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Examples

### Buffers

```python
from cassobee.ring_buffer import RingBuffer

buf = RingBuffer(8)
buf.write(b"hello")    # 5
buf.read(3)            # b"hel"
len(buf)               # 2
buf.write(b"abcdefgh") # 6 - only what fits is written
buf.full()             # True
```

`read_into(stream, length)` moves bytes straight into a binary stream.
`FixedBuffer` has the same interface apart from `full()`.

### Rendering values

```python
from cassobee.stringfy import to_string

to_string([1, 2, 3])           # "{1, 2, 3}"
to_string({1: "a"})            # "{<1, a>}"
to_string((1, "x"))            # "{1 x}"
to_string([1], prefix=True)    # "list{1}"
```

Values of other types raise `TypeError`.

### Locks and left-right data

```python
from cassobee.lock import RWLock
from cassobee.lr_map import LRMap

lock = RWLock()
with lock.read_locked():
    ...

table = LRMap()
table.emplace("a", 1)
table.emplace("a", 2)   # ignored, key already present
table.find("a")         # 1
"a" in table            # True
```

### Thread pool

```python
from cassobee.threadpool import ThreadPool

pool = ThreadPool()
pool.start("(100, 2) (100, 1)", steal=True)   # or [(100, 2), (100, 1)]
pool.add_task(0, lambda: print("ran in group 0"))
pool.stop()
```

Each group is a `(queue maxsize, thread count)` pair. A full queue raises
`ThreadPoolError`; `add_task` on a stopped pool returns `False`. With
`steal=True`, idle workers take queued tasks from other groups.

### Futures

```python
from cassobee.async_threadpool import AsyncThreadPool

pool = AsyncThreadPool(4)
pool.init()
future = pool.add_task(pow, 2, 10)
future.result()        # 1024
pool.stop()
```

### Delegates

```python
from cassobee.delegate import MulticastDelegate, ListStorage

on_event = MulticastDelegate(ListStorage())
handler_id = on_event.bind(lambda value: print("got", value))
on_event.broadcast(42)
on_event.unbind(handler_id)
```

An exception raised by one handler is logged and the remaining handlers
still run. `MapStorage` calls handlers in id order.

### Encryption

```python
import os
from cassobee.crypt import AESCrypt

crypt = AESCrypt(os.urandom(16), os.urandom(16))
ciphertext = crypt.encrypt(b"payload")
crypt.decrypt(ciphertext)   # b"payload"
```

Without arguments, `AESCrypt()` uses a random 16-byte key and IV. Bad
ciphertext raises `CryptError`.

### Logging

Patterns use `%` directives: `%m` message, `%p` level, `%r` elapsed
time, `%c` process name, `%t` thread id, `%F` fiber id, `%d` or
`%d{...}` date and time with a `strftime` format, `%f` file name, `%l`
line, `%T` tab, `%n` newline, and `%%` for a literal percent sign.
Unknown directives are rendered as `<<error_format %x>>` and set the
formatter's `error` flag.

```python
from cassobee.log_event import LogLevel, LogEvent
from cassobee.log_formatter import LogFormatter

formatter = LogFormatter("%d{%Y-%m-%d %H:%M:%S} [%p] %f:%l %m%n")
event = LogEvent(content="started", filename="main.py", line=10)
print(formatter.format(LogLevel.INFO, event), end="")
```

Writing to files named `<logdir>/<filename>.<yyyymmdd>.log`, reopened
when the day changes:

```python
from cassobee.log_event import LogEvent, LogLevel
from cassobee.log_manager import LogManager

manager = LogManager()
manager.init("logs", "server", False, LogLevel.DEBUG, "%p %m%n", 1000, 4096)
manager.log(LogLevel.WARN, LogEvent(content="disk almost full"))
manager.close()
```

With `asynclog=True` an `AsyncAppender` buffers records and a
background thread writes them once `threshold` bytes are waiting or
every `interval` milliseconds. `TimeRotater` also supports hourly
suffixes (`RotateType.HOUR`).

`LogClient` builds events from printf-style messages:

```python
from cassobee.log_event import LogLevel
from cassobee.logclient import LogClient

client = LogClient(LogLevel.INFO, "%p %c %m%n")
client.set_process_name("worker")
client.glog(LogLevel.WARN, "main.py", 12, "disk %d%% full", 93)  # printed
client.glog(LogLevel.DEBUG, "main.py", 13, "ignored")            # below level
```

A client named `logserver` hands events to its `LogManager`; otherwise
they go to the log server given by `set_logserver` while it reports
itself connected, and to the console when it does not.

## What it does not do

- There is no network transport. `LogClient.set_logserver` accepts any
  object with `is_connect()` and `send(level, event)` methods; the
  package provides no such connection itself, and no log server process.
- There is no configuration file reading and no command-line program:
  every setting is passed as an argument.