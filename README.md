# serialhelper

A small serial port assistant. It lists the serial ports on the machine and
opens one with the line settings you choose. You can send outgoing data as
text or as a hex string, either once or repeatedly on a timer. Incoming data
is shown as text or as hex, and can carry a timestamp. Both GBK and UTF-8
encodings are supported.

## Installation

```
pip install .
```

To run the test suite, install with `pip install .[test]`.

## Command line

```
serialhelper --list
```

This prints the names of the serial ports, sorted. Running `serialhelper` with
no port name does the same.

```
serialhelper COM3 --baud 115200
```

This opens the named port and starts a terminal:

- Each line read from standard input is sent to the port. The line ending is
  removed first.
- Received data is printed to standard output.
- Errors are printed to standard error.

The terminal runs until the end of input or Ctrl-C. The exit status is 1 in
two cases: the port name is unknown, or a setting or the open fails.

Options:

| Option | Values | Default |
| --- | --- | --- |
| `--baud` | 1200, 2400, 4800, 9600, 19200, 38400, 57600, 115200 | 9600 |
| `--data-bits` | 5, 6, 7, 8 | 8 |
| `--parity` | 0 none, 2 even, 3 odd, 4 space, 5 mark | 0 |
| `--stop-bits` | `1`, `1.5`, `2` | `1` |
| `--flow-control` | 0 none, 1 hardware, 2 software | 0 |
| `--encoding` | `GBK`, `UTF-8` | `GBK` |
| `--recv-format` | `text`, `hex` | `text` |
| `--send-format` | `text`, `hex` | `text` |
| `--timestamp` | prefix received data with `[hh:mm:ss.zzz]` | off |
| `--line-feed` | append CR LF to sent data | off |
| `--repeat TEXT` | send TEXT periodically | none |
| `--interval` | repeat interval in milliseconds | 1000 |

## Library use

`Engine` in `serialhelper.engine` connects three parts:

- `PortSetting` (`serialhelper.setting`) owns the port. `read_available()`
  reads the bytes that have arrived and emits them through `data_received`.
- `RecvArea` (`serialhelper.recv_area`) formats received bytes. It stores the
  result in `serial_port_info` and emits it through `info_changed`.
- `SendArea` (`serialhelper.send_area`) encodes outgoing text and emits it
  through `send_requested`.

The engine routes received bytes to the receive area and send requests to the
port. If a write fails, the engine emits the message through `Engine.error`
and does not raise.

```python
from serialhelper.engine import Engine
from serialhelper.recv_area import DataFormat

with Engine() as engine:
    setting = engine.setting
    if setting.set_port("COM3"):
        setting.set_baud_rate(115200)
        setting.set_data_bits(8)
        setting.set_parity(0)
        setting.set_stop_bits("1")
        setting.set_flow_control(0)
        setting.open()

        engine.send_area.data_format = DataFormat.HEX
        engine.send_area.send("48 65 6C 6C 6F")   # sends b"Hello"
        engine.setting.read_available()
        print(engine.recv_area.serial_port_info)
```

Port settings behave as follows:

- Each `set_*` method returns `False` when the value is already in effect.
- Each raises `SettingError` when the value is not allowed or the port rejects
  it.
- `set_port` returns `False` if no port has that name.
- `open` and `write` raise `SettingError` on failure. So does `write` when the
  port is not open.
- `update_ports()` rescans the system. It updates `ports` and emits
  `ports_changed` when the list has changed.

For periodic sending, set `timing = True` and `interval_ms` on a `SendArea`,
then call `update_timer()`. The text in `data` is then sent every interval.
`close()` stops the timer.

`RecvArea.write_data_to_file(path, data)` appends text to a file. The file can
be given as a path or as a `file:` URL. It must already exist, or
`FileNotFoundError` is raised.

### Encoding helpers

`serialhelper.recv_area` provides plain conversion functions:

```python
from serialhelper.recv_area import utf8_to_hex, utf8_from_hex, gbk_hex_to_utf8_hex

utf8_to_hex("AB")             # '41 42'
utf8_from_hex("41 42")        # 'AB'
gbk_hex_to_utf8_hex("C4 E3")  # 'E4 BD A0'
```

The other helpers are `to_hex`, `from_hex`, `gbk_to_hex`, `gbk_from_hex`,
`gbk_to_utf8`, `utf8_to_gbk` and `utf8_hex_to_gbk_hex`.

- `from_hex` ignores any character that is not a hex digit.
- Characters an encoding cannot hold are replaced.

### Signals

Each component reports events through `serialhelper.events.Signal` objects:

- `connect` attaches a callable.
- `disconnect` removes it.
- `emit` calls every attached callable in the order they were connected.

## What it does not do

There is no graphical window. The package provides the terminal described
above and the library classes. Received data is not saved anywhere unless you
call `write_data_to_file` yourself.