"""Wires port, receive and send components together, plus a terminal front end."""

from __future__ import annotations

import argparse
import sys
import threading

from serialhelper.events import Signal
from serialhelper.recv_area import DataFormat, Encoding, RecvArea
from serialhelper.send_area import SendArea
from serialhelper.setting import (
    BAUD_RATES,
    DATA_BITS,
    FLOW_CONTROLS,
    PARITIES,
    STOP_BITS,
    PortSetting,
    SettingError,
    available_ports,
)

_POLL_SECONDS = 0.01


class Engine:
    """Routes received bytes to the receive area and send requests to the port."""

    def __init__(
        self,
        *,
        setting: PortSetting | None = None,
        recv_area: RecvArea | None = None,
        send_area: SendArea | None = None,
    ) -> None:
        self.setting = setting if setting is not None else PortSetting()
        self.recv_area = recv_area if recv_area is not None else RecvArea()
        self.send_area = send_area if send_area is not None else SendArea()
        self.error = Signal()
        self.setting.data_received.connect(self.recv_area.receive)
        self.send_area.send_requested.connect(self._write)

    def _write(self, data: bytes) -> None:
        try:
            self.setting.write(data)
        except SettingError as exc:
            self.error.emit(str(exc))

    def close(self) -> None:
        """Stop periodic sending and close the port."""
        self.send_area.close()
        self.setting.close()

    def __enter__(self) -> "Engine":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


_FORMATS = {"text": DataFormat.TEXT, "hex": DataFormat.HEX}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="serialhelper", description="Interactive serial port terminal."
    )
    parser.add_argument("port", nargs="?", help="port name; omit to list ports")
    parser.add_argument("--list", action="store_true", help="list ports and exit")
    parser.add_argument("--baud", type=int, default=9600, choices=BAUD_RATES)
    parser.add_argument("--data-bits", type=int, default=8, choices=sorted(DATA_BITS))
    parser.add_argument("--parity", type=int, default=0, choices=sorted(PARITIES))
    parser.add_argument("--stop-bits", default="1", choices=list(STOP_BITS))
    parser.add_argument("--flow-control", type=int, default=0, choices=sorted(FLOW_CONTROLS))
    parser.add_argument("--encoding", default=Encoding.GBK.value, choices=[e.value for e in Encoding])
    parser.add_argument("--recv-format", default="text", choices=list(_FORMATS))
    parser.add_argument("--send-format", default="text", choices=list(_FORMATS))
    parser.add_argument("--timestamp", action="store_true", help="prefix received data with the time")
    parser.add_argument("--line-feed", action="store_true", help="append CR LF to sent data")
    parser.add_argument("--repeat", metavar="TEXT", help="send TEXT periodically")
    parser.add_argument("--interval", type=int, default=1000, help="repeat interval in ms")
    return parser


def _read_loop(engine: Engine, stop: threading.Event) -> None:
    while not stop.wait(_POLL_SECONDS):
        try:
            engine.setting.read_available()
        except SettingError as exc:
            engine.error.emit(str(exc))
            return


def main(argv: list[str] | None = None) -> int:
    """Run the terminal; returns the process exit status."""
    args = _build_parser().parse_args(argv)
    if args.list or args.port is None:
        for name in available_ports():
            print(name)
        return 0

    engine = Engine(
        recv_area=RecvArea(
            encoding=args.encoding,
            data_format=_FORMATS[args.recv_format],
            add_timestamp=args.timestamp,
        ),
        send_area=SendArea(
            encoding=args.encoding,
            data_format=_FORMATS[args.send_format],
            add_line_feed=args.line_feed,
            interval_ms=args.interval,
        ),
    )
    with engine:
        engine.error.connect(lambda message: print(message, file=sys.stderr))
        engine.recv_area.info_changed.connect(lambda text: print(text, end="", flush=True))
        setting = engine.setting
        try:
            if not setting.set_port(args.port):
                print(f"no such port: {args.port}", file=sys.stderr)
                return 1
            setting.set_baud_rate(args.baud)
            setting.set_data_bits(args.data_bits)
            setting.set_parity(args.parity)
            setting.set_stop_bits(args.stop_bits)
            setting.set_flow_control(args.flow_control)
            setting.open()
        except SettingError as exc:
            print(exc, file=sys.stderr)
            return 1

        stop = threading.Event()
        reader = threading.Thread(target=_read_loop, args=(engine, stop), daemon=True)
        reader.start()
        try:
            if args.repeat:
                engine.send_area.data = args.repeat
                engine.send_area.timing = True
                engine.send_area.update_timer()
            for line in sys.stdin:
                engine.send_area.send(line.rstrip("\r\n"))
        except KeyboardInterrupt:
            pass
        finally:
            stop.set()
            reader.join()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())