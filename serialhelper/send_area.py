"""Outgoing data: encoding the typed text and optional periodic sending."""

from __future__ import annotations

import threading
from typing import Callable

from serialhelper.events import Signal
from serialhelper.recv_area import DataFormat, Encoding, from_hex

LINE_FEED = b"\r\n"


class _RepeatingTimer:
    """Background thread that calls ``action`` every ``interval()`` seconds."""

    def __init__(self, interval: Callable[[], float], action: Callable[[], None]) -> None:
        self._interval = interval
        self._action = action
        self._stopped = threading.Event()
        self._thread = threading.Thread(target=self._run, daemon=True)

    def start(self) -> None:
        self._thread.start()

    def _run(self) -> None:
        while not self._stopped.wait(self._interval()):
            self._action()

    def stop(self) -> None:
        self._stopped.set()
        if self._thread is not threading.current_thread() and self._thread.is_alive():
            self._thread.join()


class SendArea:
    """Encodes text for the port and emits it, once or on a timer."""

    def __init__(
        self,
        *,
        encoding: Encoding | str = Encoding.GBK,
        data_format: DataFormat | str = DataFormat.TEXT,
        add_line_feed: bool = False,
        interval_ms: int = 1000,
        timing: bool = False,
        data: str = "",
    ) -> None:
        self.encoding = encoding
        self.data_format = data_format
        self.add_line_feed = add_line_feed
        self.interval_ms = interval_ms
        self.timing = timing
        self.data = data
        self.send_requested = Signal()
        self._timer: _RepeatingTimer | None = None
        self._lock = threading.Lock()

    @property
    def encoding(self) -> Encoding:
        return self._encoding

    @encoding.setter
    def encoding(self, value: Encoding | str) -> None:
        self._encoding = Encoding(value)

    @property
    def data_format(self) -> DataFormat:
        return self._data_format

    @data_format.setter
    def data_format(self, value: DataFormat | str) -> None:
        self._data_format = DataFormat(value)

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @interval_ms.setter
    def interval_ms(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"interval must not be negative: {value}")
        self._interval_ms = int(value)

    @property
    def timer_active(self) -> bool:
        with self._lock:
            return self._timer is not None

    def encode_payload(self, text: str) -> bytes:
        """Bytes to put on the wire for ``text`` under the current settings."""
        if self.data_format is DataFormat.TEXT:
            payload = self.encoding.to_bytes(text)
        else:
            payload = from_hex(text)
        if self.add_line_feed:
            payload += LINE_FEED
        return payload

    def send(self, text: str) -> None:
        """Emit ``send_requested`` with the encoded ``text``; empty text is ignored."""
        if not text:
            return
        self.send_requested.emit(self.encode_payload(text))

    def send_current(self) -> None:
        """Send the text currently held in ``data``."""
        self.send(self.data)

    def update_timer(self) -> None:
        """Start periodic sending if ``timing`` is set, otherwise stop it."""
        self._stop_timer()
        if self.timing:
            timer = _RepeatingTimer(lambda: self.interval_ms / 1000, self.send_current)
            with self._lock:
                self._timer = timer
            timer.start()

    def close(self) -> None:
        """Stop periodic sending."""
        self._stop_timer()

    def _stop_timer(self) -> None:
        with self._lock:
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.stop()

    def __enter__(self) -> "SendArea":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()