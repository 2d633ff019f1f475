"""Serial port selection, line settings, opening, reading and writing."""

from __future__ import annotations

from typing import Callable, Mapping

import serial
from serial.tools import list_ports

from serialhelper.events import Signal

BAUD_RATES = (1200, 2400, 4800, 9600, 19200, 38400, 57600, 115200)

DATA_BITS = {
    5: serial.FIVEBITS,
    6: serial.SIXBITS,
    7: serial.SEVENBITS,
    8: serial.EIGHTBITS,
}

PARITIES = {
    0: serial.PARITY_NONE,
    2: serial.PARITY_EVEN,
    3: serial.PARITY_ODD,
    4: serial.PARITY_SPACE,
    5: serial.PARITY_MARK,
}

STOP_BITS = {
    "1": serial.STOPBITS_ONE,
    "1.5": serial.STOPBITS_ONE_POINT_FIVE,
    "2": serial.STOPBITS_TWO,
}

# flow control code -> (rtscts, xonxoff)
FLOW_CONTROLS = {
    0: (False, False),
    1: (True, False),
    2: (False, True),
}

_PORT_ERRORS = (ValueError, OSError, serial.SerialException)


class SettingError(Exception):
    """A port setting was rejected or the port could not be used."""


def _port_devices() -> dict[str, str]:
    return {info.name: info.device for info in list_ports.comports()}


def available_ports() -> list[str]:
    """Names of the serial ports present on the system, sorted."""
    return sorted(_port_devices())


class PortSetting:
    """Owns one serial port: which device it is, its line settings and its state."""

    def __init__(
        self,
        *,
        lister: Callable[[], Mapping[str, str]] = _port_devices,
        port_factory: Callable[[], serial.Serial] = serial.Serial,
    ) -> None:
        self._lister = lister
        self.port = port_factory()
        self._ports: list[str] = sorted(lister())
        self._is_opened = False
        self._baud_rate: int | None = None
        self._data_bits: int | None = None
        self._parity: int | None = None
        self._stop_bits: str | None = None
        self._flow_control: int | None = None
        self.ports_changed = Signal()
        self.opened_changed = Signal()
        self.data_received = Signal()

    @property
    def ports(self) -> list[str]:
        return list(self._ports)

    @property
    def is_opened(self) -> bool:
        return self._is_opened

    @property
    def baud_rate(self) -> int | None:
        return self._baud_rate

    @property
    def data_bits(self) -> int | None:
        return self._data_bits

    @property
    def parity(self) -> int | None:
        return self._parity

    @property
    def stop_bits(self) -> str | None:
        return self._stop_bits

    @property
    def flow_control(self) -> int | None:
        return self._flow_control

    def update_ports(self) -> bool:
        """Refresh the port list; returns True if it changed.

        An empty scan leaves the list as it is. When ports are added, the tail of
        the sorted scan beyond the old length is appended; otherwise the ports no
        longer present are removed.
        """
        found = sorted(self._lister())
        if not found or found == self._ports:
            return False
        if len(found) > len(self._ports):
            self._ports.extend(found[len(self._ports):])
        else:
            present = set(found)
            self._ports = [name for name in self._ports if name in present]
        self.ports_changed.emit(self.ports)
        return True

    def _apply(self, what: str, assign: Callable[[], None]) -> None:
        try:
            assign()
        except _PORT_ERRORS as exc:
            raise SettingError(f"Failed to set {what}: {exc}") from exc

    def set_baud_rate(self, baud_rate: int) -> bool:
        """Apply a baud rate; returns False if it is already in effect."""
        if baud_rate not in BAUD_RATES:
            raise SettingError(f"Invalid baud rate: {baud_rate}")
        if baud_rate == self._baud_rate:
            return False
        self._apply("baud rate", lambda: setattr(self.port, "baudrate", baud_rate))
        self._baud_rate = baud_rate
        return True

    def set_data_bits(self, data_bits: int) -> bool:
        """Apply a data-bit count; returns False if it is already in effect."""
        if data_bits not in DATA_BITS:
            raise SettingError(f"Invalid data bits: {data_bits}")
        if data_bits == self._data_bits:
            return False
        self._apply("data bits", lambda: setattr(self.port, "bytesize", DATA_BITS[data_bits]))
        self._data_bits = data_bits
        return True

    def set_parity(self, parity: int) -> bool:
        """Apply a parity code (0 none, 2 even, 3 odd, 4 space, 5 mark)."""
        if parity not in PARITIES:
            raise SettingError(f"Invalid parity: {parity}")
        if parity == self._parity:
            return False
        self._apply("parity", lambda: setattr(self.port, "parity", PARITIES[parity]))
        self._parity = parity
        return True

    def set_stop_bits(self, stop_bits: str) -> bool:
        """Apply stop bits given as "1", "1.5" or "2"."""
        key = str(stop_bits)
        if key not in STOP_BITS:
            raise SettingError(f"Invalid stop bits: {stop_bits}")
        if key == self._stop_bits:
            return False
        self._apply("stop bits", lambda: setattr(self.port, "stopbits", STOP_BITS[key]))
        self._stop_bits = key
        return True

    def set_flow_control(self, flow_control: int) -> bool:
        """Apply flow control (0 none, 1 hardware, 2 software)."""
        if flow_control not in FLOW_CONTROLS:
            raise SettingError(f"Invalid flow control: {flow_control}")
        if flow_control == self._flow_control:
            return False
        rtscts, xonxoff = FLOW_CONTROLS[flow_control]

        def assign() -> None:
            self.port.rtscts = rtscts
            self.port.xonxoff = xonxoff

        self._apply("flow control", assign)
        self._flow_control = flow_control
        return True

    def set_port(self, name: str) -> bool:
        """Select the port called ``name``; returns False if no such port exists."""
        if not name:
            return False
        device = self._lister().get(name)
        if device is None:
            return False
        self._apply("port", lambda: setattr(self.port, "port", device))
        return True

    def _set_opened(self, value: bool) -> None:
        if value != self._is_opened:
            self._is_opened = value
            self.opened_changed.emit(value)

    def open(self) -> None:
        """Open the selected port for reading and writing."""
        if self._is_opened:
            return
        try:
            self.port.open()
        except _PORT_ERRORS as exc:
            raise SettingError(f"Failed to open port: {exc}") from exc
        self._set_opened(True)

    def close(self) -> None:
        """Close the port if it is open."""
        if self._is_opened:
            self.port.close()
            self._set_opened(False)

    def write(self, data: bytes) -> None:
        """Write ``data`` to the open port; empty data is ignored."""
        if not data:
            return
        if not self.port.is_open:
            raise SettingError("serial port is not open, cannot send data")
        try:
            self.port.write(data)
        except _PORT_ERRORS as exc:
            raise SettingError(f"Failed to write: {exc}") from exc

    def read_available(self) -> bytes:
        """Read whatever has arrived and emit it through ``data_received``."""
        if not self.port.is_open:
            return b""
        try:
            waiting = self.port.in_waiting
            data = self.port.read(waiting) if waiting else b""
        except _PORT_ERRORS as exc:
            raise SettingError(f"Failed to read: {exc}") from exc
        if data:
            self.data_received.emit(data)
        return data