"""Received-data display: decoding, hex conversion and saving to a file."""

from __future__ import annotations

import errno
import os
import string
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Union
from urllib.parse import urlparse
from urllib.request import url2pathname

from serialhelper.events import Signal

PathLike = Union[str, "os.PathLike[str]"]

_HEX_DIGITS = frozenset(string.hexdigits)


class Encoding(str, Enum):
    """Text encodings the helper offers for the serial stream."""

    UTF8 = "UTF-8"
    GBK = "GBK"

    @property
    def codec(self) -> str:
        return "utf-8" if self is Encoding.UTF8 else "gbk"

    def to_bytes(self, text: str) -> bytes:
        """Encode ``text``, replacing characters the encoding cannot hold."""
        return text.encode(self.codec, "replace")

    def to_text(self, data: bytes) -> str:
        """Decode ``data``, replacing invalid sequences."""
        return bytes(data).decode(self.codec, "replace")


class DataFormat(str, Enum):
    """How data is shown or entered: as text or as hex digits."""

    TEXT = "文本"
    HEX = "十六进制"


def to_hex(data: bytes) -> str:
    """Upper-case hex digits of ``data``, one space between bytes."""
    return bytes(data).hex(" ").upper()


def from_hex(text: str) -> bytes:
    """Bytes from hex digits, ignoring every other character.

    Digits pair up from the end, so an odd leading digit forms a byte by itself.
    """
    digits = "".join(ch for ch in text if ch in _HEX_DIGITS)
    if len(digits) % 2:
        digits = "0" + digits
    return bytes.fromhex(digits)


def utf8_to_hex(text: str) -> str:
    """Hex representation of ``text`` encoded as UTF-8."""
    return to_hex(Encoding.UTF8.to_bytes(text)) if text else ""


def gbk_to_hex(text: str) -> str:
    """Hex representation of ``text`` encoded as GBK."""
    return to_hex(Encoding.GBK.to_bytes(text)) if text else ""


def utf8_from_hex(text: str) -> str:
    """Text decoded as UTF-8 from hex digits."""
    return Encoding.UTF8.to_text(from_hex(text)) if text else ""


def gbk_from_hex(text: str) -> str:
    """Text decoded as GBK from hex digits."""
    return Encoding.GBK.to_text(from_hex(text)) if text else ""


def gbk_to_utf8(text: str) -> str:
    """``text`` passed through a UTF-8 round trip."""
    return Encoding.UTF8.to_text(Encoding.UTF8.to_bytes(text)) if text else ""


def utf8_to_gbk(text: str) -> str:
    """``text`` passed through a GBK round trip; unencodable characters become '?'."""
    return Encoding.GBK.to_text(Encoding.GBK.to_bytes(text)) if text else ""


def gbk_hex_to_utf8_hex(text: str) -> str:
    """Re-encode hex of GBK bytes as hex of the same text in UTF-8."""
    if not text:
        return ""
    return utf8_to_hex(gbk_from_hex(text))


def utf8_hex_to_gbk_hex(text: str) -> str:
    """Re-encode hex of UTF-8 bytes as hex of the same text in GBK."""
    if not text:
        return ""
    return gbk_to_hex(utf8_from_hex(text))


def _local_path(path: PathLike) -> Path:
    if isinstance(path, str) and path.startswith("file:"):
        return Path(url2pathname(urlparse(path).path))
    return Path(path)


class RecvArea:
    """Turns received bytes into display text and saves displayed text."""

    def __init__(
        self,
        *,
        encoding: Encoding | str = Encoding.GBK,
        data_format: DataFormat | str = DataFormat.TEXT,
        add_timestamp: bool = False,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.encoding = encoding
        self.data_format = data_format
        self.add_timestamp = add_timestamp
        self._clock = clock
        self.serial_port_info = ""
        self.info_changed = Signal()
        self.data_written = Signal()

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

    def receive(self, data: bytes) -> str | None:
        """Format a chunk of received bytes; returns the text, or None for no data."""
        if not data:
            return None
        if self.data_format is DataFormat.TEXT:
            text = self.encoding.to_text(data)
        else:
            text = to_hex(data) + " "
        if self.add_timestamp:
            now = self._clock()
            text = f"[{now:%H:%M:%S}.{now.microsecond // 1000:03d}] {text}"
        self.serial_port_info = text
        self.info_changed.emit(text)
        return text

    def write_data_to_file(self, path: PathLike, data: str) -> None:
        """Append ``data`` to an existing file given as a path or file URL."""
        target = _local_path(path)
        if not target.exists():
            raise FileNotFoundError(errno.ENOENT, "file does not exist", str(target))
        with target.open("a", encoding="utf-8") as handle:
            handle.write(data)
        self.data_written.emit(target)