"""Serial port assistant: port settings, text/hex send and receive, GBK/UTF-8 conversion."""

__version__ = "0.1.0"

__all__ = ["events", "recv_area", "send_area", "setting", "engine"]