from datetime import datetime

import pytest

from serialhelper.recv_area import (
    DataFormat,
    Encoding,
    RecvArea,
    from_hex,
    gbk_from_hex,
    gbk_hex_to_utf8_hex,
    gbk_to_hex,
    gbk_to_utf8,
    to_hex,
    utf8_from_hex,
    utf8_hex_to_gbk_hex,
    utf8_to_gbk,
    utf8_to_hex,
)

SAMPLES = [b"\x00", b"\x01\xab\xff", bytes(range(256)), "串口".encode("gbk")]


@pytest.mark.parametrize("data", SAMPLES)
def test_hex_round_trip(data):
    assert from_hex(to_hex(data)) == data


@pytest.mark.parametrize("data", SAMPLES)
def test_to_hex_is_upper_and_one_group_per_byte(data):
    text = to_hex(data)
    assert text == text.upper()
    assert len(text.split(" ")) == len(data)


def test_from_hex_ignores_separators_and_case():
    assert from_hex("01 ab\nCD") == from_hex("01ABcd")


def test_from_hex_odd_digit_count_pads_front():
    assert from_hex("abc") == from_hex("0abc")


def test_utf8_to_hex_pinned():
    assert utf8_to_hex("中") == "E4 B8 AD"


@pytest.mark.parametrize(
    "func",
    [utf8_to_hex, gbk_to_hex, utf8_from_hex, gbk_from_hex, gbk_to_utf8,
     utf8_to_gbk, gbk_hex_to_utf8_hex, utf8_hex_to_gbk_hex],
)
def test_empty_input_gives_empty_output(func):
    assert func("") == ""


def test_utf8_text_hex_round_trip():
    text = "héllo 中文"
    assert utf8_from_hex(utf8_to_hex(text)) == text


def test_gbk_text_hex_round_trip():
    text = "串口助手"
    assert gbk_from_hex(gbk_to_hex(text)) == text
    assert gbk_to_hex(text) == to_hex(text.encode("gbk"))


def test_invalid_utf8_is_replaced():
    assert utf8_from_hex("ff") == "\ufffd"


def test_gbk_hex_to_utf8_hex():
    text = "数据位"
    assert gbk_hex_to_utf8_hex(gbk_to_hex(text)) == utf8_to_hex(text)


def test_utf8_hex_to_gbk_hex():
    text = "停止位"
    assert utf8_hex_to_gbk_hex(utf8_to_hex(text)) == gbk_to_hex(text)


def test_text_round_trips_keep_encodable_text():
    text = "校验 abc"
    assert gbk_to_utf8(text) == text
    assert utf8_to_gbk(text) == text


def test_utf8_to_gbk_replaces_unencodable():
    result = utf8_to_gbk("a😀b")
    assert result.startswith("a") and result.endswith("b")
    assert "😀" not in result


def test_defaults_follow_source():
    area = RecvArea()
    assert area.encoding is Encoding.GBK
    assert area.data_format is DataFormat.TEXT
    assert area.add_timestamp is False


def test_receive_gbk_text():
    area = RecvArea()
    assert area.receive("中文".encode("gbk")) == "中文"
    assert area.serial_port_info == "中文"


def test_receive_utf8_text_emits_signal():
    area = RecvArea(encoding="UTF-8")
    seen = []
    area.info_changed.connect(seen.append)
    result = area.receive("波特率".encode("utf-8"))
    assert result == "波特率"
    assert seen == ["波特率"]


@pytest.mark.parametrize("encoding", list(Encoding))
def test_receive_hex_mode(encoding):
    area = RecvArea(encoding=encoding, data_format=DataFormat.HEX)
    data = b"\x10\x20\xfe"
    assert area.receive(data) == to_hex(data) + " "


def test_receive_empty_does_nothing():
    area = RecvArea()
    seen = []
    area.info_changed.connect(seen.append)
    area.receive(b"abc")
    assert area.receive(b"") is None
    assert area.serial_port_info == "abc"
    assert seen == ["abc"]


def test_receive_with_timestamp():
    area = RecvArea(
        encoding="UTF-8",
        add_timestamp=True,
        clock=lambda: datetime(2024, 1, 2, 3, 4, 5, 678000),
    )
    assert area.receive(b"abc") == "[03:04:05.678] abc"


def test_data_format_accepts_source_string():
    area = RecvArea(data_format="文本")
    assert area.data_format is DataFormat.TEXT
    with pytest.raises(ValueError):
        area.encoding = "LATIN-9"


def test_write_to_missing_file_raises(tmp_path):
    area = RecvArea()
    with pytest.raises(FileNotFoundError):
        area.write_data_to_file(tmp_path / "missing.txt", "data")


def test_write_appends_and_signals(tmp_path):
    target = tmp_path / "log.txt"
    target.write_text("first|", encoding="utf-8")
    area = RecvArea()
    done = []
    area.data_written.connect(done.append)
    area.write_data_to_file(target, "第二")
    assert target.read_text(encoding="utf-8") == "first|第二"
    assert done == [target]


def test_write_accepts_file_url(tmp_path):
    target = tmp_path / "url.txt"
    target.write_text("", encoding="utf-8")
    area = RecvArea()
    area.write_data_to_file(target.as_uri(), "payload")
    assert target.read_text(encoding="utf-8") == "payload"