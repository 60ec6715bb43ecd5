import os

import pytest

from cprims.simple_string import SimpleString, dprintf, format_simple


def _space_escape(c):
    return "\\s" if c == " " else None


def _read_all(fd):
    chunks = []
    while True:
        data = os.read(fd, 4096)
        if not data:
            return b"".join(chunks)
        chunks.append(data)


@pytest.fixture
def pipe():
    r, w = os.pipe()
    closed = {"w": False}

    def finish():
        os.close(w)
        closed["w"] = True
        return _read_all(r)

    yield w, finish
    if not closed["w"]:
        os.close(w)
    os.close(r)


def test_plain_text_passes_through():
    assert format_simple("hello world") == "hello world"


def test_double_percent_is_literal():
    assert format_simple("a%%b") == "a%b"


@pytest.mark.parametrize("value", [0, 7, -7, 2**31 - 1, -(2**31)])
def test_signed_decimal_round_trip(value):
    assert int(format_simple("%d", value)) == value
    assert int(format_simple("%i", value)) == value


def test_plain_int_wraps_to_32_bits():
    assert int(format_simple("%d", 2**32 + 5)) == 5


@pytest.mark.parametrize("value", [2**40, -(2**63), 2**63 - 1])
def test_long_decimal_round_trip(value):
    assert int(format_simple("%ld", value)) == value
    assert int(format_simple("%lld", value)) == value


def test_blank_padding_puts_sign_next_to_digits():
    out = format_simple("%8d", -42)
    assert len(out) == 8
    assert out.startswith(" ")
    assert out.strip().startswith("-")
    assert int(out) == -42


def test_zero_padding_puts_sign_first():
    out = format_simple("%08d", -42)
    assert len(out) == 8
    assert out.startswith("-0")
    assert int(out) == -42


def test_width_smaller_than_number_does_not_truncate():
    assert int(format_simple("%1d", 123456)) == 123456


def test_unsigned_int_of_minus_one():
    assert int(format_simple("%u", -1)) == 0xFFFFFFFF
    assert int(format_simple("%x", -1), 16) == 0xFFFFFFFF


def test_octal_sign_extends_plain_int():
    assert int(format_simple("%o", -1), 8) == 2**64 - 1


def test_upper_hex_matches_lower():
    value = 0xABCDEF12
    assert format_simple("%X", value) == format_simple("%x", value).upper()
    assert int(format_simple("%lx", 2**60 + 11), 16) == 2**60 + 11


def test_pointer_has_prefix():
    out = format_simple("%p", 0x1000)
    assert out.startswith("0x")
    assert int(out, 16) == 0x1000


def test_pointer_zero_padding_keeps_prefix_first():
    out = format_simple("%018p", 0x1000)
    assert len(out) == 18
    assert out.startswith("0x0")
    assert int(out, 16) == 0x1000


def test_pointer_blank_padding_keeps_prefix_with_digits():
    out = format_simple("%18p", 0x1000)
    assert len(out) == 18
    assert out.lstrip().startswith("0x")
    assert int(out.strip(), 16) == 0x1000


def test_byte_count_units():
    assert format_simple("%y", 100) == format_simple("%u", 100) + "b"
    kb = format_simple("%y", 10 * 1024)
    assert kb.endswith("KB") and int(kb[:-2]) == 10
    mb = format_simple("%y", 10 * 2**20)
    assert mb.endswith("MB") and int(mb[:-2]) == 10


def test_byte_count_rounds_to_nearest():
    out = format_simple("%y", 15 * 1024 + 512)
    assert out == "16KB"


def test_character():
    assert format_simple("%c", ord("A")) == "A"
    padded = format_simple("%3c", "A")
    assert len(padded) == 3 and padded.endswith("A") and padded.startswith(" ")


def test_string_conversions():
    assert format_simple("%s", None) == "(null)"
    out = format_simple("%5s", "ab")
    assert len(out) == 5 and out.endswith("ab") and out.startswith(" ")
    assert format_simple("%05s", "ab") == "0" * 3 + "ab"
    assert format_simple("%s", b"bytes") == "bytes"


def test_precision_star_string():
    assert format_simple("%.*s", 3, "abcdef") == "abcdef"[:3]
    assert format_simple("[%.*s]", 0, "abc") == "[]"


def test_unknown_conversion_prints_character():
    assert format_simple("%q") == "q"


def test_escape_function_applies_to_padding():
    assert format_simple("a b", esc=_space_escape) == "a\\sb"
    assert format_simple("%3d", 5, esc=_space_escape) == "\\s\\s5"


def test_missing_argument_raises():
    with pytest.raises(TypeError):
        format_simple("%d %d", 1)


def test_wrong_argument_type_raises():
    with pytest.raises(TypeError):
        format_simple("%d", 1.5)
    with pytest.raises(TypeError):
        format_simple("%s", 3)


def test_trailing_percent_raises():
    with pytest.raises(ValueError):
        format_simple("abc%")
    with pytest.raises(ValueError):
        format_simple("%5")


def test_simple_string_accumulates():
    s = SimpleString()
    s.sprintf("n=%d", 12)
    s.append(" tail")
    assert s.string() == format_simple("n=%d", 12) + " tail"
    assert len(s) == len(s.string())


def test_simple_string_escaped_appends():
    s = SimpleString()
    s.esappend(_space_escape, "a b")
    s.esprintf(_space_escape, " %s", "c")
    assert s.string() == "a\\sb\\sc"


def test_string_stops_at_nul_and_resize_truncates():
    s = SimpleString()
    s.append("keep")
    s.sprintf("%c", 0)
    s.append("drop")
    assert s.string() == "keep"
    assert len(s) == len("keep") + 1 + len("drop")
    s.resize()
    assert len(s) == len("keep")
    s.append("!")
    assert s.string() == "keep!"


def test_put_writes_buffer(pipe):
    w, finish = pipe
    s = SimpleString()
    s.sprintf("value %u", 99)
    s.put(w)
    assert finish() == s.string().encode()


def test_putline_adds_newline_without_changing_buffer(pipe):
    w, finish = pipe
    s = SimpleString()
    s.append("line")
    s.putline(w)
    assert finish() == b"line\n"
    assert s.string() == "line"


def test_dprintf_writes_formatted_text(pipe):
    w, finish = pipe
    dprintf(w, "%s=%d;", "x", -3)
    assert finish().decode() == format_simple("%s=%d;", "x", -3)


def test_dprintf_long_output_is_complete(pipe):
    w, finish = pipe
    text = "z" * 1000
    dprintf(w, "%s", text)
    assert finish() == text.encode()