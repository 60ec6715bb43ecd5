import pytest

from cprims.strings import (
    strchr,
    strcmp,
    strcpy,
    strlcat,
    strlcpy,
    strlen,
    strncmp,
    strncpy,
    strnlen,
    strstr,
)


def test_strlen_stops_at_nul():
    assert strlen(b"hello\0world") == len(b"hello")


def test_strlen_without_terminator_uses_buffer_end():
    assert strlen(b"abc") == 3


def test_strlen_empty():
    assert strlen(b"\0abc") == 0


def test_strnlen_limits():
    assert strnlen(b"hello\0", 3) == 3
    assert strnlen(b"hello\0", 10) == strlen(b"hello\0")


def test_strnlen_negative_raises():
    with pytest.raises(ValueError):
        strnlen(b"abc", -1)


def test_strchr_finds_first():
    s = b"banana\0"
    assert strchr(s, ord("n")) == s.find(b"n")


def test_strchr_missing():
    assert strchr(b"abc\0xyz", ord("x")) is None


def test_strchr_nul_finds_terminator():
    s = b"abc\0def"
    assert strchr(s, 0) == strlen(s)


def test_strcmp_equal():
    assert strcmp(b"abc\0zzz", b"abc\0yyy") == 0


def test_strcmp_sign_and_difference():
    assert strcmp(b"abd", b"abc") == ord("d") - ord("c")
    assert strcmp(b"ab", b"abc") == -ord("c")
    assert strcmp(b"abc", b"ab") > 0


def test_strcmp_unsigned_bytes():
    assert strcmp(b"\xff", b"\x01") == 0xFF - 0x01


def test_strcmp_antisymmetric():
    pairs = [(b"apple", b"apricot"), (b"x", b""), (b"same", b"same")]
    for a, b in pairs:
        assert strcmp(a, b) == -strcmp(b, a)


def test_strncmp_limited():
    assert strncmp(b"abcX", b"abcY", 3) == 0
    assert strncmp(b"abcX", b"abcY", 4) == ord("X") - ord("Y")


def test_strncmp_zero_length():
    assert strncmp(b"a", b"b", 0) == 0


def test_strncmp_stops_at_terminator():
    assert strncmp(b"ab\0x", b"ab\0y", 10) == 0


def test_strcpy_copies_with_terminator():
    dst = bytearray(b"\xaa" * 8)
    result = strcpy(dst, b"hi\0ignored")
    assert result is dst
    assert bytes(dst[:3]) == b"hi\0"
    assert dst[3:] == bytearray(b"\xaa" * 5)


def test_strcpy_too_small_raises():
    with pytest.raises(ValueError):
        strcpy(bytearray(3), b"abc")


def test_strncpy_pads_with_nul():
    dst = bytearray(b"\xaa" * 8)
    strncpy(dst, b"ab", 6)
    assert bytes(dst[:6]) == b"ab" + b"\0" * 4
    assert dst[6:] == bytearray(b"\xaa" * 2)


def test_strncpy_unterminated_when_long():
    dst = bytearray(b"\xaa" * 5)
    strncpy(dst, b"abcdef", 3)
    assert bytes(dst) == b"abc\xaa\xaa"


def test_strlcpy_fits():
    dst = bytearray(8)
    assert strlcpy(dst, b"hello", 8) == 5
    assert strcmp(dst, b"hello") == 0


def test_strlcpy_truncates():
    dst = bytearray(b"\xaa" * 4)
    assert strlcpy(dst, b"hello", 4) == 5
    assert bytes(dst) == b"hel\0"


def test_strlcpy_zero_size_leaves_dst():
    dst = bytearray(b"xy")
    assert strlcpy(dst, b"hello", 0) == 5
    assert bytes(dst) == b"xy"


def test_strlcat_appends():
    dst = bytearray(b"foo\0" + b"\0" * 6)
    assert strlcat(dst, b"bar", 10) == 6
    assert strcmp(dst, b"foobar") == 0


def test_strlcat_truncates():
    dst = bytearray(b"foo\0\0\0")
    assert strlcat(dst, b"barbaz", 6) == 9
    assert bytes(dst) == b"fooba\0"


def test_strlcat_full_destination():
    dst = bytearray(b"abcd")
    assert strlcat(dst, b"xy", 4) == 4 + 2
    assert bytes(dst) == b"abcd"


def test_strstr_found():
    s = b"hello world\0"
    assert strstr(s, b"wor") == s.find(b"wor")


def test_strstr_missing_and_past_terminator():
    assert strstr(b"hello\0world", b"world") is None


def test_strstr_empty_needle():
    assert strstr(b"abc", b"") == 0


def test_copy_then_compare_round_trip():
    for word in (b"", b"a", b"longer string"):
        dst = bytearray(len(word) + 1)
        strcpy(dst, word)
        assert strcmp(dst, word) == 0
        assert strlen(dst) == len(word)