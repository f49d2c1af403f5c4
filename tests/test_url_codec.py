"""Unit tests for percent-decoding and percent-encoding."""

from url_codec import url_decode, url_encode


def test_decode_space_escape() -> None:
    assert url_decode("hello%20world") == "hello world"


def test_decode_keeps_invalid_hex_verbatim() -> None:
    assert url_decode("test%GG") == "test%GG"
    assert url_decode("%zzabc") == "%zzabc"


def test_decode_pads_truncated_escape_with_zero() -> None:
    assert url_decode("test%1") == "test" + chr(0x10)
    assert url_decode("end%") == "end" + chr(0)


def test_decode_truncated_invalid_escape_keeps_padding() -> None:
    assert url_decode("x%G") == "x%G0"


def test_decode_accepts_lowercase_hex() -> None:
    assert url_decode("a%2fb%2Fc") == "a/b/c"


def test_decode_high_bytes_become_single_characters() -> None:
    assert url_decode("caf%C3%A9") == "caf\xc3\xa9"


def test_decode_leaves_plain_text_alone() -> None:
    assert url_decode("plain/path-name_1.txt") == "plain/path-name_1.txt"


def test_encode_spaces() -> None:
    assert url_encode("file with spaces.txt") == "file%20with%20spaces.txt"


def test_encode_escaped_set() -> None:
    assert url_encode('"#%&+?') == "%22%23%25%26%2B%3F"


def test_encode_leaves_unreserved_and_slash() -> None:
    assert url_encode("dir/sub-dir_x.y~z/File9") == "dir/sub-dir_x.y~z/File9"


def test_encode_other_characters_as_uppercase_hex() -> None:
    assert url_encode("a!b@c") == "a%21b%40c"
    assert url_encode("[]") == "%5B%5D"


def test_encode_non_ascii_as_utf8_bytes() -> None:
    assert url_encode("café") == "caf%C3%A9"


def test_decode_reverses_encode_for_ascii() -> None:
    for text in ["hello world!@#$%^&*()", "a+b=c?d#e", 'quote"d name', "100% done"]:
        assert url_decode(url_encode(text)) == text
