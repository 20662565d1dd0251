import random

import pytest

from binary_codec import (
    ByteValue,
    Decoded,
    DecodeFailure,
    ErrorKind,
    TokenError,
    decode,
    encode,
    split_tokens,
    token_to_byte,
)


def test_encode_msb_first():
    assert encode(bytes([65])) == "01000001"
    assert encode(b"AB") == "01000001 01000010"
    assert encode([0, 255]) == "00000000 11111111"


def test_encode_empty():
    assert encode(b"") == ""


def test_encode_token_shape():
    payload = bytes(range(256))
    tokens = encode(payload).split(" ")
    assert len(tokens) == len(payload)
    for token in tokens:
        assert len(token) == 8
        assert set(token) <= {"0", "1"}


def test_roundtrip_random_bytes():
    rng = random.Random(1234)
    for size in (0, 1, 7, 64, 1000):
        payload = bytes(rng.randrange(256) for _ in range(size))
        result = decode(encode(payload))
        assert result == Decoded(payload)


def test_decode_empty_and_whitespace():
    assert decode("") == Decoded(b"")
    assert decode(" \n\t  \r\n") == Decoded(b"")


def test_decode_whitespace_tolerant():
    assert decode("01000001\n01000010").payload == b"AB"
    assert decode("  01000001 \t\r\n  01000010\n").payload == b"AB"


def test_decode_accepts_bytes():
    assert decode(b"01001000 01101001").payload == b"Hi"


def test_decode_rejects_short_token():
    result = decode("0100001")
    assert isinstance(result, DecodeFailure)
    assert not result.ok
    assert result.kind is ErrorKind.INVALID_TOKEN_LENGTH
    assert result.index == 0


def test_decode_rejects_long_token():
    assert decode("010000011").kind is ErrorKind.INVALID_TOKEN_LENGTH


def test_decode_rejects_bad_character():
    result = decode("0100200A")
    assert result.kind is ErrorKind.INVALID_TOKEN_CHARACTER
    assert result.token == "0100200A"


def test_length_checked_before_characters():
    assert decode("abc").kind is ErrorKind.INVALID_TOKEN_LENGTH


def test_non_ascii_byte_is_bad_character():
    result = decode(b"0100000\xff")
    assert result.kind is ErrorKind.INVALID_TOKEN_CHARACTER


def test_decode_is_all_or_nothing():
    result = decode("01000001 bad")
    assert isinstance(result, DecodeFailure)
    assert not hasattr(result, "payload")
    assert result.index == 1
    assert result.token == "bad"
    assert "token #2" in result.message
    assert "InvalidTokenLength" in result.message


def test_first_invalid_token_wins():
    result = decode("01000001 0000000x 0101")
    assert result.index == 1
    assert result.kind is ErrorKind.INVALID_TOKEN_CHARACTER


def test_token_to_byte():
    assert token_to_byte("11111111") == ByteValue(255)
    assert token_to_byte("00000000") == ByteValue(0)
    assert token_to_byte("+1111111") == TokenError(ErrorKind.INVALID_TOKEN_CHARACTER)
    assert token_to_byte("1111_111") == TokenError(ErrorKind.INVALID_TOKEN_CHARACTER)
    assert token_to_byte("") == TokenError(ErrorKind.INVALID_TOKEN_LENGTH)


def test_split_tokens_only_ascii_whitespace():
    assert split_tokens("a\x0bb\x0cc") == ["a", "b", "c"]
    # non-breaking space is part of a token, not a separator
    assert split_tokens(b"0100\xa00001") == ["0100\xa00001"]


def test_result_tag_follows_variant():
    assert Decoded(b"x").ok
    assert not DecodeFailure(ErrorKind.INVALID_TOKEN_LENGTH, 0, "1").ok
    with pytest.raises(TypeError):
        Decoded(b"x", ok=False)


def test_failure_message_caps_long_tokens():
    result = decode("1" * 100)
    assert result.message == "token #1 '1111111111111111...': InvalidTokenLength (length 100)"


def test_failure_message_escapes_non_ascii():
    result = decode(b"0100000\xff")
    assert result.message == "token #1 '0100000\\xff': InvalidTokenCharacter"
