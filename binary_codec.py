"""
Text <-> binary token codec.

Bytes are written as space-separated 8-bit tokens of '0'/'1', most
significant bit first. Decoding accepts any whitespace run between tokens
and rejects the whole input on the first malformed token.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Iterable, Union

import numpy as np

TOKEN_WIDTH = 8
SEPARATOR = " "
# same set as C isspace() in the default locale
WHITESPACE = " \t\n\r\f\v"
MESSAGE_TOKEN_CHARS = 16

_TOKEN_PATTERN = re.compile(r"[^ \t\n\r\f\v]+")


class ErrorKind(Enum):
    """Why a token was rejected"""
    INVALID_TOKEN_LENGTH = "InvalidTokenLength"
    INVALID_TOKEN_CHARACTER = "InvalidTokenCharacter"


@dataclass(frozen=True)
class ByteValue:
    """A token that decoded cleanly"""
    value: int


@dataclass(frozen=True)
class TokenError:
    """A token that failed validation"""
    kind: ErrorKind


TokenResult = Union[ByteValue, TokenError]


@dataclass(frozen=True)
class Decoded:
    """Successful decode: the complete payload"""
    payload: bytes
    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class DecodeFailure:
    """Failed decode: the first bad token and why it was rejected"""
    kind: ErrorKind
    index: int
    token: str
    ok: ClassVar[bool] = False

    @property
    def message(self):
        # tokens can be whole files when the input has no whitespace
        shown = self.token
        if len(shown) > MESSAGE_TOKEN_CHARS:
            shown = shown[:MESSAGE_TOKEN_CHARS] + "..."
        text = f"token #{self.index + 1} {ascii(shown)}: {self.kind.value}"
        if self.kind is ErrorKind.INVALID_TOKEN_LENGTH:
            text += f" (length {len(self.token)})"
        return text


DecodeResult = Union[Decoded, DecodeFailure]


def encode(payload: Union[bytes, bytearray, Iterable[int]]) -> str:
    """Convert raw bytes to space-separated binary tokens."""
    data = np.frombuffer(bytes(payload), dtype=np.uint8)
    if data.size == 0:
        return ""

    # one row per byte: 8 digit characters followed by the separator
    bits = np.unpackbits(data).reshape(-1, TOKEN_WIDTH)
    rows = np.full((data.size, TOKEN_WIDTH + 1), ord(SEPARATOR), dtype=np.uint8)
    rows[:, :TOKEN_WIDTH] = bits + ord("0")

    # drop the trailing separator after the final token
    return rows.tobytes()[:-1].decode("ascii")


def split_tokens(text):
    """Split encoded text on whitespace runs."""
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("latin-1")
    return _TOKEN_PATTERN.findall(text)


def token_to_byte(token):
    """Interpret one token; length is checked before characters."""
    if len(token) != TOKEN_WIDTH:
        return TokenError(ErrorKind.INVALID_TOKEN_LENGTH)
    if any(ch not in "01" for ch in token):
        return TokenError(ErrorKind.INVALID_TOKEN_CHARACTER)
    return ByteValue(int(token, 2))


def decode(text: Union[str, bytes]) -> DecodeResult:
    """
    Convert binary tokens back to raw bytes.

    All or nothing: the first invalid token fails the whole call and the
    bytes decoded before it are discarded.
    """
    values = bytearray()
    for index, token in enumerate(split_tokens(text)):
        result = token_to_byte(token)
        if isinstance(result, TokenError):
            return DecodeFailure(kind=result.kind, index=index, token=token)
        values.append(result.value)
    return Decoded(payload=bytes(values))
