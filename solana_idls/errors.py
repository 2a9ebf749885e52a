"""
solana_idls/errors.py

Decode error taxonomy.

Every failure raised by the decoding engine is a DecodeError subclass, so an
indexing pipeline can catch the whole family with one except clause and still
branch on the concrete kind.
"""
from typing import Optional


class DecodeError(ValueError):
    """Base class for every decode failure."""


class TooShort(DecodeError):
    """Buffer ended before the requested number of bytes."""

    def __init__(self, observed_len: int, needed: Optional[int] = None):
        self.observed_len = observed_len
        self.needed = needed
        if needed is None:
            msg = f"payload too short: {observed_len} bytes"
        else:
            msg = f"payload too short: {observed_len} bytes, need {needed}"
        super().__init__(msg)


class InvalidTag(DecodeError):
    """Option presence byte or enum variant tag outside its valid set."""

    def __init__(self, kind: str, tag: int):
        self.kind = kind
        self.tag = tag
        super().__init__(f"invalid {kind} tag: {tag}")


class LengthMismatch(DecodeError):
    """Declared fixed payload length (or sequence length) exceeds available bytes."""

    def __init__(self, expected: int, got: int):
        self.expected = expected
        self.got = got
        super().__init__(f"invalid payload length: expected {expected} bytes, got {got}")


class Unrecognized(DecodeError):
    """No schema entry matches the discriminator."""

    def __init__(self, discriminator: bytes, program: Optional[str] = None):
        self.discriminator = bytes(discriminator)
        self.program = program
        where = f" for {program}" if program else ""
        super().__init__(f"unrecognized discriminator{where}: {self.discriminator.hex()}")


class MissingAccount(DecodeError):
    """Required account slot absent from the supplied account list."""

    def __init__(self, name: str, index: int):
        self.name = name
        self.index = index
        super().__init__(f"missing account {name!r} at index {index}")


class InvalidAccountKey(DecodeError):
    """Account reference present but not a 32-byte identifier."""

    def __init__(self, name: str, index: int, reason: str):
        self.name = name
        self.index = index
        self.reason = reason
        super().__init__(f"invalid account {name!r} at index {index}: {reason}")


class InvalidString(DecodeError):
    """Length-prefixed string whose bytes are not valid UTF-8."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"invalid utf-8 string: {reason}")
