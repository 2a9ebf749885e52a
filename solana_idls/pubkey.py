"""
solana_idls/pubkey.py

32-byte account identifier with base58 text form.
"""
from dataclasses import dataclass
from typing import Union

import base58

# Solana pubkey (32 bytes, base58 encoded)
PUBKEY_LENGTH = 32


@dataclass(frozen=True)
class Pubkey:
    raw: bytes

    def __post_init__(self):
        if not isinstance(self.raw, (bytes, bytearray)):
            raise TypeError(f"Pubkey needs bytes, got {type(self.raw).__name__}")
        if len(self.raw) != PUBKEY_LENGTH:
            raise ValueError(f"Pubkey must be {PUBKEY_LENGTH} bytes, got {len(self.raw)}")
        object.__setattr__(self, "raw", bytes(self.raw))

    @classmethod
    def from_string(cls, text: str) -> "Pubkey":
        try:
            raw = base58.b58decode(text)
        except ValueError as e:
            raise ValueError(f"Invalid base58 pubkey {text!r}: {e}") from e
        return cls(raw)

    @classmethod
    def from_any(cls, value: Union["Pubkey", bytes, bytearray, str]) -> "Pubkey":
        if isinstance(value, Pubkey):
            return value
        if isinstance(value, str):
            return cls.from_string(value)
        return cls(value)

    @classmethod
    def default(cls) -> "Pubkey":
        """All-zero key, printed as 11111111111111111111111111111111."""
        return cls(bytes(PUBKEY_LENGTH))

    def __bytes__(self) -> bytes:
        return self.raw

    def __str__(self) -> str:
        return base58.b58encode(self.raw).decode("utf-8")

    def __repr__(self) -> str:
        return f"Pubkey({self})"
