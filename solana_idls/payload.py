"""
solana_idls/payload.py

Payload decoders and decoded values.

A PayloadDecoder turns the bytes after the discriminator into a DecodedPayload
by walking its field list. Legacy instructions with a documented fixed length
are sliced to that length first; anything past the declared fields is left
uninspected.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from .codec import Fields, Struct, to_jsonable
from .cursor import ByteCursor
from .errors import LengthMismatch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodedPayload:
    """Recognized instruction or event."""

    name: str
    discriminator: bytes
    fields: Dict[str, Any] = field(default_factory=dict)

    is_unknown = False

    def __getattr__(self, item: str) -> Any:
        # Only reached for names that are not dataclass attributes.
        fields = self.__dict__.get("fields")
        if fields is not None and item in fields:
            return fields[item]
        raise AttributeError(f"{self.__dict__.get('name', 'payload')} has no field {item!r}")

    def __getitem__(self, item: str) -> Any:
        return self.fields[item]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "discriminator": self.discriminator.hex(),
            "fields": to_jsonable(self.fields),
        }


@dataclass(frozen=True)
class UnknownPayload:
    """Explicit outcome for a discriminator with no schema entry."""

    discriminator: bytes
    payload: bytes = b""
    name: str = "Unknown"

    is_unknown = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "discriminator": self.discriminator.hex(),
            "payload": self.payload.hex(),
        }


DecodedValue = Union[DecodedPayload, UnknownPayload]


class PayloadDecoder:
    """
    Decoder for one instruction or event kind.

    Args:
        name: Variant name reported on the decoded value
        fields: Ordered (name, FieldType) pairs
        exact_length: Canonical payload length for legacy formats; the payload
            is cut to this many bytes before decoding
    """

    def __init__(self, name: str, fields: Fields = (), exact_length: Optional[int] = None):
        self.name = name
        self.struct = Struct(name, fields)
        if exact_length is not None and exact_length < self.struct.min_size:
            raise ValueError(
                f"{name}: exact_length {exact_length} is smaller than its fields ({self.struct.min_size})"
            )
        self.exact_length = exact_length

    @property
    def fixed_size(self) -> Optional[int]:
        if self.exact_length is not None:
            return self.exact_length
        return self.struct.fixed_size

    @property
    def min_size(self) -> int:
        if self.exact_length is not None:
            return self.exact_length
        return self.struct.min_size

    def decode(self, payload: bytes, discriminator: bytes = b"") -> DecodedPayload:
        data = bytes(payload)
        if self.exact_length is not None:
            if len(data) < self.exact_length:
                raise LengthMismatch(self.exact_length, len(data))
            if len(data) > self.exact_length:
                logger.debug(
                    f"[payload] {self.name}: ignoring {len(data) - self.exact_length} bytes "
                    f"past the canonical {self.exact_length}"
                )
            data = data[:self.exact_length]

        cursor = ByteCursor(data)
        values = self.struct.decode(cursor)
        if cursor.remaining():
            logger.debug(f"[payload] {self.name}: {cursor.remaining()} trailing bytes not inspected")
        return DecodedPayload(self.name, bytes(discriminator), values)

    def __repr__(self) -> str:
        return f"PayloadDecoder({self.name!r}, fields={len(self.struct.fields)})"
