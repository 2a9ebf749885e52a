"""
solana_idls/codec.py

Borsh wire format: primitive decoders and composable field types.

All integers are little-endian and decoded at their declared width. Composite
types (Option, Vec, Array, Struct, Enum) are built from other field types, so a
whole instruction payload is described as data and decoded by one walk over a
ByteCursor.
"""
import struct
from dataclasses import dataclass
from typing import Any, Dict, List, Optional as Opt, Sequence, Tuple

from .cursor import ByteCursor
from .errors import InvalidString, InvalidTag, LengthMismatch
from .pubkey import PUBKEY_LENGTH, Pubkey


class FieldType:
    """
    One decodable wire type.

    ``min_size`` is the smallest number of bytes any value of this type can
    occupy; ``fixed_size`` is the exact size when every value has the same
    size, else None.
    """

    name: str = "?"
    min_size: int = 0
    fixed_size: Opt[int] = None

    def decode(self, cursor: ByteCursor) -> Any:
        raise NotImplementedError

    def __repr__(self) -> str:
        return self.name


class Scalar(FieldType):
    """Fixed-width integer backed by a struct format."""

    def __init__(self, name: str, fmt: str):
        self.name = name
        self._struct = struct.Struct("<" + fmt)
        self.min_size = self.fixed_size = self._struct.size

    def decode(self, cursor: ByteCursor) -> int:
        return self._struct.unpack(cursor.take(self._struct.size))[0]


class WideInt(FieldType):
    """128-bit integers (no struct format code for these)."""

    def __init__(self, name: str, size: int, signed: bool):
        self.name = name
        self.signed = signed
        self.min_size = self.fixed_size = size

    def decode(self, cursor: ByteCursor) -> int:
        return int.from_bytes(cursor.take(self.fixed_size), "little", signed=self.signed)


class BoolType(FieldType):
    name = "bool"
    min_size = fixed_size = 1

    def decode(self, cursor: ByteCursor) -> bool:
        b = cursor.take(1)[0]
        if b > 1:
            raise InvalidTag("bool", b)
        return b == 1


class PubkeyType(FieldType):
    name = "pubkey"
    min_size = fixed_size = PUBKEY_LENGTH

    def decode(self, cursor: ByteCursor) -> Pubkey:
        return Pubkey(cursor.take(PUBKEY_LENGTH))


class FixedBytes(FieldType):
    def __init__(self, width: int):
        if width < 0:
            raise ValueError(f"FixedBytes width must be >= 0, got {width}")
        self.name = f"[u8; {width}]"
        self.min_size = self.fixed_size = width

    def decode(self, cursor: ByteCursor) -> bytes:
        return cursor.take(self.fixed_size)


def _read_len(cursor: ByteCursor, item_size: int) -> int:
    n = _U32.unpack(cursor.take(4))[0]
    # zero-size items are charged one byte each
    needed = n * max(item_size, 1)
    if needed > cursor.remaining():
        raise LengthMismatch(needed, cursor.remaining())
    return n


class BytesType(FieldType):
    """u32 length prefix followed by raw bytes."""

    name = "bytes"
    min_size = 4

    def decode(self, cursor: ByteCursor) -> bytes:
        return cursor.take(_read_len(cursor, 1))


class StringType(FieldType):
    name = "string"
    min_size = 4

    def decode(self, cursor: ByteCursor) -> str:
        raw = cursor.take(_read_len(cursor, 1))
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidString(str(e)) from e


class RestType(FieldType):
    """Every remaining byte, uninterpreted (opaque route plans and the like)."""

    name = "rest"
    min_size = 0

    def decode(self, cursor: ByteCursor) -> bytes:
        return cursor.rest()


_U32 = struct.Struct("<I")
_TAG_STRUCTS = {1: struct.Struct("<B"), 2: struct.Struct("<H"), 4: struct.Struct("<I")}


def _read_tag(cursor: ByteCursor, width: int) -> int:
    return _TAG_STRUCTS[width].unpack(cursor.take(width))[0]


def _check_tag_width(width: int) -> None:
    if width not in _TAG_STRUCTS:
        raise ValueError(f"tag width must be one of {sorted(_TAG_STRUCTS)}, got {width}")


class Option(FieldType):
    """
    Presence tag (0 absent, 1 present) followed by the value when present.

    ``tag_width=4`` gives the COption layout used by SPL-style accounts.
    """

    def __init__(self, inner: FieldType, tag_width: int = 1):
        _check_tag_width(tag_width)
        self.inner = inner
        self.tag_width = tag_width
        self.name = f"Option<{inner.name}>" if tag_width == 1 else f"COption<{inner.name}>"
        self.min_size = tag_width

    def decode(self, cursor: ByteCursor) -> Any:
        tag = _read_tag(cursor, self.tag_width)
        if tag == 0:
            return None
        if tag == 1:
            return self.inner.decode(cursor)
        raise InvalidTag("option", tag)


class Vec(FieldType):
    """u32 length prefix followed by that many items."""

    def __init__(self, inner: FieldType):
        self.inner = inner
        self.name = f"Vec<{inner.name}>"
        self.min_size = 4

    def decode(self, cursor: ByteCursor) -> List[Any]:
        n = _read_len(cursor, self.inner.min_size)
        return [self.inner.decode(cursor) for _ in range(n)]


class Array(FieldType):
    def __init__(self, inner: FieldType, length: int):
        self.inner = inner
        self.length = length
        self.name = f"[{inner.name}; {length}]"
        self.min_size = inner.min_size * length
        self.fixed_size = None if inner.fixed_size is None else inner.fixed_size * length

    def decode(self, cursor: ByteCursor) -> List[Any]:
        return [self.inner.decode(cursor) for _ in range(self.length)]


Fields = Sequence[Tuple[str, FieldType]]


class Struct(FieldType):
    """Named fields decoded in declaration order into a dict."""

    def __init__(self, name: str, fields: Fields):
        names = [n for n, _ in fields]
        if len(set(names)) != len(names):
            raise ValueError(f"duplicate field name in struct {name}")
        self.name = name
        self.fields: Tuple[Tuple[str, FieldType], ...] = tuple(fields)
        self.min_size = sum(t.min_size for _, t in self.fields)
        sizes = [t.fixed_size for _, t in self.fields]
        self.fixed_size = None if None in sizes else sum(sizes)

    def decode(self, cursor: ByteCursor) -> Dict[str, Any]:
        return {n: t.decode(cursor) for n, t in self.fields}


class TupleType(FieldType):
    """Unnamed fields, decoded into a tuple."""

    def __init__(self, items: Sequence[FieldType]):
        self.items = tuple(items)
        self.name = "(" + ", ".join(t.name for t in self.items) + ")"
        self.min_size = sum(t.min_size for t in self.items)
        sizes = [t.fixed_size for t in self.items]
        self.fixed_size = None if None in sizes else sum(sizes)

    def decode(self, cursor: ByteCursor) -> tuple:
        return tuple(t.decode(cursor) for t in self.items)


@dataclass(frozen=True)
class EnumValue:
    variant: str
    index: int
    value: Any = None

    def to_dict(self) -> Dict[str, Any]:
        if self.value is None:
            return {"variant": self.variant}
        return {"variant": self.variant, "value": to_jsonable(self.value)}


class Enum(FieldType):
    """
    Tagged union: a variant index followed by that variant's data.

    ``variants`` is an ordered list of (name, field type or None for unit
    variants); the tag is the position in that list.
    """

    def __init__(self, name: str, variants: Sequence[Tuple[str, Opt[FieldType]]], tag_width: int = 1):
        _check_tag_width(tag_width)
        if not variants:
            raise ValueError(f"enum {name} needs at least one variant")
        self.name = name
        self.variants = tuple(variants)
        self.tag_width = tag_width
        sizes = [0 if t is None else t.min_size for _, t in self.variants]
        self.min_size = tag_width + min(sizes)
        fixed = {0 if t is None else t.fixed_size for _, t in self.variants}
        self.fixed_size = None if len(fixed) != 1 or None in fixed else tag_width + fixed.pop()

    def decode(self, cursor: ByteCursor) -> EnumValue:
        tag = _read_tag(cursor, self.tag_width)
        if tag >= len(self.variants):
            raise InvalidTag(f"{self.name} variant", tag)
        variant, inner = self.variants[tag]
        return EnumValue(variant, tag, None if inner is None else inner.decode(cursor))


U8 = Scalar("u8", "B")
U16 = Scalar("u16", "H")
U32 = Scalar("u32", "I")
U64 = Scalar("u64", "Q")
I8 = Scalar("i8", "b")
I16 = Scalar("i16", "h")
I32 = Scalar("i32", "i")
I64 = Scalar("i64", "q")
U128 = WideInt("u128", 16, signed=False)
I128 = WideInt("i128", 16, signed=True)
BOOL = BoolType()
PUBKEY = PubkeyType()
STRING = StringType()
BYTES = BytesType()
REST = RestType()

# IDL primitive name -> field type
PRIMITIVES: Dict[str, FieldType] = {
    "u8": U8, "u16": U16, "u32": U32, "u64": U64, "u128": U128,
    "i8": I8, "i16": I16, "i32": I32, "i64": I64, "i128": I128,
    "bool": BOOL,
    "pubkey": PUBKEY, "publicKey": PUBKEY,
    "string": STRING,
    "bytes": BYTES,
}


def decode_u8(cursor: ByteCursor) -> int:
    return U8.decode(cursor)


def decode_u16(cursor: ByteCursor) -> int:
    return U16.decode(cursor)


def decode_u32(cursor: ByteCursor) -> int:
    return U32.decode(cursor)


def decode_u64(cursor: ByteCursor) -> int:
    return U64.decode(cursor)


def decode_u128(cursor: ByteCursor) -> int:
    return U128.decode(cursor)


def decode_i32(cursor: ByteCursor) -> int:
    return I32.decode(cursor)


def decode_i64(cursor: ByteCursor) -> int:
    return I64.decode(cursor)


def decode_bool(cursor: ByteCursor) -> bool:
    return BOOL.decode(cursor)


def decode_pubkey(cursor: ByteCursor) -> Pubkey:
    return PUBKEY.decode(cursor)


def to_jsonable(value: Any) -> Any:
    """Decoded value -> plain JSON types (pubkeys base58, bytes hex)."""
    if isinstance(value, Pubkey):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    if isinstance(value, EnumValue):
        return value.to_dict()
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return value
