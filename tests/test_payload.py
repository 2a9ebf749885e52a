import struct

import pytest

from solana_idls.codec import PUBKEY, STRING, U8, U64
from solana_idls.errors import LengthMismatch, TooShort
from solana_idls.payload import DecodedPayload, PayloadDecoder, UnknownPayload
from solana_idls.pubkey import Pubkey

SWAP_FIELDS = [("amount_in", U64), ("minimum_amount_out", U64)]


def test_decode_fields_in_order():
    dec = PayloadDecoder("Buy", SWAP_FIELDS)
    out = dec.decode(struct.pack("<QQ", 10, 20), b"\x01" * 8)
    assert isinstance(out, DecodedPayload)
    assert out.name == "Buy"
    assert out.amount_in == 10
    assert out["minimum_amount_out"] == 20
    assert out.discriminator == b"\x01" * 8
    assert out.is_unknown is False


def test_trailing_bytes_are_tolerated():
    dec = PayloadDecoder("Buy", SWAP_FIELDS)
    out = dec.decode(struct.pack("<QQ", 1, 2) + b"\xde\xad")
    assert out.fields == {"amount_in": 1, "minimum_amount_out": 2}


def test_short_payload_raises_too_short():
    with pytest.raises(TooShort):
        PayloadDecoder("Buy", SWAP_FIELDS).decode(struct.pack("<Q", 1))


def test_exact_length_truncates_legacy_payloads():
    dec = PayloadDecoder("SwapBaseIn", SWAP_FIELDS, exact_length=16)
    out = dec.decode(struct.pack("<QQ", 5, 6) + bytes(9))
    assert out.amount_in == 5
    assert out.minimum_amount_out == 6


def test_exact_length_rejects_short_payload():
    dec = PayloadDecoder("SwapBaseIn", SWAP_FIELDS, exact_length=16)
    with pytest.raises(LengthMismatch) as ei:
        dec.decode(bytes(15))
    assert ei.value.expected == 16
    assert ei.value.got == 15


def test_exact_length_smaller_than_fields_is_rejected():
    with pytest.raises(ValueError):
        PayloadDecoder("Bad", SWAP_FIELDS, exact_length=8)


def test_sizes():
    assert PayloadDecoder("Buy", SWAP_FIELDS).fixed_size == 16
    assert PayloadDecoder("Named", [("tag", U8), ("name", STRING)]).fixed_size is None
    assert PayloadDecoder("Legacy", SWAP_FIELDS, exact_length=16).min_size == 16


def test_empty_payload_entry():
    out = PayloadDecoder("WithdrawPnl").decode(b"")
    assert out.fields == {}


def test_field_called_name_is_read_through_fields():
    dec = PayloadDecoder("Create", [("name", STRING)])
    out = dec.decode(struct.pack("<I", 3) + b"abc")
    assert out.name == "Create"
    assert out.fields["name"] == "abc"


def test_missing_attribute_raises_attribute_error():
    out = PayloadDecoder("Buy", SWAP_FIELDS).decode(bytes(16))
    with pytest.raises(AttributeError):
        out.nonexistent


def test_to_dict_is_json_friendly():
    dec = PayloadDecoder("Ev", [("who", PUBKEY), ("amount", U64)])
    out = dec.decode(bytes(32) + struct.pack("<Q", 3), b"\xaa" * 8)
    assert out.to_dict() == {
        "name": "Ev",
        "discriminator": "aa" * 8,
        "fields": {"who": str(Pubkey.default()), "amount": 3},
    }


def test_unknown_payload():
    u = UnknownPayload(b"\x01\x02", b"\x03")
    assert u.is_unknown is True
    assert u.to_dict() == {"name": "Unknown", "discriminator": "0102", "payload": "03"}
