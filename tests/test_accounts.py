import pytest

from solana_idls.accounts import AccountSchema, AccountSlot, NamedAccounts, resolve_accounts
from solana_idls.errors import InvalidAccountKey, MissingAccount
from solana_idls.pubkey import Pubkey

SCHEMA = AccountSchema.from_layout("SwapAccounts", ["pool", "user", "mint", "referrer?"])


def test_from_layout_marks_optional_slots():
    assert len(SCHEMA) == 4
    assert SCHEMA.required_count == 3
    assert SCHEMA.slots[3] == AccountSlot("referrer", 3, required=False)


def test_resolves_every_slot_by_position(keys):
    out = resolve_accounts(keys[:4], SCHEMA)
    assert out.pool == keys[0]
    assert out.user == keys[1]
    assert out["mint"] == keys[2]
    assert out.referrer == keys[3]


def test_optional_slot_past_the_end_is_none(keys):
    out = resolve_accounts(keys[:3], SCHEMA)
    assert out.referrer is None
    assert "referrer" in out


def test_missing_required_slot_reports_name_and_index(keys):
    with pytest.raises(MissingAccount) as ei:
        resolve_accounts(keys[:2], SCHEMA)
    assert ei.value.name == "mint"
    assert ei.value.index == 2


def test_first_missing_required_slot_is_reported():
    with pytest.raises(MissingAccount) as ei:
        resolve_accounts([], SCHEMA)
    assert ei.value.name == "pool"
    assert ei.value.index == 0


def test_extra_accounts_are_ignored(keys):
    out = resolve_accounts(keys[:10], SCHEMA)
    assert len(out.to_dict()) == 4


def test_accepts_base58_text_and_raw_bytes(keys):
    refs = [str(keys[0]), bytes(keys[1]), keys[2]]
    out = resolve_accounts(refs, SCHEMA)
    assert out.pool == keys[0]
    assert out.user == keys[1]


def test_malformed_key_raises_invalid_account_key(keys):
    with pytest.raises(InvalidAccountKey) as ei:
        resolve_accounts([keys[0], b"\x01\x02", keys[2]], SCHEMA)
    assert ei.value.name == "user"
    assert ei.value.index == 1


def test_malformed_optional_key_resolves_to_none(keys):
    out = resolve_accounts(keys[:3] + [b"short"], SCHEMA)
    assert out.referrer is None
    assert out.mint == keys[2]

    out = resolve_accounts(keys[:3] + ["0OIl"], SCHEMA)
    assert out.referrer is None


def test_to_dict_uses_base58(keys):
    out = resolve_accounts(keys[:3], SCHEMA)
    assert out.to_dict()["pool"] == str(keys[0])
    assert out.to_dict()["referrer"] is None


def test_schema_rejects_duplicate_names_and_positions():
    with pytest.raises(ValueError):
        AccountSchema("Bad", [AccountSlot("a", 0), AccountSlot("a", 1)])
    with pytest.raises(ValueError):
        AccountSchema("Bad", [AccountSlot("a", 0), AccountSlot("b", 0)])


def test_named_accounts_equality_and_unknown_name():
    a = NamedAccounts("X", {"pool": Pubkey.default()})
    b = NamedAccounts("X", {"pool": Pubkey.default()})
    assert a == b
    with pytest.raises(AttributeError):
        a.vault
