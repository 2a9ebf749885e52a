import pytest

from solana_idls.errors import MissingAccount, TooShort
from solana_idls.programs import jupiter_v6
from solana_idls.pubkey import Pubkey

WSOL = "So11111111111111111111111111111111111111112"

SWAP_EVENT_HEX = (
    "e445a52e51cb9a1d40c6cde8260871e20c14defc825ec67694250818bb654065f4298d3156d571b4d4f8090c18e9a863"
    "fd51dc4c913e7ca8e73cd3cbb45769ac41aaade3696540dcf482a5fe57383a8f28cac2eb06000000069b8857feab8184"
    "fb687f634618c035dac439dc1aeb3b5598a0f000000000019bdc520300000000"
)
FEE_EVENT_HEX = (
    "e445a52e51cb9a1d494f4e7fb8d50ddc71337d91df2be75ff1c1ce88c1f5f0293ce7ee4562f6ee3e045fa07faad311dd"
    "069b8857feab8184fb687f634618c035dac439dc1aeb3b5598a0f0000000000108b5000000000000"
)


def test_swap_event(registry):
    ev = registry.decode_event("jupiter_v6", bytes.fromhex(SWAP_EVENT_HEX))
    assert ev.name == "SwapEvent"
    assert ev.fields == {
        "amm": Pubkey.from_string("pAMMBay6oceH9fJKBRHGP5D4bD4sWpmSwMn52FMfXEA"),
        "input_mint": Pubkey.from_string("J3rYdme789g1zAysfbH9oP4zjagvfVM2PX7KJgFDpump"),
        "input_amount": 29725215272,
        "output_mint": Pubkey.from_string(WSOL),
        "output_amount": 55762075,
    }


def test_fee_event(registry):
    ev = registry.decode_event("jupiter_v6", bytes.fromhex(FEE_EVENT_HEX))
    assert ev.name == "FeeEvent"
    assert str(ev.account) == "8ctcHN52LY21FEipCjr1MVWtoZa1irJQTPyAaTj72h7S"
    assert str(ev.mint) == WSOL
    assert ev.amount == 46344


def test_fee_event_to_dict(registry):
    out = registry.decode_event("jupiter_v6", bytes.fromhex(FEE_EVENT_HEX)).to_dict()
    assert out["discriminator"] == jupiter_v6.FEE_EVENT.hex()
    assert out["fields"]["amount"] == 46344
    assert out["fields"]["mint"] == WSOL


def test_route_keeps_plan_as_raw_bytes(registry):
    plan = bytes.fromhex("0102030405060708090a")
    out = registry.decode_payload("jupiter_v6", jupiter_v6.ROUTE + plan)
    assert out.name == "Route"
    assert out.data == plan


def test_shared_accounts_route_reads_id(registry):
    out = registry.decode_payload("jupiter_v6", jupiter_v6.SHARED_ACCOUNTS_ROUTE + b"\x03\xaa\xbb")
    assert out.id == 3
    assert out.data == b"\xaa\xbb"


def test_shared_accounts_route_without_id(registry):
    with pytest.raises(TooShort):
        registry.decode_payload("jupiter_v6", jupiter_v6.SHARED_ACCOUNTS_ROUTE)


def test_route_accounts_with_optional_slots(registry, keys):
    out = registry.decode_instruction("jupiter_v6", jupiter_v6.ROUTE, accounts=keys[:9])
    assert out.accounts.destination_token_account == keys[4]
    assert out.accounts.platform_fee_account == keys[6]
    assert out.accounts.program == keys[8]


def test_route_missing_program_account(registry, keys):
    with pytest.raises(MissingAccount) as ei:
        registry.decode_instruction("jupiter_v6", jupiter_v6.ROUTE, accounts=keys[:8])
    assert ei.value.name == "program"
    assert ei.value.index == 8


def test_shared_route_with_token_ledger_accounts(registry, keys):
    data = jupiter_v6.SHARED_ACCOUNTS_ROUTE_WITH_TOKEN_LEDGER + b"\x00"
    out = registry.decode_instruction("jupiter_v6", data, accounts=keys[:14])
    assert out.accounts.token_2022_program == keys[10]
    assert out.accounts.token_ledger == keys[11]
    assert out.accounts.event_authority == keys[12]
    assert out.accounts.program == keys[13]


def test_close_token(registry):
    out = registry.decode_payload("jupiter_v6", jupiter_v6.CLOSE_TOKEN + b"\x02\x01")
    assert out.fields == {"id": 2, "burn_all": True}
