import struct

import pytest

from solana_idls.dispatch import ANCHOR_EVENT_TAG
from solana_idls.errors import InvalidTag, MissingAccount
from solana_idls.programs import bonkswap


def _swap_payload(delta_in=1, price_limit=2, x_to_y=True) -> bytes:
    return struct.pack("<Q", delta_in) + price_limit.to_bytes(16, "little") + struct.pack("<?", x_to_y)


def test_swap_instruction(registry):
    out = registry.decode_payload("bonkswap", bonkswap.SWAP + _swap_payload())
    assert out.name == "Swap"
    assert out.delta_in == {"v": 1}
    assert out.price_limit == {"v": 2}
    assert out.x_to_y is True


def test_swap_instruction_bad_bool(registry):
    data = bonkswap.SWAP + _swap_payload()[:-1] + b"\x02"
    with pytest.raises(InvalidTag):
        registry.decode_payload("bonkswap", data)


def test_swap_event_uses_separate_table(registry):
    out = registry.decode_event("bonkswap", ANCHOR_EVENT_TAG + bonkswap.SWAP_EVENT + _swap_payload(7, 2**80, False))
    assert out.name == "SwapEvent"
    assert out.delta_in == 7
    assert out.price_limit == 2**80
    assert out.x_to_y is False


def test_swap_accounts_by_position(registry, keys):
    data = bonkswap.SWAP + _swap_payload()
    out = registry.decode_instruction("bonkswap", data, accounts=keys[:17])
    assert out.accounts.swapper == keys[8]
    assert out.accounts.referrer == keys[11]
    assert out.accounts.rent == keys[16]


def test_swap_accounts_missing_tail(registry, keys):
    with pytest.raises(MissingAccount) as ei:
        registry.decode_instruction("bonkswap", bonkswap.SWAP + _swap_payload(), accounts=keys[:12])
    assert ei.value.name == "program_authority"
    assert ei.value.index == 12


def test_create_pool_fixed_point_fees(registry, keys):
    data = (
        bonkswap.CREATE_POOL
        + b"".join(n.to_bytes(16, "little") for n in (10, 20, 30, 40))
        + struct.pack("<QQB", 1_000, 2_000, 254)
    )
    out = registry.decode_instruction("bonkswap", data, accounts=keys[:14])
    assert out.payload.lp_fee == {"v": 10}
    assert out.payload.mercanti_fee == {"v": 40}
    assert out.payload.initial_token_y == {"v": 2_000}
    assert out.payload.bump == 254
    assert out.accounts.project_owner == keys[9]


def test_every_instruction_has_accounts(registry):
    table = registry.get("bonkswap").instructions
    assert len(table) == 19
    assert all(entry.accounts is not None for entry in table)
