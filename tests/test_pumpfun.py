import struct

import pytest

from solana_idls.dispatch import ANCHOR_EVENT_TAG
from solana_idls.errors import LengthMismatch, MissingAccount, Unrecognized
from solana_idls.programs import pumpfun
from solana_idls.pubkey import Pubkey

# solscan tx sK44CDg4qzi9jvTgA32dCTNh6Y3CgXki2kj9XtpaXRr83BipzpWPjnENzJR3TjLegAfDfPDG5Z8GZDkbrXDQk3w
TRADE_EVENT_HEX = (
    "e445a52e51cb9a1dbddb7fd34ee661ee32e48e8b6ad77786c4e23fb007a1fb63f64412846ee10800244665850d8f918f"
    "ecd4eb020000000052ee26d37800000001ed09a7fd83eda97b39a03f1bed6c3629d4bf3bd2c4a26f26c90fccb41e3c61"
    "db26b2466800000000484fe4d70c0000002592f509be12020048a3c0db0500000025fae2bd2c140100e004c87ceb98fa"
    "5ce47f803806fd2c7945d29524959aec00ded97814f38f78465f00000000000000bb1a0700000000005bc9df4aa79d20"
    "a724add3dae08e33ed59fb304bf1033a7f0e50777f5b87f86c0500000000000000b95f000000000000"
)


def _trade_v0(**kw) -> bytes:
    return (
        bytes(Pubkey.default())
        + struct.pack("<QQ?", kw.get("sol", 1), kw.get("token", 2), kw.get("is_buy", True))
        + bytes(32)
        + struct.pack("<qQQ", 1_700_000_000, 3, 4)
    )


def test_trade_event_with_creator_fee(registry):
    ev = registry.decode_event("pumpfun", bytes.fromhex(TRADE_EVENT_HEX))
    assert ev.name == "TradeEventV2"
    assert str(ev.mint) == "4RfXFyiDSGvKukvz5yYFZ6qAD8MrvXrcvyW11xSfpump"
    assert ev.sol_amount == 49_009_900
    assert ev.token_amount == 518_938_619_474
    assert ev.is_buy is True
    assert str(ev.user) == "GxJAXx1tgzUYLBMW47PZcibHJKh4nHcrrnJry1FQ9KSz"
    assert ev.timestamp == 1_749_463_590
    assert ev.virtual_sol_reserves == 55_161_671_496
    assert ev.virtual_token_reserves == 583_557_373_596_197
    assert ev.real_sol_reserves == 25_161_671_496
    assert ev.real_token_reserves == 303_657_373_596_197
    assert str(ev.fee_recipient) == "G5UZAVbAf46s7cKWoyKu8kYTip9DGTpbLZ2qa9Aq69dP"
    assert ev.fee_basis_points == 95
    assert ev.fee == 465_595
    assert str(ev.creator) == "7BJdxxFVo7jJXztNWjQfjdHQafXFJJxRa7AuMtXjowGX"
    assert ev.creator_fee_basis_points == 5
    assert ev.creator_fee == 24_505


def test_trade_event_versions_by_length(registry):
    v0 = _trade_v0(sol=10)
    v1 = v0 + struct.pack("<QQ", 5, 6)
    assert registry.decode_event("pumpfun", ANCHOR_EVENT_TAG + pumpfun.TRADE_EVENT + v0).name == "TradeEventV0"
    out = registry.decode_event("pumpfun", ANCHOR_EVENT_TAG + pumpfun.TRADE_EVENT + v1)
    assert out.name == "TradeEventV1"
    assert out.sol_amount == 10
    assert out.real_token_reserves == 6


def test_trade_event_unknown_length(registry):
    with pytest.raises(LengthMismatch) as ei:
        registry.decode_event("pumpfun", ANCHOR_EVENT_TAG + pumpfun.TRADE_EVENT + bytes(200))
    assert ei.value.expected == 250
    assert ei.value.got == 200


def test_events_require_self_cpi_tag(registry):
    data = bytes(8) + pumpfun.TRADE_EVENT + _trade_v0()
    with pytest.raises(Unrecognized) as ei:
        registry.decode_event("pumpfun", data)
    assert len(ei.value.discriminator) == 16


def test_create_instruction_strings(registry, keys):
    def s(text):
        return struct.pack("<I", len(text)) + text.encode()

    data = pumpfun.CREATE + s("Doge") + s("DOGE") + s("https://x/y.json") + bytes(keys[0])
    out = registry.decode_instruction("pumpfun", data, accounts=keys[:14])
    assert out.payload.name == "Create"
    assert out.payload.fields["name"] == "Doge"
    assert out.payload.symbol == "DOGE"
    assert out.payload.creator == keys[0]
    assert out.accounts.mint == keys[0]
    assert out.accounts.program == keys[13]


def test_buy_instruction_accounts(registry, keys):
    data = pumpfun.BUY + struct.pack("<QQ", 1_000, 2_000)
    out = registry.decode_instruction("pumpfun", data, accounts=keys[:12])
    assert out.payload.amount == 1_000
    assert out.payload.max_sol_cost == 2_000
    assert out.accounts.user == keys[6]
    assert out.accounts.creator_vault == keys[9]

    with pytest.raises(MissingAccount) as ei:
        registry.decode_instruction("pumpfun", data, accounts=keys[:7])
    assert ei.value.name == "system_program"


def test_sell_and_buy_share_layout_but_not_account_order(registry, keys):
    data = pumpfun.SELL + struct.pack("<QQ", 7, 8)
    out = registry.decode_instruction("pumpfun", data, accounts=keys[:12])
    assert out.payload.min_sol_output == 8
    assert out.accounts.creator_vault == keys[8]
    assert out.accounts.token_program == keys[9]
