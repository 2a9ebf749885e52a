import struct

import pytest

from solana_idls.errors import LengthMismatch, MissingAccount
from solana_idls.programs import pumpfun_amm
from solana_idls.pubkey import Pubkey

SYSTEM = "11111111111111111111111111111111"

SELL_EVENT_V2_HEX = (
    "e445a52e51cb9a1d3e2f370aa503dc2a4545656800000000af28f004000000003c07deae14000000af28f00400000000"
    "ca938dcb04000000af0bdef97f000000ee1ef9689423020007103a201500000014000000000000001b03d10a00000000"
    "0500000000000000c740b40200000000ec0c69151500000025ccb41215000000c40660072ddc79037ded460ba50e7db9"
    "38f85e3cffdee2a1a443e0a544331255bd1f448d9dae5b6c1de2d05b043b7de51c4f56eedda06a074cc97e3db2700bbf"
    "8556d31ff821ffe7f4b72a466984b85eb850c5e389e07ac038836ac8ef37a9921072df16318f56050eab0292c03aa99d"
    "531d627d4c5147d5d403a9f109c665a7608ccc1dfce961b43b779c191505a6e2d3bf45d5a4db4618ad76c82d61754535"
    "ac96cbb25e6d405dfc5b494cc53c574d9e2e9e513c0f1216f5108edf7f3c82ec00000000000000000000000000000000"
    "0000000000000000000000000000000005000000000000000000000000000000"
)
BUY_EVENT_V2_HEX = (
    "e445a52e51cb9a1d67f4521f2cf57777454565680000000068a95a0200000000fb2bd87a0a0000000000000000000000"
    "ebc54a1a1a0000005e34cefe7f000000021290537f23020045e90e120a000000140000000000000041f7270500000000"
    "0500000000000000d1fd49010000000086e036170a00000057de80180a000000c40660072ddc79037ded460ba50e7db9"
    "38f85e3cffdee2a1a443e0a544331255f771b015b5c0053e9f90450062b4af29076439be95be43461bacf21986db6c27"
    "b102664f7e7e0b85a6cd023a1af27c7fba5b3960e2730a11e5a9c25f014b72b874daca6974a5f667fd13d7c1edaa1a0e"
    "7105ee3e3691641ef09baaeee8c8b72d608ccc1dfce961b43b779c191505a6e2d3bf45d5a4db4618ad76c82d61754535"
    "ac96cbb25e6d405dfc5b494cc53c574d9e2e9e513c0f1216f5108edf7f3c82ec00000000000000000000000000000000"
    "0000000000000000000000000000000005000000000000000000000000000000"
)
CREATE_POOL_EVENT_V2_HEX = (
    "e445a52e51cb9a1db1310cd2a076a7749969656800000000000096c4e2ab2ea0b7c2f093a905be19705a6a761f8d4c31"
    "15cb43338a314f8ae05b069b8857feab8184fb687f634618c035dac439dc1aeb3b5598a0f00000000001915f49b31a96"
    "3278b23a8674bf218caeb2b0dfdc7c1c04c2623f9a742485535f09060024ca94270000000080c6a47e8d03000024ca94"
    "270000000080c6a47e8d03006400000000000000a5b67cbddb0b000041b67cbddb0b0000fec430179d65d3520de4fb25"
    "593a097803004bd24f9f7e44a1fc3b1cff3a82698e62656ca724fa17df29301afa7dbdef55588a2c09f270d1db5f8c99"
    "f5ce47b8643bc49a393fb897bf94f3c4a295b1be1dbf18752a2d84fd6f7bacbe66f63be840093a5ad265034d3e6bb2c7"
    "bffbae0478b359bca217afb634cd172d292c582726000000000000000000000000000000000000000000000000000000"
    "0000000000"
)
BUY_IX_HEX = "66063d1201daebea68a95a0200000000fb2bd87a0a000000"
SELL_IX_HEX = "33e685a4017f83adaf28f004000000003c07deae14000000"
CREATE_POOL_IX_HEX = (
    "e992d18ecf6840bc00000024ca94270000000080c6a47e8d030000000000000000000000000000000000000000000000"
    "00000000000000000000"
)


def test_sell_event_v2(registry):
    ev = registry.decode_event("pumpfun_amm", bytes.fromhex(SELL_EVENT_V2_HEX))
    assert ev.name == "SellEventV2"
    assert ev.timestamp == 1751467333
    assert ev.base_amount_in == 82847919
    assert ev.min_quote_amount_out == 88833132348
    assert ev.user_quote_token_reserves == 20594922442
    assert ev.pool_base_token_reserves == 549652925359
    assert ev.pool_quote_token_reserves == 602070276710126
    assert ev.quote_amount_out == 90734989319
    assert ev.lp_fee_basis_points == 20
    assert ev.lp_fee == 181469979
    assert ev.protocol_fee == 45367495
    assert ev.quote_amount_out_without_lp_fee == 90553519340
    assert ev.user_quote_amount_out == 90508151845
    assert str(ev.pool) == "ECCYiudtxv9UaqGT2bDijsxDSMbmpYBx3vZ4SYqrYfXA"
    assert str(ev.user) == "DjFi5c3ZtY8kRzU4sXDese83tU48nab2qqzCeeVtaJN2"
    assert str(ev.protocol_fee_recipient) == "7VtfL8fvgNfhz17qKRMjzQEXgbdpnHHHQRh54R9jP2RJ"
    assert str(ev.protocol_fee_recipient_token_account) == "CciVLGsXnAAPhP1BH7HKvHMoAC2Lu75embEe2D3CdsNK"
    assert str(ev.coin_creator) == SYSTEM
    assert ev.coin_creator_fee_basis_points == 5
    assert ev.coin_creator_fee == 0


def test_buy_event_v2(registry):
    ev = registry.decode_event("pumpfun_amm", bytes.fromhex(BUY_EVENT_V2_HEX))
    assert ev.name == "BuyEventV2"
    assert ev.base_amount_out == 39496040
    assert ev.max_quote_amount_in == 45010660347
    assert ev.user_base_token_reserves == 0
    assert ev.quote_amount_in == 43252640069
    assert ev.quote_amount_in_with_lp_fee == 43339145350
    assert ev.user_quote_amount_in == 43360771671
    assert str(ev.user) == "HevFMPmoWJE6WCDDpyC2ZWtyvFbkrLkEGPofYNbw3xjx"
    assert str(ev.user_base_token_account) == "CuyHWxRHHhDehLoCJD53CA9QKp68rHTG2VyyNdLfcrCX"
    assert ev.coin_creator == Pubkey.default()


def test_buy_event_v1_without_creator_fields(registry):
    data = bytes.fromhex(BUY_EVENT_V2_HEX)[:-48]
    ev = registry.decode_event("pumpfun_amm", data)
    assert ev.name == "BuyEventV1"
    assert "coin_creator" not in ev.fields
    assert ev.base_amount_out == 39496040


def test_truncated_event_is_length_mismatch(registry):
    data = bytes.fromhex(SELL_EVENT_V2_HEX)[:-1]
    with pytest.raises(LengthMismatch) as ei:
        registry.decode_event("pumpfun_amm", data)
    assert ei.value.expected == 352
    assert ei.value.got == 351


def test_create_pool_event_v2(registry):
    ev = registry.decode_event("pumpfun_amm", bytes.fromhex(CREATE_POOL_EVENT_V2_HEX))
    assert ev.name == "CreatePoolEventV2"
    assert ev.index == 0
    assert str(ev.creator) == "B9YHJjB71MuL8aPjFtWc9kpaKH4KJD4CFgovEh5xaAVg"
    assert str(ev.base_mint) == "So11111111111111111111111111111111111111112"
    assert str(ev.quote_mint) == "AnUPaVnGeVbAPfBqHDmP7uZ6rQu1BdJtBveftnHEpump"
    assert ev.base_mint_decimals == 9
    assert ev.quote_mint_decimals == 6
    assert ev.base_amount_in == 170000000000
    assert ev.quote_amount_in == 1000000000000000
    assert ev.pool_base_amount == 170000000000
    assert ev.minimum_liquidity == 100
    assert ev.initial_liquidity == 13038404810405
    assert ev.lp_token_amount_out == 13038404810305
    assert ev.pool_bump == 254
    assert str(ev.pool) == "ECqSdAvSDuwBHDsfChLqkyHEbah6TH3weL5JZ4F7zGMb"
    assert str(ev.lp_mint) == "7d6eyGMqwHp6wUnTQsihqUKhynbRsrrmKXkviyDL9U67"
    assert str(ev.user_base_token_account) == "52JvxjCzUe3JGKr7ZcLShCLQerhCrsjmQvikmEsn3uFd"
    assert str(ev.user_quote_token_account) == "d2H9zsYnvBBJnqSYcCTuwYx6EJarNRb1F3bK6b7sjt1"
    assert str(ev.coin_creator) == SYSTEM


def test_buy_and_sell_instructions(registry):
    buy = registry.decode_payload("pumpfun_amm", bytes.fromhex(BUY_IX_HEX))
    assert buy.name == "Buy"
    assert buy.base_amount_out == 39496040
    assert buy.max_quote_amount_in == 45010660347

    sell = registry.decode_payload("pumpfun_amm", bytes.fromhex(SELL_IX_HEX))
    assert sell.name == "Sell"
    assert sell.base_amount_in == 82847919
    assert sell.min_quote_amount_out == 88833132348


def test_create_pool_instruction(registry):
    out = registry.decode_payload("pumpfun_amm", bytes.fromhex(CREATE_POOL_IX_HEX))
    assert out.name == "CreatePool"
    assert out.index == 0
    assert out.base_amount_in == 170000000000
    assert out.quote_amount_in == 1000000000000000
    assert str(out.coin_creator) == SYSTEM


def test_swap_accounts_with_and_without_creator_vault(registry, keys):
    data = bytes.fromhex(BUY_IX_HEX)
    legacy = registry.decode_instruction("pumpfun_amm", data, accounts=keys[:17])
    assert legacy.accounts.pool == keys[0]
    assert legacy.accounts.program == keys[16]
    assert legacy.accounts.coin_creator_vault_ata is None

    current = registry.decode_instruction("pumpfun_amm", data, accounts=keys[:19])
    assert current.accounts.coin_creator_vault_authority == keys[18]

    with pytest.raises(MissingAccount) as ei:
        registry.decode_instruction("pumpfun_amm", data, accounts=keys[:16])
    assert ei.value.name == "program"
    assert ei.value.index == 16


def test_disable_instruction_bools(registry):
    data = pumpfun_amm.DISABLE + bytes([1, 0, 0, 1, 0])
    out = registry.decode_payload("pumpfun_amm", data)
    assert out.disable_create_pool is True
    assert out.disable_deposit is False
    assert out.disable_buy is True


def test_create_config_fee_recipients(registry, keys):
    data = pumpfun_amm.CREATE_CONFIG + struct.pack("<QQ", 20, 5) + b"".join(bytes(k) for k in keys[:8])
    out = registry.decode_payload("pumpfun_amm", data)
    assert out.lp_fee_basis_points == 20
    assert out.protocol_fee_recipients == keys[:8]


def test_repeated_decodes_are_identical(registry, keys):
    data = bytes.fromhex(SELL_EVENT_V2_HEX)
    first = registry.decode_event("pumpfun_amm", data)
    second = registry.decode_event("pumpfun_amm", data)
    assert first == second
    assert first.to_dict() == second.to_dict()

    ix = bytes.fromhex(SELL_IX_HEX)
    first = registry.decode_instruction("pumpfun_amm", ix, accounts=keys[:19])
    second = registry.decode_instruction("pumpfun_amm", ix, accounts=keys[:19])
    assert first == second
    assert first.to_dict() == second.to_dict()
    assert first.accounts.coin_creator_vault_authority == keys[18]
