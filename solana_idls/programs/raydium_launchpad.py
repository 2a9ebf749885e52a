"""
solana_idls/programs/raydium_launchpad.py

Raydium Launchpad (bonding curve) program: trade instructions and events.

TradeEvent added creator_fee and exact_in after launch; both layouts share a
discriminator and are told apart by payload length (130 / 139 bytes).
"""
from ..codec import BOOL, PUBKEY, STRING, U8, U64, Enum, Struct
from ..dispatch import DiscriminatorLayout
from ..payload import PayloadDecoder
from ..registry import OnUnrecognized, ProgramSchema, SchemaTable, event, instruction, versioned

PROGRAM_ID = "LanMV9sAd7wArD4vJFi2qDdfnVhFxYSUg6eADduJ3uj"

BUY_EXACT_IN = bytes([250, 234, 13, 123, 213, 156, 19, 236])
BUY_EXACT_OUT = bytes([24, 211, 116, 40, 105, 3, 153, 56])
SELL_EXACT_IN = bytes.fromhex("9527de9bd37c981a")
SELL_EXACT_OUT = bytes([95, 200, 71, 34, 8, 9, 11, 166])

CLAIM_VESTED_EVENT = bytes([21, 194, 114, 87, 120, 211, 226, 32])
CREATE_VESTING_EVENT = bytes([201, 216, 28, 169, 227, 76, 208, 95])
POOL_CREATE_EVENT = bytes([35, 19, 27, 213, 21, 36, 194, 123])
TRADE_EVENT = bytes.fromhex("bddb7fd34ee661ee")

TRADE_ACCOUNTS = [
    "payer",
    "authority",
    "global_config",
    "platform_config",
    "pool_state",
    "user_base_token",
    "user_quote_token",
    "base_vault",
    "quote_vault",
    "base_token_mint",
    "quote_token_mint",
    "base_token_program",
    "quote_token_program",
    "event_authority",
    "program",
]

MINT_PARAMS = Struct("MintParams", [
    ("decimals", U8),
    ("name", STRING),
    ("symbol", STRING),
    ("uri", STRING),
])

CONSTANT_CURVE = Struct("ConstantCurve", [
    ("supply", U64),
    ("total_base_sell", U64),
    ("total_quote_fund_raising", U64),
    ("migrate_type", U8),
])
FIXED_CURVE = Struct("FixedCurve", [
    ("supply", U64),
    ("total_quote_fund_raising", U64),
    ("migrate_type", U8),
])
LINEAR_CURVE = Struct("LinearCurve", [
    ("supply", U64),
    ("total_quote_fund_raising", U64),
    ("migrate_type", U8),
])

CURVE_PARAMS = Enum("CurveParams", [
    ("Constant", Struct("Constant", [("data", CONSTANT_CURVE)])),
    ("Fixed", Struct("Fixed", [("data", FIXED_CURVE)])),
    ("Linear", Struct("Linear", [("data", LINEAR_CURVE)])),
])

VESTING_PARAMS = Struct("VestingParams", [
    ("total_locked_amount", U64),
    ("cliff_period", U64),
    ("unlock_period", U64),
])

AMM_CREATOR_FEE_ON = Enum("AmmCreatorFeeOn", [("QuoteToken", None), ("BothToken", None)])
TRADE_DIRECTION = Enum("TradeDirection", [("Buy", None), ("Sell", None)])
POOL_STATUS = Enum("PoolStatus", [("Fund", None), ("Migrate", None), ("Trade", None)])

_TRADE_HEAD = [
    ("pool_state", PUBKEY),
    ("total_base_sell", U64),
    ("virtual_base", U64),
    ("virtual_quote", U64),
    ("real_base_before", U64),
    ("real_quote_before", U64),
    ("real_base_after", U64),
    ("real_quote_after", U64),
    ("amount_in", U64),
    ("amount_out", U64),
    ("protocol_fee", U64),
    ("platform_fee", U64),
]

TRADE_EVENT_V1_FIELDS = _TRADE_HEAD + [
    ("share_fee", U64),
    ("trade_direction", TRADE_DIRECTION),
    ("pool_status", POOL_STATUS),
]
TRADE_EVENT_V2_FIELDS = _TRADE_HEAD + [
    ("creator_fee", U64),
    ("share_fee", U64),
    ("trade_direction", TRADE_DIRECTION),
    ("pool_status", POOL_STATUS),
    ("exact_in", BOOL),
]

_EXACT_IN = [("amount_in", U64), ("minimum_amount_out", U64), ("share_fee_rate", U64)]
_EXACT_OUT = [("amount_out", U64), ("maximum_amount_in", U64), ("share_fee_rate", U64)]


def schema() -> ProgramSchema:
    instructions = SchemaTable(
        "raydium_launchpad.instructions",
        DiscriminatorLayout.ANCHOR,
        [
            instruction("BuyExactIn", BUY_EXACT_IN, _EXACT_IN, accounts=TRADE_ACCOUNTS),
            instruction("BuyExactOut", BUY_EXACT_OUT, _EXACT_OUT, accounts=TRADE_ACCOUNTS),
            instruction("SellExactIn", SELL_EXACT_IN, _EXACT_IN, accounts=TRADE_ACCOUNTS),
            instruction("SellExactOut", SELL_EXACT_OUT, _EXACT_OUT, accounts=TRADE_ACCOUNTS),
        ],
        on_unrecognized=OnUnrecognized.RETURN_ERROR,
    )

    vesting = [("pool_state", PUBKEY), ("beneficiary", PUBKEY)]
    events = SchemaTable(
        "raydium_launchpad.events",
        DiscriminatorLayout.ANCHOR_EVENT,
        [
            event("ClaimVestedEvent", CLAIM_VESTED_EVENT, vesting + [("claim_amount", U64)]),
            event("CreateVestingEvent", CREATE_VESTING_EVENT, vesting + [("share_amount", U64)]),
            event("PoolCreateEvent", POOL_CREATE_EVENT, [
                ("pool_state", PUBKEY),
                ("creator", PUBKEY),
                ("config", PUBKEY),
                ("base_mint_param", MINT_PARAMS),
                ("curve_param", CURVE_PARAMS),
                ("vesting_param", VESTING_PARAMS),
                ("amm_fee_on", AMM_CREATOR_FEE_ON),
            ]),
            versioned(
                "TradeEvent", TRADE_EVENT,
                PayloadDecoder("TradeEventV1", TRADE_EVENT_V1_FIELDS),
                PayloadDecoder("TradeEventV2", TRADE_EVENT_V2_FIELDS),
            ),
        ],
        on_unrecognized=OnUnrecognized.RETURN_ERROR,
    )
    return ProgramSchema("raydium_launchpad", PROGRAM_ID, instructions, events)
