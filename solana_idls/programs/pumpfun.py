"""
solana_idls/programs/pumpfun.py

Pump.fun bonding curve program: instructions and self-CPI events.

TradeEvent grew several times without changing its discriminator; the version
is picked by payload length (105 / 121 / 217 / 250 bytes).
"""
from ..codec import BOOL, I64, PUBKEY, STRING, U64
from ..dispatch import DiscriminatorLayout
from ..payload import PayloadDecoder
from ..registry import OnUnrecognized, ProgramSchema, SchemaTable, event, instruction, versioned

PROGRAM_ID = "6EF8rrecthR5Dkzon8Nwu78hRvfCKubJ14M5uBEwF6P"

# Instruction discriminators
INITIALIZE = bytes([175, 175, 109, 31, 13, 152, 155, 237])
SET_PARAMS = bytes([165, 31, 134, 53, 189, 180, 130, 255])
CREATE = bytes([24, 30, 200, 40, 5, 28, 7, 119])
BUY = bytes.fromhex("66063d1201daebea")
SELL = bytes.fromhex("33e685a4017f83ad")
WITHDRAW = bytes([183, 18, 70, 156, 148, 109, 161, 34])

# Event discriminators (after the self-CPI tag)
CREATE_EVENT = bytes.fromhex("1b72a94ddeeb6376")
COMPLETE_EVENT = bytes([95, 114, 97, 156, 212, 46, 152, 8])
SET_PARAMS_EVENT = bytes([223, 195, 159, 246, 62, 48, 143, 131])
TRADE_EVENT = bytes.fromhex("bddb7fd34ee661ee")

SET_PARAMS_FIELDS = [
    ("fee_recipient", PUBKEY),
    ("initial_virtual_token_reserves", U64),
    ("initial_virtual_sol_reserves", U64),
    ("initial_real_token_reserves", U64),
    ("token_total_supply", U64),
    ("fee_basis_points", U64),
]

TRADE_V0_FIELDS = [
    ("mint", PUBKEY),
    ("sol_amount", U64),
    ("token_amount", U64),
    ("is_buy", BOOL),
    ("user", PUBKEY),
    ("timestamp", I64),
    ("virtual_sol_reserves", U64),
    ("virtual_token_reserves", U64),
]
TRADE_V1_FIELDS = TRADE_V0_FIELDS + [
    ("real_sol_reserves", U64),
    ("real_token_reserves", U64),
]
TRADE_V2_FIELDS = TRADE_V1_FIELDS + [
    ("fee_recipient", PUBKEY),
    ("fee_basis_points", U64),
    ("fee", U64),
    ("creator", PUBKEY),
    ("creator_fee_basis_points", U64),
    ("creator_fee", U64),
]
TRADE_V3_FIELDS = TRADE_V2_FIELDS + [
    ("track_volume", BOOL),
    ("total_unclaimed_tokens", U64),
    ("total_claimed_tokens", U64),
    ("current_sol_volume", U64),
    ("last_update_timestamp", I64),
]

_TRADE_ACCOUNTS = [
    "global_state",
    "fee_recipient",
    "mint",
    "curve_config",
    "token_vault",
    "user_state",
    "user",
    "system_program",
]


def schema() -> ProgramSchema:
    instructions = SchemaTable(
        "pumpfun.instructions",
        DiscriminatorLayout.ANCHOR,
        [
            instruction(
                "Initialize", INITIALIZE,
                accounts=["global_state", "admin", "system_program", "event_authority", "program"],
            ),
            instruction(
                "SetParams", SET_PARAMS, SET_PARAMS_FIELDS,
                accounts=["curve_config", "admin", "global_state", "event_authority", "program"],
            ),
            instruction(
                "Create", CREATE,
                [("name", STRING), ("symbol", STRING), ("uri", STRING), ("creator", PUBKEY)],
                accounts=[
                    "mint", "mint_authority", "curve_config", "curve", "global_state",
                    "metadata_program", "metadata", "user", "system_program", "token_program",
                    "associated_token_program", "rent", "event_authority", "program",
                ],
            ),
            instruction(
                "Buy", BUY, [("amount", U64), ("max_sol_cost", U64)],
                accounts=_TRADE_ACCOUNTS + ["token_program", "creator_vault", "event_authority", "program"],
            ),
            instruction(
                "Sell", SELL, [("amount", U64), ("min_sol_output", U64)],
                accounts=_TRADE_ACCOUNTS + ["creator_vault", "token_program", "event_authority", "program"],
            ),
            instruction(
                "Withdraw", WITHDRAW,
                accounts=["global_state", "fee_recipient", "system_program", "event_authority", "program"],
            ),
        ],
        on_unrecognized=OnUnrecognized.RETURN_ERROR,
    )

    events = SchemaTable(
        "pumpfun.events",
        DiscriminatorLayout.SELF_CPI,
        [
            event("CreateEvent", CREATE_EVENT, [
                ("name", STRING),
                ("symbol", STRING),
                ("uri", STRING),
                ("mint", PUBKEY),
                ("bonding_curve", PUBKEY),
                ("user", PUBKEY),
                ("creator", PUBKEY),
                ("timestamp", I64),
                ("virtual_token_reserves", U64),
                ("virtual_sol_reserves", U64),
                ("real_token_reserves", U64),
                ("token_total_supply", U64),
            ]),
            versioned(
                "TradeEvent", TRADE_EVENT,
                PayloadDecoder("TradeEventV0", TRADE_V0_FIELDS),
                PayloadDecoder("TradeEventV1", TRADE_V1_FIELDS),
                PayloadDecoder("TradeEventV2", TRADE_V2_FIELDS),
                PayloadDecoder("TradeEventV3", TRADE_V3_FIELDS),
            ),
            event("CompleteEvent", COMPLETE_EVENT, [
                ("user", PUBKEY),
                ("mint", PUBKEY),
                ("bonding_curve", PUBKEY),
                ("timestamp", I64),
            ]),
            event("SetParamsEvent", SET_PARAMS_EVENT, SET_PARAMS_FIELDS),
        ],
        on_unrecognized=OnUnrecognized.RETURN_ERROR,
    )
    return ProgramSchema("pumpfun", PROGRAM_ID, instructions, events)
