"""
solana_idls/programs/pumpfun_amm.py

Pump.fun AMM (PumpSwap) program: instructions and self-CPI events.

Events always carry the self-CPI tag; a buffer with any other outer tag does
not match. Buy, Sell and CreatePool events gained coin-creator fields (V2)
without a new discriminator, so they are versioned by payload length.
"""
from ..codec import BOOL, I64, PUBKEY, U8, U16, U64, Array
from ..dispatch import DiscriminatorLayout
from ..payload import PayloadDecoder
from ..registry import OnUnrecognized, ProgramSchema, SchemaTable, event, instruction, versioned

PROGRAM_ID = "pAMMBay6oceH9fJKBRHGP5D4bD4sWpmSwMn52FMfXEA"

# Instruction discriminators
BUY = bytes.fromhex("66063d1201daebea")
SELL = bytes.fromhex("33e685a4017f83ad")
CREATE_POOL = bytes.fromhex("e992d18ecf6840bc")
CREATE_CONFIG = bytes([201, 207, 243, 114, 75, 111, 47, 189])
DEPOSIT = bytes([242, 35, 198, 137, 82, 225, 242, 182])
DISABLE = bytes([185, 173, 187, 90, 216, 15, 238, 233])
EXTEND_ACCOUNT = bytes([234, 102, 194, 203, 150, 72, 62, 229])
UPDATE_ADMIN = bytes([161, 176, 40, 213, 60, 184, 179, 228])
UPDATE_FEE_CONFIG = bytes([104, 184, 103, 242, 88, 151, 107, 20])
WITHDRAW = bytes([183, 18, 70, 156, 148, 109, 161, 34])

# Event discriminators (after the self-CPI tag)
BUY_EVENT = bytes([103, 244, 82, 31, 44, 245, 119, 119])
SELL_EVENT = bytes([62, 47, 55, 10, 165, 3, 220, 42])
CREATE_CONFIG_EVENT = bytes([107, 52, 89, 129, 55, 226, 81, 22])
CREATE_POOL_EVENT = bytes([177, 49, 12, 210, 160, 118, 167, 116])
DEPOSIT_EVENT = bytes([120, 248, 61, 83, 31, 142, 107, 144])
DISABLE_EVENT = bytes([107, 253, 193, 76, 228, 202, 27, 104])
EXTEND_ACCOUNT_EVENT = bytes([97, 97, 215, 144, 93, 146, 22, 124])
UPDATE_ADMIN_EVENT = bytes([225, 152, 171, 87, 246, 63, 66, 234])
UPDATE_FEE_CONFIG_EVENT = bytes([90, 23, 65, 35, 62, 244, 188, 208])
WITHDRAW_EVENT = bytes([22, 9, 133, 26, 160, 44, 71, 192])

FEE_RECIPIENTS = Array(PUBKEY, 8)

_SWAP_ACCOUNTS = [
    "pool",
    "user",
    "global_config",
    "base_mint",
    "quote_mint",
    "user_base_token_account",
    "user_quote_token_account",
    "pool_base_token_account",
    "pool_quote_token_account",
    "protocol_fee_recipient",
    "protocol_fee_recipient_token_account",
    "base_token_program",
    "quote_token_program",
    "system_program",
    "associated_token_program",
    "event_authority",
    "program",
    # added with creator fees; older transactions omit them
    "coin_creator_vault_ata?",
    "coin_creator_vault_authority?",
]

_EVENT_ACCOUNTS = [
    ("pool", PUBKEY),
    ("user", PUBKEY),
    ("user_base_token_account", PUBKEY),
    ("user_quote_token_account", PUBKEY),
    ("protocol_fee_recipient", PUBKEY),
    ("protocol_fee_recipient_token_account", PUBKEY),
]
_COIN_CREATOR_FEE = [
    ("coin_creator", PUBKEY),
    ("coin_creator_fee_basis_points", U64),
    ("coin_creator_fee", U64),
]

BUY_EVENT_V1_FIELDS = [
    ("timestamp", I64),
    ("base_amount_out", U64),
    ("max_quote_amount_in", U64),
    ("user_base_token_reserves", U64),
    ("user_quote_token_reserves", U64),
    ("pool_base_token_reserves", U64),
    ("pool_quote_token_reserves", U64),
    ("quote_amount_in", U64),
    ("lp_fee_basis_points", U64),
    ("lp_fee", U64),
    ("protocol_fee_basis_points", U64),
    ("protocol_fee", U64),
    ("quote_amount_in_with_lp_fee", U64),
    ("user_quote_amount_in", U64),
] + _EVENT_ACCOUNTS

SELL_EVENT_V1_FIELDS = [
    ("timestamp", I64),
    ("base_amount_in", U64),
    ("min_quote_amount_out", U64),
    ("user_base_token_reserves", U64),
    ("user_quote_token_reserves", U64),
    ("pool_base_token_reserves", U64),
    ("pool_quote_token_reserves", U64),
    ("quote_amount_out", U64),
    ("lp_fee_basis_points", U64),
    ("lp_fee", U64),
    ("protocol_fee_basis_points", U64),
    ("protocol_fee", U64),
    ("quote_amount_out_without_lp_fee", U64),
    ("user_quote_amount_out", U64),
] + _EVENT_ACCOUNTS

CREATE_POOL_EVENT_V1_FIELDS = [
    ("timestamp", I64),
    ("index", U16),
    ("creator", PUBKEY),
    ("base_mint", PUBKEY),
    ("quote_mint", PUBKEY),
    ("base_mint_decimals", U8),
    ("quote_mint_decimals", U8),
    ("base_amount_in", U64),
    ("quote_amount_in", U64),
    ("pool_base_amount", U64),
    ("pool_quote_amount", U64),
    ("minimum_liquidity", U64),
    ("initial_liquidity", U64),
    ("lp_token_amount_out", U64),
    ("pool_bump", U8),
    ("pool", PUBKEY),
    ("lp_mint", PUBKEY),
    ("user_base_token_account", PUBKEY),
    ("user_quote_token_account", PUBKEY),
]

_LIQUIDITY_EVENT_TAIL = [
    ("pool", PUBKEY),
    ("user", PUBKEY),
    ("user_base_token_account", PUBKEY),
    ("user_quote_token_account", PUBKEY),
    ("user_pool_token_account", PUBKEY),
]


def _instructions() -> SchemaTable:
    return SchemaTable(
        "pumpfun_amm.instructions",
        DiscriminatorLayout.ANCHOR,
        [
            instruction("Buy", BUY, [("base_amount_out", U64), ("max_quote_amount_in", U64)], accounts=_SWAP_ACCOUNTS),
            instruction("Sell", SELL, [("base_amount_in", U64), ("min_quote_amount_out", U64)], accounts=_SWAP_ACCOUNTS),
            instruction("CreatePool", CREATE_POOL, [
                ("index", U16),
                ("base_amount_in", U64),
                ("quote_amount_in", U64),
                ("coin_creator", PUBKEY),
            ]),
            instruction("CreateConfig", CREATE_CONFIG, [
                ("lp_fee_basis_points", U64),
                ("protocol_fee_basis_points", U64),
                ("protocol_fee_recipients", FEE_RECIPIENTS),
            ]),
            instruction("Deposit", DEPOSIT, [
                ("lp_token_amount_out", U64),
                ("max_base_amount_in", U64),
                ("max_quote_amount_in", U64),
            ]),
            instruction("Disable", DISABLE, [
                ("disable_create_pool", BOOL),
                ("disable_deposit", BOOL),
                ("disable_withdraw", BOOL),
                ("disable_buy", BOOL),
                ("disable_sell", BOOL),
            ]),
            instruction("ExtendAccount", EXTEND_ACCOUNT),
            instruction("UpdateAdmin", UPDATE_ADMIN),
            instruction("UpdateFeeConfig", UPDATE_FEE_CONFIG, [
                ("lp_fee_basis_points", U64),
                ("protocol_fee_basis_points", U64),
                ("protocol_fee_recipients", FEE_RECIPIENTS),
            ]),
            instruction("Withdraw", WITHDRAW, [
                ("lp_token_amount_in", U64),
                ("min_base_amount_out", U64),
                ("min_quote_amount_out", U64),
            ]),
        ],
        on_unrecognized=OnUnrecognized.RETURN_ERROR,
    )


def _events() -> SchemaTable:
    return SchemaTable(
        "pumpfun_amm.events",
        DiscriminatorLayout.SELF_CPI,
        [
            versioned(
                "BuyEvent", BUY_EVENT,
                PayloadDecoder("BuyEventV1", BUY_EVENT_V1_FIELDS),
                PayloadDecoder("BuyEventV2", BUY_EVENT_V1_FIELDS + _COIN_CREATOR_FEE),
            ),
            versioned(
                "SellEvent", SELL_EVENT,
                PayloadDecoder("SellEventV1", SELL_EVENT_V1_FIELDS),
                PayloadDecoder("SellEventV2", SELL_EVENT_V1_FIELDS + _COIN_CREATOR_FEE),
            ),
            versioned(
                "CreatePoolEvent", CREATE_POOL_EVENT,
                PayloadDecoder("CreatePoolEventV1", CREATE_POOL_EVENT_V1_FIELDS),
                PayloadDecoder("CreatePoolEventV2", CREATE_POOL_EVENT_V1_FIELDS + [("coin_creator", PUBKEY)]),
            ),
            event("CreateConfigEvent", CREATE_CONFIG_EVENT, [
                ("timestamp", I64),
                ("admin", PUBKEY),
                ("lp_fee_basis_points", U64),
                ("protocol_fee_basis_points", U64),
                ("protocol_fee_recipients", FEE_RECIPIENTS),
            ]),
            event("DepositEvent", DEPOSIT_EVENT, [
                ("timestamp", I64),
                ("lp_token_amount_out", U64),
                ("max_base_amount_in", U64),
                ("max_quote_amount_in", U64),
                ("user_base_token_reserves", U64),
                ("user_quote_token_reserves", U64),
                ("pool_base_token_reserves", U64),
                ("pool_quote_token_reserves", U64),
                ("base_amount_in", U64),
                ("quote_amount_in", U64),
                ("lp_mint_supply", U64),
            ] + _LIQUIDITY_EVENT_TAIL),
            event("DisableEvent", DISABLE_EVENT, [
                ("timestamp", I64),
                ("admin", PUBKEY),
                ("disable_create_pool", BOOL),
                ("disable_deposit", BOOL),
                ("disable_withdraw", BOOL),
                ("disable_buy", BOOL),
                ("disable_sell", BOOL),
            ]),
            event("ExtendAccountEvent", EXTEND_ACCOUNT_EVENT, [
                ("timestamp", I64),
                ("account", PUBKEY),
                ("user", PUBKEY),
                ("current_size", U64),
                ("new_size", U64),
            ]),
            event("UpdateAdminEvent", UPDATE_ADMIN_EVENT, [
                ("timestamp", I64),
                ("admin", PUBKEY),
                ("new_admin", PUBKEY),
            ]),
            event("UpdateFeeConfigEvent", UPDATE_FEE_CONFIG_EVENT, [
                ("timestamp", I64),
                ("admin", PUBKEY),
                ("lp_fee_basis_points", U64),
                ("protocol_fee_basis_points", U64),
                ("protocol_fee_recipients", FEE_RECIPIENTS),
            ]),
            event("WithdrawEvent", WITHDRAW_EVENT, [
                ("timestamp", I64),
                ("lp_token_amount_in", U64),
                ("min_base_amount_out", U64),
                ("min_quote_amount_out", U64),
                ("user_base_token_reserves", U64),
                ("user_quote_token_reserves", U64),
                ("pool_base_token_reserves", U64),
                ("pool_quote_token_reserves", U64),
                ("base_amount_out", U64),
                ("quote_amount_out", U64),
                ("lp_mint_supply", U64),
            ] + _LIQUIDITY_EVENT_TAIL),
        ],
        on_unrecognized=OnUnrecognized.RETURN_ERROR,
    )


def schema() -> ProgramSchema:
    return ProgramSchema("pumpfun_amm", PROGRAM_ID, _instructions(), _events())
