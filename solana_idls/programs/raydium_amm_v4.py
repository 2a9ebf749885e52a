"""
solana_idls/programs/raydium_amm_v4.py

Raydium AMM v4 (legacy, non-Anchor) program.

Instructions use a 1-byte tag. SwapBaseIn / SwapBaseOut are read as exactly
16 payload bytes: historical transactions carry extra trailing bytes that the
program itself ignores. ``ray_log`` events also use a 1-byte tag (log_type).
"""
from ..codec import PUBKEY, U8, U16, U64, U128, FixedBytes, Option, Struct
from ..dispatch import DiscriminatorLayout
from ..registry import OnUnrecognized, ProgramSchema, SchemaTable, event, instruction

PROGRAM_ID = "675kPX9MHTjS2zt1qfr1NYHuzeLXfQM9H24wFSUt1Mp8"

# Instruction tags
INITIALIZE = 0
INITIALIZE2 = 1
MONITOR_STEP = 2
DEPOSIT = 3
WITHDRAW = 4
MIGRATE_TO_OPENBOOK = 5
SET_PARAMS = 6
WITHDRAW_PNL = 7
WITHDRAW_SRM = 8
SWAP_BASE_IN = 9
PRE_INITIALIZE = 10
SWAP_BASE_OUT = 11
SIMULATE_INFO = 12
ADMIN_CANCEL_ORDERS = 13
CREATE_CONFIG_ACCOUNT = 14
UPDATE_CONFIG_ACCOUNT = 15

# ray_log tags
LOG_INIT = 0
LOG_DEPOSIT = 1
LOG_WITHDRAW = 2
LOG_SWAP_BASE_IN = 3
LOG_SWAP_BASE_OUT = 4

SWAP_LEN = 16

SWAP_BASE_IN_FIELDS = [("amount_in", U64), ("minimum_amount_out", U64)]
SWAP_BASE_OUT_FIELDS = [("max_amount_in", U64), ("amount_out", U64)]

SWAP_ACCOUNTS = [
    "token_program",
    "amm",
    "amm_authority",
    "amm_open_orders",
    "amm_target_orders?",
    "pool_coin_token_account",
    "pool_pc_token_account",
    "serum_program",
    "serum_market",
    "serum_bids",
    "serum_asks",
    "serum_event_queue",
    "serum_coin_vault_account",
    "serum_pc_vault_account",
    "serum_vault_signer",
    "user_source_token_account",
    "user_destination_token_account",
    "user_source_owner",
]

INITIALIZE_ACCOUNTS = [
    "token_program", "system_program", "rent", "amm", "amm_authority", "amm_open_orders",
    "lp_mint_address", "coin_mint_address", "pc_mint_address", "pool_coin_token_account",
    "pool_pc_token_account", "pool_withdraw_queue", "pool_target_orders_account",
    "user_lp_token_account", "pool_temp_lp_token_account", "serum_program", "serum_market",
    "user_wallet",
]

INITIALIZE2_ACCOUNTS = [
    "token_program", "spl_associated_token_account", "system_program", "rent", "amm",
    "amm_authority", "amm_open_orders", "lp_mint", "coin_mint", "pc_mint",
    "pool_coin_token_account", "pool_pc_token_account", "pool_withdraw_queue",
    "amm_target_orders", "pool_temp_lp", "serum_program", "serum_market", "user_wallet",
    "user_token_coin", "user_token_pc", "user_lp_token_account",
]

MONITOR_STEP_ACCOUNTS = [
    "token_program", "rent", "clock", "amm", "amm_authority", "amm_open_orders",
    "amm_target_orders", "pool_coin_token_account", "pool_pc_token_account",
    "pool_withdraw_queue", "serum_program", "serum_market", "serum_coin_vault_account",
    "serum_pc_vault_account", "serum_vault_signer", "serum_req_q", "serum_event_q",
    "serum_bids", "serum_asks",
]

DEPOSIT_ACCOUNTS = [
    "token_program", "amm", "amm_authority", "amm_open_orders", "amm_target_orders",
    "lp_mint_address", "pool_coin_token_account", "pool_pc_token_account", "serum_market",
    "user_coin_token_account", "user_pc_token_account", "user_lp_token_account",
    "user_owner", "serum_event_queue",
]

WITHDRAW_ACCOUNTS = [
    "token_program", "amm", "amm_authority", "amm_open_orders", "amm_target_orders",
    "lp_mint_address", "pool_coin_token_account", "pool_pc_token_account",
    "pool_withdraw_queue", "pool_temp_lp_token_account", "serum_program", "serum_market",
    "serum_coin_vault_account", "serum_pc_vault_account", "serum_vault_signer",
    "user_lp_token_account", "user_coin_token_account", "user_pc_token_account",
    "user_owner", "serum_event_q", "serum_bids", "serum_asks",
]

MIGRATE_TO_OPENBOOK_ACCOUNTS = [
    "token_program", "system_program", "rent", "amm", "amm_authority", "amm_open_orders",
    "amm_token_coin", "amm_token_pc", "amm_target_orders", "serum_program", "serum_market",
    "serum_bids", "serum_asks", "serum_event_queue", "serum_coin_vault", "serum_pc_vault",
    "serum_vault_signer", "new_amm_open_orders", "new_serum_program", "new_serum_market",
    "admin",
]

SET_PARAMS_ACCOUNTS = [
    "token_program", "amm", "amm_authority", "amm_open_orders", "amm_target_orders",
    "amm_coin_vault", "amm_pc_vault", "serum_program", "serum_market", "serum_coin_vault",
    "serum_pc_vault", "serum_vault_signer", "serum_event_queue", "serum_bids", "serum_asks",
    "amm_admin_account",
]

WITHDRAW_PNL_ACCOUNTS = [
    "token_program", "amm", "amm_config", "amm_authority", "amm_open_orders",
    "pool_coin_token_account", "pool_pc_token_account", "coin_pnl_token_account",
    "pc_pnl_token_account", "pnl_owner_account", "amm_target_orders", "serum_program",
    "serum_market", "serum_event_queue", "serum_coin_vault_account",
    "serum_pc_vault_account", "serum_vault_signer",
]

PRE_INITIALIZE_ACCOUNTS = [
    "token_program", "system_program", "rent", "amm_target_orders", "pool_withdraw_queue",
    "amm_authority", "lp_mint_address", "coin_mint_address", "pc_mint_address",
    "pool_coin_token_account", "pool_pc_token_account", "pool_temp_lp_token_account",
    "serum_market", "user_wallet",
]

ADMIN_CANCEL_ORDERS_ACCOUNTS = [
    "token_program", "amm", "amm_authority", "amm_open_orders", "amm_target_orders",
    "pool_coin_token_account", "pool_pc_token_account", "amm_owner_account", "amm_config",
    "serum_program", "serum_market", "serum_coin_vault_account", "serum_pc_vault_account",
    "serum_vault_signer", "serum_event_q", "serum_bids", "serum_asks",
]


def _instructions() -> SchemaTable:
    return SchemaTable(
        "raydium_amm_v4.instructions",
        DiscriminatorLayout.U8,
        [
            instruction(
                "Initialize", INITIALIZE, [("nonce", U8), ("open_time", U64)],
                accounts=INITIALIZE_ACCOUNTS,
            ),
            instruction(
                "Initialize2", INITIALIZE2,
                [("nonce", U8), ("open_time", U64), ("init_pc_amount", U64), ("init_coin_amount", U64)],
                accounts=INITIALIZE2_ACCOUNTS,
            ),
            instruction(
                "MonitorStep", MONITOR_STEP,
                [("plan_order_limit", U16), ("place_order_limit", U16), ("cancel_order_limit", U16)],
                accounts=MONITOR_STEP_ACCOUNTS,
            ),
            instruction(
                "Deposit", DEPOSIT,
                [
                    ("max_coin_amount", U64),
                    ("max_pc_amount", U64),
                    ("base_side", U64),
                    ("other_amount_min", Option(U64)),
                ],
                accounts=DEPOSIT_ACCOUNTS,
            ),
            instruction(
                "Withdraw", WITHDRAW,
                [("amount", U64), ("min_coin_amount", Option(U64)), ("min_pc_amount", Option(U64))],
                accounts=WITHDRAW_ACCOUNTS,
            ),
            instruction("MigrateToOpenBook", MIGRATE_TO_OPENBOOK, accounts=MIGRATE_TO_OPENBOOK_ACCOUNTS),
            instruction(
                "SetParams", SET_PARAMS,
                [("param", U8), ("value", Option(U64)), ("new_pubkey", Option(FixedBytes(32)))],
                accounts=SET_PARAMS_ACCOUNTS,
            ),
            instruction("WithdrawPnl", WITHDRAW_PNL, accounts=WITHDRAW_PNL_ACCOUNTS),
            instruction(
                "WithdrawSrm", WITHDRAW_SRM, [("amount", U64)],
                accounts=["token_program", "amm", "amm_owner_account", "amm_authority", "srm_token", "dest_srm_token"],
            ),
            instruction(
                "SwapBaseIn", SWAP_BASE_IN, SWAP_BASE_IN_FIELDS,
                accounts=SWAP_ACCOUNTS, exact_length=SWAP_LEN,
            ),
            instruction("PreInitialize", PRE_INITIALIZE, [("nonce", U8)], accounts=PRE_INITIALIZE_ACCOUNTS),
            instruction(
                "SwapBaseOut", SWAP_BASE_OUT, SWAP_BASE_OUT_FIELDS,
                accounts=SWAP_ACCOUNTS, exact_length=SWAP_LEN,
            ),
            instruction(
                "SimulateInfo", SIMULATE_INFO,
                [
                    ("param", U8),
                    ("swap_base_in_value", Option(Struct("SwapBaseIn", SWAP_BASE_IN_FIELDS))),
                    ("swap_base_out_value", Option(Struct("SwapBaseOut", SWAP_BASE_OUT_FIELDS))),
                ],
                accounts=[
                    "amm", "amm_authority", "amm_open_orders", "pool_coin_token_account",
                    "pool_pc_token_account", "lp_mint_address", "serum_market", "serum_event_queue",
                ],
            ),
            instruction(
                "AdminCancelOrders", ADMIN_CANCEL_ORDERS, [("limit", U16)],
                accounts=ADMIN_CANCEL_ORDERS_ACCOUNTS,
            ),
            instruction(
                "CreateConfigAccount", CREATE_CONFIG_ACCOUNT,
                accounts=["admin", "amm_config", "owner", "system_program", "rent"],
            ),
            instruction(
                "UpdateConfigAccount", UPDATE_CONFIG_ACCOUNT,
                [("param", U8), ("owner", Option(FixedBytes(32))), ("create_pool_fee", Option(U64))],
                accounts=["admin", "amm_config"],
            ),
        ],
        on_unrecognized=OnUnrecognized.RETURN_ERROR,
    )


def _logs() -> SchemaTable:
    return SchemaTable(
        "raydium_amm_v4.logs",
        DiscriminatorLayout.U8,
        [
            event("InitLog", LOG_INIT, [
                ("time", U64),
                ("pc_decimals", U8),
                ("coin_decimals", U8),
                ("pc_lot_size", U64),
                ("coin_lot_size", U64),
                ("pc_amount", U64),
                ("coin_amount", U64),
                ("market", PUBKEY),
            ]),
            event("DepositLog", LOG_DEPOSIT, [
                ("max_coin", U64),
                ("max_pc", U64),
                ("base", U64),
                ("pool_coin", U64),
                ("pool_pc", U64),
                ("pool_lp", U64),
                ("calc_pnl_x", U128),
                ("calc_pnl_y", U128),
                ("deduct_coin", U64),
                ("deduct_pc", U64),
                ("mint_lp", U64),
            ]),
            event("WithdrawLog", LOG_WITHDRAW, [
                ("withdraw_lp", U64),
                ("user_lp", U64),
                ("pool_coin", U64),
                ("pool_pc", U64),
                ("pool_lp", U64),
                ("calc_pnl_x", U128),
                ("calc_pnl_y", U128),
                ("out_coin", U64),
                ("out_pc", U64),
            ]),
            event("SwapBaseInLog", LOG_SWAP_BASE_IN, [
                ("amount_in", U64),
                ("minimum_out", U64),
                ("direction", U64),
                ("user_source", U64),
                ("pool_coin", U64),
                ("pool_pc", U64),
                ("out_amount", U64),
            ]),
            event("SwapBaseOutLog", LOG_SWAP_BASE_OUT, [
                ("max_in", U64),
                ("amount_out", U64),
                ("direction", U64),
                ("user_source", U64),
                ("pool_coin", U64),
                ("pool_pc", U64),
                ("deduct_in", U64),
            ]),
        ],
        on_unrecognized=OnUnrecognized.RETURN_ERROR,
    )


def schema() -> ProgramSchema:
    return ProgramSchema("raydium_amm_v4", PROGRAM_ID, _instructions(), _logs())
