"""
solana_idls/programs/jupiter_v6.py

Jupiter aggregator v6. Route instructions keep their route plan as raw bytes
(``data``); the shared-accounts variants lead with a one-byte ``id``.
"""
from ..codec import BOOL, PUBKEY, REST, U8, U64
from ..dispatch import DiscriminatorLayout
from ..registry import OnUnrecognized, ProgramSchema, SchemaTable, event, instruction

PROGRAM_ID = "JUP6LkbZbjS1jKKwapdHNy74zcZ3tLUZoi5QNyVTaV4"

CLAIM = bytes([62, 198, 214, 193, 213, 159, 108, 210])
CLAIM_TOKEN = bytes([116, 206, 27, 191, 166, 19, 0, 73])
CLOSE_TOKEN = bytes([26, 74, 236, 151, 104, 64, 183, 249])
CREATE_OPEN_ORDERS = bytes([229, 194, 212, 172, 8, 10, 134, 147])
CREATE_PROGRAM_OPEN_ORDERS = bytes([28, 226, 32, 148, 188, 136, 113, 171])
CREATE_TOKEN_LEDGER = bytes([232, 242, 197, 253, 240, 143, 129, 52])
CREATE_TOKEN_ACCOUNT = bytes([147, 241, 123, 100, 244, 132, 174, 118])
EXACT_OUT_ROUTE = bytes([208, 51, 239, 151, 123, 43, 237, 92])
ROUTE = bytes([229, 23, 203, 151, 122, 227, 173, 42])
ROUTE_WITH_TOKEN_LEDGER = bytes([150, 86, 71, 116, 167, 93, 14, 104])
SET_TOKEN_LEDGER = bytes([228, 85, 185, 112, 78, 79, 77, 2])
SHARED_ACCOUNTS_EXACT_OUT_ROUTE = bytes([176, 209, 105, 168, 154, 125, 69, 62])
SHARED_ACCOUNTS_ROUTE = bytes([193, 32, 155, 51, 65, 214, 156, 129])
SHARED_ACCOUNTS_ROUTE_WITH_TOKEN_LEDGER = bytes([230, 121, 143, 80, 119, 159, 106, 170])

SWAP_EVENT = bytes.fromhex("40c6cde8260871e2")
FEE_EVENT = bytes.fromhex("494f4e7fb8d50ddc")

_ROUTE = [("data", REST)]
_SHARED_ROUTE = [("id", U8), ("data", REST)]

ROUTE_ACCOUNTS = [
    "token_program",
    "user_transfer_authority",
    "user_source_token_account",
    "user_destination_token_account",
    "destination_token_account?",
    "destination_mint",
    "platform_fee_account?",
    "event_authority",
    "program",
]

ROUTE_WITH_TOKEN_LEDGER_ACCOUNTS = ROUTE_ACCOUNTS[:7] + ["token_ledger", "event_authority", "program"]

EXACT_OUT_ROUTE_ACCOUNTS = [
    "token_program",
    "user_transfer_authority",
    "user_source_token_account",
    "user_destination_token_account",
    "destination_token_account?",
    "source_mint",
    "destination_mint",
    "platform_fee_account?",
    "token_2022_program?",
    "event_authority",
    "program",
]

SHARED_ACCOUNTS = [
    "token_program",
    "program_authority",
    "user_transfer_authority",
    "source_token_account",
    "program_source_token_account",
    "program_destination_token_account",
    "destination_token_account",
    "source_mint",
    "destination_mint",
    "platform_fee_account?",
    "token_2022_program?",
    "event_authority",
    "program",
]

SHARED_ACCOUNTS_WITH_TOKEN_LEDGER = SHARED_ACCOUNTS[:11] + ["token_ledger", "event_authority", "program"]


def schema() -> ProgramSchema:
    instructions = SchemaTable(
        "jupiter_v6.instructions",
        DiscriminatorLayout.ANCHOR,
        [
            instruction("Claim", CLAIM, [("id", U8)], accounts=["wallet", "program_authority", "system_program"]),
            instruction(
                "ClaimToken", CLAIM_TOKEN, [("id", U8)],
                accounts=[
                    "payer", "wallet", "program_authority", "program_token_account",
                    "destination_token_account", "mint", "token_program",
                    "associated_token_program", "system_program",
                ],
            ),
            instruction(
                "CloseToken", CLOSE_TOKEN, [("id", U8), ("burn_all", BOOL)],
                accounts=["operator", "wallet", "program_authority", "program_token_account", "mint", "token_program"],
            ),
            instruction(
                "CreateOpenOrders", CREATE_OPEN_ORDERS,
                accounts=["open_orders", "payer", "dex_program", "system_program", "rent", "market"],
            ),
            instruction(
                "CreateProgramOpenOrders", CREATE_PROGRAM_OPEN_ORDERS, [("id", U8)],
                accounts=["open_orders", "payer", "program_authority", "dex_program", "system_program", "rent", "market"],
            ),
            instruction(
                "CreateTokenLedger", CREATE_TOKEN_LEDGER,
                accounts=["token_ledger", "payer", "system_program"],
            ),
            instruction(
                "CreateTokenAccount", CREATE_TOKEN_ACCOUNT, [("bump", U8)],
                accounts=["token_account", "user", "mint", "token_program", "system_program"],
            ),
            instruction("ExactOutRoute", EXACT_OUT_ROUTE, _ROUTE, accounts=EXACT_OUT_ROUTE_ACCOUNTS),
            instruction("Route", ROUTE, _ROUTE, accounts=ROUTE_ACCOUNTS),
            instruction(
                "RouteWithTokenLedger", ROUTE_WITH_TOKEN_LEDGER, _ROUTE,
                accounts=ROUTE_WITH_TOKEN_LEDGER_ACCOUNTS,
            ),
            instruction("SetTokenLedger", SET_TOKEN_LEDGER, accounts=["token_ledger", "token_account"]),
            instruction(
                "SharedAccountsExactOutRoute", SHARED_ACCOUNTS_EXACT_OUT_ROUTE, _SHARED_ROUTE,
                accounts=SHARED_ACCOUNTS,
            ),
            instruction("SharedAccountsRoute", SHARED_ACCOUNTS_ROUTE, _SHARED_ROUTE, accounts=SHARED_ACCOUNTS),
            instruction(
                "SharedAccountsRouteWithTokenLedger", SHARED_ACCOUNTS_ROUTE_WITH_TOKEN_LEDGER, _SHARED_ROUTE,
                accounts=SHARED_ACCOUNTS_WITH_TOKEN_LEDGER,
            ),
        ],
        on_unrecognized=OnUnrecognized.RETURN_ERROR,
    )

    events = SchemaTable(
        "jupiter_v6.events",
        DiscriminatorLayout.ANCHOR_EVENT,
        [
            event("SwapEvent", SWAP_EVENT, [
                ("amm", PUBKEY),
                ("input_mint", PUBKEY),
                ("input_amount", U64),
                ("output_mint", PUBKEY),
                ("output_amount", U64),
            ]),
            event("FeeEvent", FEE_EVENT, [
                ("account", PUBKEY),
                ("mint", PUBKEY),
                ("amount", U64),
            ]),
        ],
        on_unrecognized=OnUnrecognized.RETURN_ERROR,
    )
    return ProgramSchema("jupiter_v6", PROGRAM_ID, instructions, events)
