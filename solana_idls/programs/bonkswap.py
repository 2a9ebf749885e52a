"""
solana_idls/programs/bonkswap.py

BonkSwap AMM program. Amounts are wrapped in single-field structs on the wire
(``Token {v: u64}``, ``FixedPoint {v: u128}``) and decode as ``{"v": ...}``.
"""
from ..codec import BOOL, U8, U64, U128, Struct
from ..dispatch import DiscriminatorLayout
from ..registry import OnUnrecognized, ProgramSchema, SchemaTable, event, instruction

PROGRAM_ID = "BSwp6bEBihVLdqJRKGgzjcGLHkcTuzmSo1TQkHepzH8p"

CREATE_POOL = bytes([244, 236, 117, 4, 18, 0, 62, 88])
CREATE_PROVIDER = bytes([229, 222, 145, 200, 251, 64, 186, 242])
CREATE_STATE = bytes([96, 136, 104, 83, 116, 63, 225, 58])
ADD_TOKENS = bytes([235, 5, 251, 241, 34, 5, 87, 148])
WITHDRAW_BUYBACK = bytes([165, 47, 140, 185, 166, 81, 67, 193])
SWAP = bytes([248, 198, 158, 145, 225, 117, 135, 200])
WITHDRAW_SHARES = bytes([154, 125, 104, 220, 109, 76, 190, 75])
WITHDRAW_LP_FEE = bytes([228, 128, 27, 71, 99, 91, 176, 245])
WITHDRAW_PROJECT_FEE = bytes([217, 56, 100, 164, 87, 185, 120, 122])
CREATE_FARM = bytes([132, 184, 152, 144, 36, 178, 106, 65])
CREATE_DUAL_FARM = bytes([116, 188, 85, 98, 87, 133, 44, 198])
CREATE_TRIPLE_FARM = bytes([47, 47, 162, 177, 193, 92, 246, 43])
WITHDRAW_REWARDS = bytes([12, 208, 61, 169, 41, 19, 58, 161])
CLOSE_POOL = bytes([78, 253, 165, 27, 159, 185, 29, 236])
WITHDRAW_MERCANTI_FEE = bytes([9, 63, 114, 166, 104, 156, 8, 156])
ADD_SUPPLY = bytes([208, 22, 199, 241, 3, 135, 81, 50])
UPDATE_FEES = bytes([1, 7, 208, 119, 69, 167, 97, 219])
RESET_FARM = bytes([245, 17, 148, 220, 55, 229, 71, 86])
UPDATE_REWARD_TOKENS = bytes([156, 68, 147, 116, 29, 57, 159, 114])

# emitted with the same discriminator as the Swap instruction
SWAP_EVENT = SWAP

FIXED_POINT = Struct("FixedPoint", [("v", U128)])
TOKEN = Struct("Token", [("v", U64)])

SWAP_ACCOUNTS = [
    "state",
    "pool",
    "token_x",
    "token_y",
    "pool_x_account",
    "pool_y_account",
    "swapper_x_account",
    "swapper_y_account",
    "swapper",
    "referrer_x_account?",
    "referrer_y_account?",
    "referrer?",
    "program_authority",
    "system_program",
    "token_program",
    "associated_token_program",
    "rent",
]

_ACCOUNTS = {
    "CreatePool": """state pool token_x token_y pool_x_account pool_y_account admin_x_account
        admin_y_account admin project_owner program_authority system_program token_program rent""",
    "CreateProvider": """pool farm provider token_x token_y pool_x_account pool_y_account
        owner_x_account owner_y_account owner system_program token_program rent""",
    "CreateState": "state admin program_authority system_program",
    "AddTokens": """state pool farm provider token_x token_y token_marco token_project_first
        token_project_second owner_x_account owner_y_account pool_x_account pool_y_account
        owner_marco_account owner_project_first_account owner_project_second_account
        token_marco_account token_project_first_account token_project_second_account owner
        program_authority system_program token_program associated_token_program rent""",
    "WithdrawBuyback": """state pool token_x token_y buyback_x_account buyback_y_account
        pool_x_account pool_y_account admin program_authority system_program token_program
        associated_token_program rent""",
    "WithdrawShares": """state pool farm provider token_x token_y token_marco token_project_first
        token_project_second pool_x_account pool_y_account token_marco_account
        token_project_first_account token_project_second_account owner_x_account owner_y_account
        owner_marco_account owner_project_first_account owner_project_second_account owner
        program_authority system_program token_program associated_token_program rent""",
    "WithdrawLpFee": """state pool provider token_x token_y owner_x_account owner_y_account
        pool_x_account pool_y_account owner program_authority system_program token_program
        associated_token_program rent""",
    "WithdrawProjectFee": """state pool token_x token_y project_owner_x_account
        project_owner_y_account pool_x_account pool_y_account project_owner program_authority
        system_program token_program associated_token_program rent""",
    "CreateFarm": """state pool farm token_x token_y token_marco token_marco_account
        admin_marco_account admin program_authority system_program token_program rent""",
    "CreateDualFarm": """state pool farm token_x token_y token_marco token_project_first
        token_marco_account token_project_first_account admin_marco_account
        admin_project_first_account admin program_authority system_program token_program rent""",
    "CreateTripleFarm": """state pool farm token_x token_y token_marco token_project_first
        token_project_second token_marco_account token_project_first_account
        token_project_second_account admin_marco_account admin_project_first_account
        admin_project_second_account admin program_authority system_program token_program rent""",
    "WithdrawRewards": """state pool farm provider token_x token_y token_marco token_project_first
        token_project_second token_marco_account token_project_first_account
        token_project_second_account owner_marco_account owner_project_first_account
        owner_project_second_account owner program_authority system_program token_program
        associated_token_program rent""",
    "ClosePool": """state pool farm token_x token_y token_marco_account token_project_first_account
        token_project_second_account pool_x_account pool_y_account buyback_x_account
        buyback_y_account admin program_authority token_program""",
    "WithdrawMercantiFee": """state pool token_x token_y mercanti_x_account mercanti_y_account
        pool_x_account pool_y_account admin program_authority token_program""",
    "AddSupply": """state pool farm token_x token_y token_marco_account token_project_first_account
        token_project_second_account admin_marco_account admin_project_first_account
        admin_project_second_account admin token_program""",
    "UpdateFees": "state pool token_x token_y admin program_authority",
    "ResetFarm": """state pool farm token_x token_y token_marco token_marco_account
        token_project_first_account token_project_second_account admin_marco_account
        admin_project_first_account admin_project_second_account admin program_authority
        system_program token_program rent""",
    "UpdateRewardTokens": """state pool farm token_marco_account token_project_first_account
        token_project_second_account token_marco new_token_marco_account admin program_authority
        system_program token_program""",
}


def _ix(name: str, discriminator: bytes, fields=()):
    return instruction(name, discriminator, fields, accounts=_ACCOUNTS[name].split())


def schema() -> ProgramSchema:
    instructions = SchemaTable(
        "bonkswap.instructions",
        DiscriminatorLayout.ANCHOR,
        [
            _ix("CreatePool", CREATE_POOL, [
                ("lp_fee", FIXED_POINT),
                ("buyback_fee", FIXED_POINT),
                ("project_fee", FIXED_POINT),
                ("mercanti_fee", FIXED_POINT),
                ("initial_token_x", TOKEN),
                ("initial_token_y", TOKEN),
                ("bump", U8),
            ]),
            _ix("CreateProvider", CREATE_PROVIDER, [
                ("token_x_amount", TOKEN),
                ("token_y_amount", TOKEN),
                ("bump", U8),
            ]),
            _ix("CreateState", CREATE_STATE, [("nonce", U8)]),
            _ix("AddTokens", ADD_TOKENS, [("delta_x", TOKEN), ("delta_y", TOKEN)]),
            _ix("WithdrawBuyback", WITHDRAW_BUYBACK),
            instruction(
                "Swap", SWAP,
                [("delta_in", TOKEN), ("price_limit", FIXED_POINT), ("x_to_y", BOOL)],
                accounts=SWAP_ACCOUNTS,
            ),
            _ix("WithdrawShares", WITHDRAW_SHARES, [("shares", TOKEN)]),
            _ix("WithdrawLpFee", WITHDRAW_LP_FEE),
            _ix("WithdrawProjectFee", WITHDRAW_PROJECT_FEE),
            _ix("CreateFarm", CREATE_FARM, [("supply", TOKEN), ("duration", U64), ("bump", U8)]),
            _ix("CreateDualFarm", CREATE_DUAL_FARM, [
                ("supply_marco", TOKEN),
                ("supply_project_first", TOKEN),
                ("duration", U64),
                ("bump", U8),
            ]),
            _ix("CreateTripleFarm", CREATE_TRIPLE_FARM, [
                ("supply_marco", TOKEN),
                ("supply_project_first", TOKEN),
                ("supply_project_second", TOKEN),
                ("duration", U64),
                ("bump", U8),
            ]),
            _ix("WithdrawRewards", WITHDRAW_REWARDS),
            _ix("ClosePool", CLOSE_POOL),
            _ix("WithdrawMercantiFee", WITHDRAW_MERCANTI_FEE),
            _ix("AddSupply", ADD_SUPPLY, [
                ("supply_marco", TOKEN),
                ("supply_project_first", TOKEN),
                ("supply_project_second", TOKEN),
                ("duration", U64),
            ]),
            _ix("UpdateFees", UPDATE_FEES, [
                ("new_buyback_fee", FIXED_POINT),
                ("new_project_fee", FIXED_POINT),
                ("new_provider_fee", FIXED_POINT),
                ("new_mercanti_fee", FIXED_POINT),
            ]),
            _ix("ResetFarm", RESET_FARM),
            _ix("UpdateRewardTokens", UPDATE_REWARD_TOKENS),
        ],
        on_unrecognized=OnUnrecognized.RETURN_ERROR,
    )

    events = SchemaTable(
        "bonkswap.events",
        DiscriminatorLayout.ANCHOR_EVENT,
        [
            event("SwapEvent", SWAP_EVENT, [
                ("delta_in", U64),
                ("price_limit", U128),
                ("x_to_y", BOOL),
            ]),
        ],
        on_unrecognized=OnUnrecognized.RETURN_ERROR,
    )
    return ProgramSchema("bonkswap", PROGRAM_ID, instructions, events)
