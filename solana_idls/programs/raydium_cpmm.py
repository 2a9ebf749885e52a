"""
solana_idls/programs/raydium_cpmm.py

Raydium CPMM events. SwapEvent gained mint and creator-fee fields (V2)
without a new discriminator.
"""
from ..codec import BOOL, PUBKEY, U8, U64
from ..dispatch import DiscriminatorLayout
from ..payload import PayloadDecoder
from ..registry import OnUnrecognized, ProgramSchema, SchemaTable, event, versioned

PROGRAM_ID = "CPMMoo8L3F4NbTegBCKVNunggL7H1ZpdTHKxQB5qKP1C"

LP_CHANGE_EVENT = bytes([121, 163, 205, 201, 57, 218, 117, 60])
SWAP_EVENT = bytes.fromhex("40c6cde8260871e2")

SWAP_EVENT_V1_FIELDS = [
    ("pool_id", PUBKEY),
    ("input_vault_before", U64),
    ("output_vault_before", U64),
    ("input_amount", U64),
    ("output_amount", U64),
    ("input_transfer_fee", U64),
    ("output_transfer_fee", U64),
    ("base_input", BOOL),
]
SWAP_EVENT_V2_FIELDS = SWAP_EVENT_V1_FIELDS + [
    ("input_mint", PUBKEY),
    ("output_mint", PUBKEY),
    ("trade_fee", U64),
    ("creator_fee", U64),
    ("creator_fee_on_input", BOOL),
]


def schema() -> ProgramSchema:
    events = SchemaTable(
        "raydium_cpmm.events",
        DiscriminatorLayout.ANCHOR_EVENT,
        [
            event("LpChangeEvent", LP_CHANGE_EVENT, [
                ("pool_id", PUBKEY),
                ("lp_amount_before", U64),
                ("token_0_vault_before", U64),
                ("token_1_vault_before", U64),
                ("token_0_amount", U64),
                ("token_1_amount", U64),
                ("token_0_transfer_fee", U64),
                ("token_1_transfer_fee", U64),
                ("change_type", U8),
            ]),
            versioned(
                "SwapEvent", SWAP_EVENT,
                PayloadDecoder("SwapEventV1", SWAP_EVENT_V1_FIELDS),
                PayloadDecoder("SwapEventV2", SWAP_EVENT_V2_FIELDS),
            ),
        ],
        # unrecognized CPMM logs are common (other Anchor events share the tx)
        on_unrecognized=OnUnrecognized.RETURN_UNKNOWN_VARIANT,
    )
    return ProgramSchema("raydium_cpmm", PROGRAM_ID, events=events)
