"""
solana_idls package

Decoding engine for Solana program instructions and events: discriminator
dispatch, Borsh payload decoding, positional account resolution, and a
read-only registry of program schemas.
"""
from .accounts import AccountSchema, AccountSlot, NamedAccounts, resolve_accounts
from .config import DecoderConfig, build_registry, config_from_env, load_config
from .cursor import ByteCursor
from .dispatch import ANCHOR_EVENT_TAG, DiscriminatorDispatcher, DiscriminatorLayout
from .errors import (
    DecodeError,
    InvalidAccountKey,
    InvalidString,
    InvalidTag,
    LengthMismatch,
    MissingAccount,
    TooShort,
    Unrecognized,
)
from .idl import load_idl
from .payload import DecodedPayload, PayloadDecoder, UnknownPayload
from .programs import BUILTIN_PROGRAMS, builtin_registry
from .pubkey import Pubkey
from .registry import (
    DecodedInstruction,
    OnUnrecognized,
    ProgramSchema,
    Registry,
    SchemaEntry,
    SchemaTable,
    event,
    instruction,
    versioned,
)

__all__ = [
    'ANCHOR_EVENT_TAG',
    'AccountSchema',
    'AccountSlot',
    'BUILTIN_PROGRAMS',
    'ByteCursor',
    'DecodeError',
    'DecodedInstruction',
    'DecodedPayload',
    'DecoderConfig',
    'DiscriminatorDispatcher',
    'DiscriminatorLayout',
    'InvalidAccountKey',
    'InvalidString',
    'InvalidTag',
    'LengthMismatch',
    'MissingAccount',
    'NamedAccounts',
    'OnUnrecognized',
    'PayloadDecoder',
    'ProgramSchema',
    'Pubkey',
    'Registry',
    'SchemaEntry',
    'SchemaTable',
    'TooShort',
    'UnknownPayload',
    'Unrecognized',
    'build_registry',
    'builtin_registry',
    'config_from_env',
    'event',
    'instruction',
    'load_config',
    'load_idl',
    'resolve_accounts',
    'versioned',
]
