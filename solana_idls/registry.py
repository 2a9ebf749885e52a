"""
solana_idls/registry.py

Schema tables and the program registry.

A SchemaTable holds every entry for one program's instruction stream or event
stream under a single discriminator layout. A Registry is built once from
ProgramSchema objects and is read-only afterwards; decode calls never mutate
it, so one instance can be shared across threads.
"""
import enum
import logging
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from .accounts import AccountRef, AccountSchema, NamedAccounts, resolve_accounts
from .codec import Fields
from .dispatch import Dispatch, DiscriminatorDispatcher, DiscriminatorLayout
from .errors import LengthMismatch, Unrecognized
from .payload import DecodedPayload, DecodedValue, PayloadDecoder, UnknownPayload
from .pubkey import Pubkey

logger = logging.getLogger(__name__)


class OnUnrecognized(enum.Enum):
    """What a table returns for a discriminator it has no entry for."""

    RETURN_UNKNOWN_VARIANT = "unknown"
    RETURN_ERROR = "error"

    @classmethod
    def parse(cls, value: Union["OnUnrecognized", str]) -> "OnUnrecognized":
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if text in (member.value, member.name.lower()):
                return member
        raise ValueError(f"on_unrecognized must be one of unknown|error, got: {value!r}")


Discriminator = Union[bytes, bytearray, str, int, Sequence[int]]


def to_discriminator(value: Discriminator) -> bytes:
    """Accept bytes, hex text, a single tag byte or a list of byte values."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        return bytes.fromhex(value)
    if isinstance(value, int):
        return bytes([value])
    return bytes(value)


@dataclass(frozen=True)
class SchemaEntry:
    """
    One instruction or event kind.

    ``decoders`` holds more than one PayloadDecoder only for kinds whose
    layout grew over time under the same discriminator; the version is picked
    by exact payload length.
    """

    name: str
    discriminator: bytes
    decoders: Tuple[PayloadDecoder, ...]
    accounts: Optional[AccountSchema] = None

    def __post_init__(self):
        if not self.decoders:
            raise ValueError(f"{self.name}: schema entry needs a payload decoder")
        if len(self.decoders) > 1:
            sizes = [d.fixed_size for d in self.decoders]
            if None in sizes:
                raise ValueError(f"{self.name}: versioned decoders must have a fixed size")
            if len(set(sizes)) != len(sizes):
                raise ValueError(f"{self.name}: versioned decoders share a payload size")

    def decoder_for(self, payload: bytes) -> PayloadDecoder:
        if len(self.decoders) == 1:
            return self.decoders[0]
        for d in self.decoders:
            if d.fixed_size == len(payload):
                return d
        raise LengthMismatch(max(d.fixed_size for d in self.decoders), len(payload))


def _account_schema(name: str, accounts: Union[AccountSchema, Sequence[str], None]) -> Optional[AccountSchema]:
    if accounts is None or isinstance(accounts, AccountSchema):
        return accounts
    return AccountSchema.from_layout(f"{name}Accounts", accounts)


def instruction(
    name: str,
    discriminator: Discriminator,
    fields: Fields = (),
    accounts: Union[AccountSchema, Sequence[str], None] = None,
    exact_length: Optional[int] = None,
) -> SchemaEntry:
    return SchemaEntry(
        name,
        to_discriminator(discriminator),
        (PayloadDecoder(name, fields, exact_length=exact_length),),
        _account_schema(name, accounts),
    )


def event(name: str, discriminator: Discriminator, fields: Fields = ()) -> SchemaEntry:
    return SchemaEntry(name, to_discriminator(discriminator), (PayloadDecoder(name, fields),))


def versioned(
    name: str,
    discriminator: Discriminator,
    *decoders: PayloadDecoder,
    accounts: Union[AccountSchema, Sequence[str], None] = None,
) -> SchemaEntry:
    return SchemaEntry(name, to_discriminator(discriminator), tuple(decoders), _account_schema(name, accounts))


class SchemaTable:
    """
    Discriminator -> SchemaEntry table for one stream of one program.

    Args:
        name: Label used in logs and Unrecognized errors
        layout: Discriminator layout shared by every entry
        entries: Schema entries; discriminators and names must be unique
        on_unrecognized: Default miss policy for this table
    """

    def __init__(
        self,
        name: str,
        layout: DiscriminatorLayout,
        entries: Iterable[SchemaEntry],
        on_unrecognized: OnUnrecognized = OnUnrecognized.RETURN_ERROR,
    ):
        by_disc: Dict[bytes, SchemaEntry] = {}
        by_name: Dict[str, SchemaEntry] = {}
        for e in entries:
            if len(e.discriminator) != layout.width:
                raise ValueError(
                    f"{name}: {e.name} discriminator is {len(e.discriminator)} bytes, "
                    f"layout {layout.value} needs {layout.width}"
                )
            if e.discriminator in by_disc:
                raise ValueError(
                    f"{name}: {e.name} reuses discriminator {e.discriminator.hex()} "
                    f"of {by_disc[e.discriminator].name}"
                )
            if e.name in by_name:
                raise ValueError(f"{name}: duplicate entry name {e.name}")
            by_disc[e.discriminator] = e
            by_name[e.name] = e

        self.name = name
        self.layout = layout
        self.on_unrecognized = OnUnrecognized.parse(on_unrecognized)
        self._entries: Mapping[bytes, SchemaEntry] = MappingProxyType(by_disc)
        self._by_name: Mapping[str, SchemaEntry] = MappingProxyType(by_name)
        self._dispatcher = DiscriminatorDispatcher(layout, self._entries, name)

    @property
    def entries(self) -> Mapping[bytes, SchemaEntry]:
        return self._entries

    def entry(self, name: str) -> SchemaEntry:
        try:
            return self._by_name[name]
        except KeyError:
            raise KeyError(f"{self.name} has no entry named {name!r}") from None

    def entry_for(self, discriminator: bytes) -> Optional[SchemaEntry]:
        return self._entries.get(bytes(discriminator))

    def select(self, data: bytes) -> Tuple[Dispatch, Optional[SchemaEntry]]:
        return self._dispatcher.select(data)

    def decode(self, data: bytes, on_unrecognized: Optional[OnUnrecognized] = None) -> DecodedValue:
        policy = self.on_unrecognized if on_unrecognized is None else OnUnrecognized.parse(on_unrecognized)
        d, entry = self.select(data)
        if entry is None:
            if policy is OnUnrecognized.RETURN_ERROR:
                raise Unrecognized(d.key, self.name)
            return UnknownPayload(d.key, d.payload)
        return entry.decoder_for(d.payload).decode(d.payload, d.key)

    def with_policy(self, on_unrecognized: OnUnrecognized) -> "SchemaTable":
        return SchemaTable(self.name, self.layout, self._entries.values(), on_unrecognized)

    def __contains__(self, discriminator: Any) -> bool:
        return bytes(discriminator) in self._entries

    def __iter__(self) -> Iterator[SchemaEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"SchemaTable({self.name!r}, {self.layout.value}, entries={len(self)})"


@dataclass(frozen=True)
class ProgramSchema:
    name: str
    program_id: str
    instructions: Optional[SchemaTable] = None
    events: Optional[SchemaTable] = None

    def __post_init__(self):
        # Normalizes bytes / Pubkey ids to base58 text; rejects malformed ids.
        object.__setattr__(self, "program_id", str(Pubkey.from_any(self.program_id)))

    def with_policy(self, on_unrecognized: OnUnrecognized) -> "ProgramSchema":
        return replace(
            self,
            instructions=None if self.instructions is None else self.instructions.with_policy(on_unrecognized),
            events=None if self.events is None else self.events.with_policy(on_unrecognized),
        )

    def tables(self) -> List[SchemaTable]:
        return [t for t in (self.instructions, self.events) if t is not None]


@dataclass(frozen=True)
class DecodedInstruction:
    """Payload and accounts of one instruction, paired."""

    program: str
    payload: DecodedValue
    accounts: Optional[NamedAccounts] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "program": self.program,
            "payload": self.payload.to_dict(),
            "accounts": None if self.accounts is None else self.accounts.to_dict(),
        }


ProgramRef = Union[str, bytes, Pubkey]


class Registry:
    """
    Read-only collection of program schemas, addressable by program id
    (base58, bytes or Pubkey) or by program name.
    """

    def __init__(self, programs: Iterable[ProgramSchema]):
        by_id: Dict[str, ProgramSchema] = {}
        by_name: Dict[str, ProgramSchema] = {}
        for p in programs:
            if p.program_id in by_id:
                raise ValueError(f"program id registered twice: {p.program_id}")
            if p.name in by_name:
                raise ValueError(f"program name registered twice: {p.name}")
            by_id[p.program_id] = p
            by_name[p.name] = p
        self._by_id: Mapping[str, ProgramSchema] = MappingProxyType(by_id)
        self._by_name: Mapping[str, ProgramSchema] = MappingProxyType(by_name)
        logger.info(f"[registry] {len(by_id)} programs: {', '.join(sorted(by_name))}")

    @property
    def programs(self) -> Mapping[str, ProgramSchema]:
        return self._by_id

    def get(self, program: ProgramRef) -> ProgramSchema:
        if isinstance(program, str):
            found = self._by_id.get(program) or self._by_name.get(program)
        else:
            found = self._by_id.get(str(Pubkey.from_any(program)))
        if found is None:
            raise KeyError(f"program not registered: {program!r}")
        return found

    def __contains__(self, program: Any) -> bool:
        try:
            self.get(program)
        except (KeyError, TypeError, ValueError):
            return False
        return True

    def __iter__(self) -> Iterator[ProgramSchema]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def _table(self, program: ProgramRef, kind: str) -> SchemaTable:
        schema = self.get(program)
        table = schema.instructions if kind == "instructions" else schema.events
        if table is None:
            raise KeyError(f"{schema.name} has no {kind} table")
        return table

    def decode_payload(
        self, program: ProgramRef, data: bytes, on_unrecognized: Optional[OnUnrecognized] = None
    ) -> DecodedValue:
        return self._table(program, "instructions").decode(data, on_unrecognized)

    def decode_event(
        self, program: ProgramRef, data: bytes, on_unrecognized: Optional[OnUnrecognized] = None
    ) -> DecodedValue:
        return self._table(program, "events").decode(data, on_unrecognized)

    def resolve_accounts(
        self, program: ProgramRef, payload: DecodedValue, accounts: Sequence[AccountRef]
    ) -> Optional[NamedAccounts]:
        """Resolve ``accounts`` with the schema of the decoded instruction, if it has one."""
        if not isinstance(payload, DecodedPayload):
            return None
        entry = self._table(program, "instructions").entry_for(payload.discriminator)
        if entry is None or entry.accounts is None:
            return None
        return resolve_accounts(accounts, entry.accounts)

    def decode_instruction(
        self,
        program: ProgramRef,
        data: bytes,
        accounts: Optional[Sequence[AccountRef]] = None,
        on_unrecognized: Optional[OnUnrecognized] = None,
    ) -> DecodedInstruction:
        schema = self.get(program)
        payload = self.decode_payload(schema.program_id, data, on_unrecognized)
        named = None
        if accounts is not None:
            named = self.resolve_accounts(schema.program_id, payload, accounts)
        return DecodedInstruction(schema.name, payload, named)
