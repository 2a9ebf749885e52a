"""
solana_idls/idl.py

Anchor IDL JSON -> ProgramSchema.

Handles both IDL generations:
- current (anchor >= 0.30): top-level "address", explicit "discriminator"
  arrays, "pubkey", {"defined": {"name": ...}}, "optional" accounts
- legacy: "publicKey", {"defined": "Name"}, "isOptional", camelCase names,
  nested account groups, discriminators derived from sha256
"""
import hashlib
import json
import logging
import re
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .accounts import AccountSchema, AccountSlot
from .codec import (
    PRIMITIVES,
    Array,
    Enum,
    FieldType,
    FixedBytes,
    Option,
    Struct,
    TupleType,
    Vec,
)
from .dispatch import DiscriminatorLayout
from .registry import OnUnrecognized, ProgramSchema, SchemaEntry, SchemaTable, event, instruction

logger = logging.getLogger(__name__)

IdlSource = Union[str, Path, Mapping[str, Any]]

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def pascal_case(name: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in snake_case(name).split("_"))


def sighash(namespace: str, name: str) -> bytes:
    """Anchor discriminator: first 8 bytes of sha256("<namespace>:<name>")."""
    return hashlib.sha256(f"{namespace}:{name}".encode("utf-8")).digest()[:8]


def instruction_discriminator(name: str) -> bytes:
    return sighash("global", snake_case(name))


def event_discriminator(name: str) -> bytes:
    return sighash("event", name)


class _TypeResolver:
    """Maps IDL type expressions to FieldTypes, resolving "defined" lazily."""

    def __init__(self, type_defs: Sequence[Mapping[str, Any]]):
        self._defs = {d["name"]: d for d in type_defs}
        self._cache: Dict[str, FieldType] = {}
        self._resolving: set = set()

    def has(self, name: str) -> bool:
        return name in self._defs

    def resolve(self, t: Any) -> FieldType:
        if isinstance(t, str):
            if t in PRIMITIVES:
                return PRIMITIVES[t]
            raise ValueError(f"Unsupported IDL type: {t!r}")
        if not isinstance(t, Mapping):
            raise ValueError(f"Malformed IDL type: {t!r}")
        if "vec" in t:
            return Vec(self.resolve(t["vec"]))
        if "option" in t:
            return Option(self.resolve(t["option"]))
        if "coption" in t:
            return Option(self.resolve(t["coption"]), tag_width=4)
        if "array" in t:
            inner, length = t["array"]
            if not isinstance(length, int):
                raise ValueError(f"Generic array length not supported: {length!r}")
            if inner == "u8":
                return FixedBytes(length)
            return Array(self.resolve(inner), length)
        if "defined" in t:
            ref = t["defined"]
            return self.defined(ref["name"] if isinstance(ref, Mapping) else ref)
        raise ValueError(f"Unsupported IDL type: {t!r}")

    def defined(self, name: str) -> FieldType:
        if name in self._cache:
            return self._cache[name]
        if name not in self._defs:
            raise KeyError(f"IDL type not defined: {name}")
        if name in self._resolving:
            raise ValueError(f"Recursive IDL type: {name}")
        self._resolving.add(name)
        try:
            ft = self._build(self._defs[name])
        finally:
            self._resolving.discard(name)
        self._cache[name] = ft
        return ft

    def fields(self, fields: Sequence[Any]) -> List[Tuple[str, FieldType]]:
        return [(snake_case(f["name"]), self.resolve(f["type"])) for f in fields]

    def _build(self, d: Mapping[str, Any]) -> FieldType:
        body = d["type"]
        kind = body.get("kind")
        if kind == "struct":
            return self._struct_like(d["name"], body.get("fields") or [])
        if kind == "enum":
            variants = []
            for v in body["variants"]:
                fs = v.get("fields")
                variants.append((v["name"], None if not fs else self._struct_like(v["name"], fs)))
            return Enum(d["name"], variants)
        if kind == "type" and "alias" in body:
            return self.resolve(body["alias"])
        raise ValueError(f"Unsupported IDL type kind {kind!r} for {d['name']}")

    def _struct_like(self, name: str, fields: Sequence[Any]) -> FieldType:
        # Tuple structs / tuple variants list bare types instead of {name, type}.
        if fields and not (isinstance(fields[0], Mapping) and "name" in fields[0]):
            return TupleType([self.resolve(f) for f in fields])
        return Struct(name, self.fields(fields))


def _flatten_accounts(
    items: Sequence[Mapping[str, Any]], out: List[Tuple[str, str, bool]], group: str = ""
) -> None:
    for a in items:
        if "accounts" in a:
            inner = snake_case(a["name"])
            _flatten_accounts(a["accounts"], out, group=f"{group}_{inner}" if group else inner)
            continue
        out.append((snake_case(a["name"]), group, bool(a.get("optional") or a.get("isOptional"))))


def _unique_slot_names(flat: Sequence[Tuple[str, str, bool]]) -> List[str]:
    """Group members whose name appears more than once take their group as a prefix."""
    counts = Counter(n for n, _, _ in flat)
    names = [f"{g}_{n}" if g and counts[n] > 1 else n for n, g, _ in flat]
    counts = Counter(names)
    return [f"{n}_{i}" if counts[n] > 1 else n for i, n in enumerate(names)]


def _account_schema(ix_name: str, items: Sequence[Mapping[str, Any]]) -> Optional[AccountSchema]:
    flat: List[Tuple[str, str, bool]] = []
    _flatten_accounts(items, flat)
    if not flat:
        return None
    names = _unique_slot_names(flat)
    return AccountSchema(
        f"{ix_name}Accounts",
        [AccountSlot(n, i, required=not flat[i][2]) for i, n in enumerate(names)],
    )


def _read_source(source: IdlSource) -> Mapping[str, Any]:
    if isinstance(source, Mapping):
        return source
    if isinstance(source, str) and source.lstrip().startswith("{"):
        return json.loads(source)
    p = Path(source)
    return json.loads(p.read_text(encoding="utf-8"))


def load_idl(
    source: IdlSource,
    program_id: Optional[str] = None,
    name: Optional[str] = None,
    on_unrecognized: OnUnrecognized = OnUnrecognized.RETURN_ERROR,
) -> ProgramSchema:
    """
    Build a ProgramSchema from an Anchor IDL.

    Args:
        source: Path to an IDL JSON file, the JSON text, or the parsed dict
        program_id: Overrides the address recorded in the IDL
        name: Overrides the program name recorded in the IDL
        on_unrecognized: Miss policy for both generated tables
    """
    idl = _read_source(source)
    metadata = idl.get("metadata") or {}
    pid = program_id or idl.get("address") or metadata.get("address")
    if not pid:
        raise ValueError("IDL has no address; pass program_id")
    pname = snake_case(name or metadata.get("name") or idl.get("name") or pid)

    # Legacy IDLs describe account layouts inline; they may be referenced as defined types.
    account_types = [a for a in idl.get("accounts") or [] if "type" in a]
    types = _TypeResolver(list(idl.get("types") or []) + account_types)

    ix_entries: List[SchemaEntry] = []
    for ix in idl.get("instructions") or []:
        disc = ix.get("discriminator")
        ix_entries.append(
            instruction(
                pascal_case(ix["name"]),
                bytes(disc) if disc else instruction_discriminator(ix["name"]),
                types.fields(ix.get("args") or []),
                accounts=_account_schema(pascal_case(ix["name"]), ix.get("accounts") or []),
            )
        )

    ev_entries: List[SchemaEntry] = []
    for ev in idl.get("events") or []:
        disc = ev.get("discriminator")
        if "fields" in ev:
            fields = types.fields(ev["fields"])
        elif types.has(ev["name"]):
            struct = types.defined(ev["name"])
            if not isinstance(struct, Struct):
                raise ValueError(f"Event {ev['name']} is not a struct")
            fields = list(struct.fields)
        else:
            raise KeyError(f"IDL event has no field definition: {ev['name']}")
        ev_entries.append(
            event(ev["name"], bytes(disc) if disc else event_discriminator(ev["name"]), fields)
        )

    logger.debug(f"[idl] {pname}: {len(ix_entries)} instructions, {len(ev_entries)} events")
    return ProgramSchema(
        name=pname,
        program_id=pid,
        instructions=SchemaTable(
            f"{pname}.instructions", DiscriminatorLayout.ANCHOR, ix_entries, on_unrecognized
        ) if ix_entries else None,
        events=SchemaTable(
            f"{pname}.events", DiscriminatorLayout.ANCHOR_EVENT, ev_entries, on_unrecognized
        ) if ev_entries else None,
    )
