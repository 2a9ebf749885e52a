"""
solana_idls/accounts.py

Positional account resolution.

An instruction's account list is ordered by the caller; the schema fixes which
position carries which name. Optional slots are present exactly when the list
is long enough to reach them.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple, Union

from .errors import InvalidAccountKey, MissingAccount
from .pubkey import Pubkey

logger = logging.getLogger(__name__)

AccountRef = Union[Pubkey, bytes, bytearray, str]


@dataclass(frozen=True)
class AccountSlot:
    name: str
    position: int
    required: bool = True


class AccountSchema:
    """
    Ordered named slots for one instruction kind.

    Use ``AccountSchema.from_layout("SwapAccounts", ["amm", "referrer?"])``
    where a trailing ``?`` marks an optional slot and list order is position.
    """

    def __init__(self, name: str, slots: Iterable[AccountSlot]):
        ordered = tuple(sorted(slots, key=lambda s: s.position))
        names = [s.name for s in ordered]
        positions = [s.position for s in ordered]
        if len(set(names)) != len(names):
            raise ValueError(f"{name}: duplicate account slot name")
        if len(set(positions)) != len(positions):
            raise ValueError(f"{name}: duplicate account slot position")
        if positions and positions[0] < 0:
            raise ValueError(f"{name}: negative account slot position")
        self.name = name
        self.slots: Tuple[AccountSlot, ...] = ordered

    @classmethod
    def from_layout(cls, name: str, layout: Sequence[str]) -> "AccountSchema":
        slots = []
        for i, entry in enumerate(layout):
            optional = entry.endswith("?")
            slots.append(AccountSlot(entry.rstrip("?"), i, required=not optional))
        return cls(name, slots)

    @property
    def required_count(self) -> int:
        return sum(1 for s in self.slots if s.required)

    def __len__(self) -> int:
        return len(self.slots)

    def __repr__(self) -> str:
        return f"AccountSchema({self.name!r}, slots={len(self.slots)})"


class NamedAccounts:
    """Resolved accounts; optional names map to None when absent."""

    __slots__ = ("name", "_accounts")

    def __init__(self, name: str, accounts: Dict[str, Optional[Pubkey]]):
        self.name = name
        self._accounts = dict(accounts)

    def __getattr__(self, item: str) -> Optional[Pubkey]:
        if item.startswith("_"):
            raise AttributeError(item)
        try:
            return self._accounts[item]
        except KeyError:
            raise AttributeError(f"{self.name} has no account {item!r}") from None

    def __getitem__(self, item: str) -> Optional[Pubkey]:
        return self._accounts[item]

    def __contains__(self, item: str) -> bool:
        return item in self._accounts

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, NamedAccounts):
            return NotImplemented
        return self.name == other.name and self._accounts == other._accounts

    def __repr__(self) -> str:
        return f"NamedAccounts({self.name!r}, {len(self._accounts)} accounts)"

    def items(self):
        return self._accounts.items()

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {k: (None if v is None else str(v)) for k, v in self._accounts.items()}


def _to_pubkey(ref: AccountRef, slot: AccountSlot) -> Optional[Pubkey]:
    try:
        return Pubkey.from_any(ref)
    except (TypeError, ValueError) as e:
        if not slot.required:
            logger.debug(f"[accounts] optional slot {slot.name}@{slot.position} is not a pubkey: {e}")
            return None
        raise InvalidAccountKey(slot.name, slot.position, str(e)) from e


def resolve_accounts(account_list: Sequence[AccountRef], schema: AccountSchema) -> NamedAccounts:
    """
    Map ``account_list`` onto ``schema``'s named slots.

    Raises MissingAccount(name, index) for the first required slot past the
    end of the list, and InvalidAccountKey when a required slot does not hold
    a 32-byte key. Optional slots that are absent or malformed become None.
    Accounts beyond the last slot are ignored.
    """
    n = len(account_list)
    resolved: Dict[str, Optional[Pubkey]] = {}
    for slot in schema.slots:
        if slot.position < n:
            resolved[slot.name] = _to_pubkey(account_list[slot.position], slot)
        elif slot.required:
            raise MissingAccount(slot.name, slot.position)
        else:
            resolved[slot.name] = None
    return NamedAccounts(schema.name, resolved)
