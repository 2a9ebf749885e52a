"""
solana_idls/dispatch.py

Discriminator extraction and table lookup.

A discriminator layout is a static per-table setting. The only dynamic case is
ANCHOR_EVENT: Anchor programs that emit events through a self-CPI prefix every
log with a fixed 8-byte tag, so the real event discriminator sits at [8..16).
SELF_CPI only unwraps that exact tag; a foreign outer tag is kept as a 16-byte
key that matches nothing, which is stricter than reading [8..16) unconditionally.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .errors import TooShort

logger = logging.getLogger(__name__)

# sha256("anchor:event")[:8], written before the event discriminator by emit_cpi!
ANCHOR_EVENT_TAG = bytes.fromhex("e445a52e51cb9a1d")


class DiscriminatorLayout(enum.Enum):
    U8 = "u8"                      # 1-byte legacy tag
    ANCHOR = "anchor"              # 8-byte sha256 prefix
    ANCHOR_EVENT = "anchor_event"  # 8-byte, unwrapping the self-CPI tag when present
    SELF_CPI = "self_cpi"          # 16-byte, self-CPI tag required

    @property
    def width(self) -> int:
        """Width of the key stored in the lookup table."""
        return 1 if self is DiscriminatorLayout.U8 else 8

    @property
    def min_len(self) -> int:
        """Shortest buffer that can carry a discriminator."""
        if self is DiscriminatorLayout.U8:
            return 1
        if self is DiscriminatorLayout.SELF_CPI:
            return 16
        return 8


@dataclass(frozen=True)
class Dispatch:
    key: bytes
    payload: bytes
    wrapped: bool = False


def split(buffer: bytes, layout: DiscriminatorLayout) -> Dispatch:
    """
    Split ``buffer`` into (discriminator, payload) for the given layout.

    Raises TooShort(len(buffer)) when the buffer cannot hold the prefix.
    """
    data = bytes(buffer)
    if len(data) < layout.min_len:
        raise TooShort(len(data), layout.min_len)

    if layout is DiscriminatorLayout.U8:
        return Dispatch(data[:1], data[1:])

    if layout is DiscriminatorLayout.ANCHOR:
        return Dispatch(data[:8], data[8:])

    if layout is DiscriminatorLayout.ANCHOR_EVENT:
        if len(data) >= 16 and data[:8] == ANCHOR_EVENT_TAG:
            return Dispatch(data[8:16], data[16:], wrapped=True)
        return Dispatch(data[:8], data[8:])

    # SELF_CPI: a foreign outer tag yields a 16-byte key that no 8-byte entry can equal.
    if data[:8] == ANCHOR_EVENT_TAG:
        return Dispatch(data[8:16], data[16:], wrapped=True)
    return Dispatch(data[:16], data[16:], wrapped=False)


class DiscriminatorDispatcher:
    """
    Selects a table entry for a buffer by exact discriminator equality.

    The table is a plain mapping of discriminator bytes to entries; lookup is
    a single dict access.
    """

    def __init__(self, layout: DiscriminatorLayout, table: Mapping[bytes, Any], name: str = ""):
        self.layout = layout
        self.name = name
        self._table = table

    def dispatch(self, buffer: bytes) -> Dispatch:
        return split(buffer, self.layout)

    def lookup(self, key: bytes) -> Optional[Any]:
        entry = self._table.get(key)
        if entry is None:
            logger.debug(f"[dispatch] {self.name or self.layout.value}: no entry for {key.hex()}")
        return entry

    def select(self, buffer: bytes):
        """Return (dispatch, entry or None)."""
        d = self.dispatch(buffer)
        return d, self.lookup(d.key)
