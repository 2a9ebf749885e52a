import pytest

from solana_idls.programs import builtin_registry
from solana_idls.pubkey import Pubkey


@pytest.fixture(scope="session")
def registry():
    return builtin_registry()


def make_key(n: int) -> Pubkey:
    """Deterministic distinct key: 31 zero bytes followed by ``n``."""
    return Pubkey(bytes(31) + bytes([n]))


@pytest.fixture
def keys():
    return [make_key(i + 1) for i in range(32)]
