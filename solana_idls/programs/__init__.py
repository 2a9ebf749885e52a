"""Built-in program schemas, keyed by program name."""
from typing import Callable, Dict

from ..registry import ProgramSchema, Registry
from . import bonkswap, jupiter_v6, pumpfun, pumpfun_amm, raydium_amm_v4, raydium_cpmm, raydium_launchpad

BUILTIN_PROGRAMS: Dict[str, Callable[[], ProgramSchema]] = {
    "bonkswap": bonkswap.schema,
    "jupiter_v6": jupiter_v6.schema,
    "pumpfun": pumpfun.schema,
    "pumpfun_amm": pumpfun_amm.schema,
    "raydium_amm_v4": raydium_amm_v4.schema,
    "raydium_cpmm": raydium_cpmm.schema,
    "raydium_launchpad": raydium_launchpad.schema,
}


def builtin_registry() -> Registry:
    return Registry(factory() for factory in BUILTIN_PROGRAMS.values())
