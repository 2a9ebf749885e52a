"""
solana_idls/config.py

Decoder configuration (YAML file and environment) and registry construction.

Example solana_idls.yaml:

    on_unrecognized: unknown
    overrides:
      pumpfun_amm: error
    programs: [pumpfun_amm, raydium_amm_v4]
    idl_paths: [idls/extra_program.json]
    log_level: INFO
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from .idl import load_idl
from .programs import BUILTIN_PROGRAMS
from .registry import OnUnrecognized, Registry

logger = logging.getLogger(__name__)

ENV_CONFIG = "SOLANA_IDLS_CONFIG"
ENV_ON_UNRECOGNIZED = "SOLANA_IDLS_ON_UNRECOGNIZED"
ENV_LOG_LEVEL = "SOLANA_IDLS_LOG_LEVEL"

_KNOWN_KEYS = {"on_unrecognized", "overrides", "programs", "idl_paths", "log_level"}
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class DecoderConfig:
    """
    Registry settings.

    ``on_unrecognized`` (when set) replaces every table's own miss policy;
    ``overrides`` then applies per program name. An empty ``programs`` means
    every built-in program.
    """

    on_unrecognized: Optional[OnUnrecognized] = None
    overrides: Mapping[str, OnUnrecognized] = field(default_factory=dict)
    programs: Tuple[str, ...] = ()
    idl_paths: Tuple[str, ...] = ()
    log_level: str = "INFO"

    def __post_init__(self):
        if self.log_level not in _LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {'|'.join(_LOG_LEVELS)}, got: {self.log_level}")
        unknown = [p for p in self.programs if p not in BUILTIN_PROGRAMS]
        if unknown:
            raise ConfigError(f"Unknown programs: {', '.join(unknown)} (known: {', '.join(sorted(BUILTIN_PROGRAMS))})")

    def policy_for(self, program_name: str) -> Optional[OnUnrecognized]:
        return self.overrides.get(program_name, self.on_unrecognized)


def _parse_policy(value: Any, where: str) -> OnUnrecognized:
    try:
        return OnUnrecognized.parse(value)
    except ValueError as e:
        raise ConfigError(f"{where}: {e}") from e


def _str_list(raw: Dict[str, Any], key: str) -> Tuple[str, ...]:
    value = raw.get(key) or []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{key} must be a list of strings")
    return tuple(value)


def config_from_dict(raw: Mapping[str, Any], base_dir: Optional[Path] = None) -> DecoderConfig:
    """Validate a parsed config mapping; relative idl_paths resolve against ``base_dir``."""
    if not isinstance(raw, Mapping):
        raise ConfigError("Config must be a YAML mapping (dict at top-level)")
    extra = set(raw) - _KNOWN_KEYS
    if extra:
        raise ConfigError(f"Unknown config keys: {', '.join(sorted(extra))}")

    policy = raw.get("on_unrecognized")
    overrides_raw = raw.get("overrides") or {}
    if not isinstance(overrides_raw, Mapping):
        raise ConfigError("overrides must be a mapping of program name -> unknown|error")

    idl_paths = _str_list(dict(raw), "idl_paths")
    if base_dir is not None:
        idl_paths = tuple(str(p if Path(p).is_absolute() else base_dir / p) for p in idl_paths)

    return DecoderConfig(
        on_unrecognized=None if policy is None else _parse_policy(policy, "on_unrecognized"),
        overrides={str(k): _parse_policy(v, f"overrides.{k}") for k, v in overrides_raw.items()},
        programs=_str_list(dict(raw), "programs"),
        idl_paths=idl_paths,
        log_level=str(raw.get("log_level", "INFO")).upper(),
    )


def load_config(path: str | Path) -> DecoderConfig:
    """Load and validate a decoder config YAML file."""
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config not found: {p}")
    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {p}: {e}") from e
    return config_from_dict(raw or {}, base_dir=p.parent)


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> DecoderConfig:
    """
    Build config from the environment.

    SOLANA_IDLS_CONFIG points at a YAML file; SOLANA_IDLS_ON_UNRECOGNIZED and
    SOLANA_IDLS_LOG_LEVEL override the matching keys.
    """
    env = os.environ if environ is None else environ
    path = env.get(ENV_CONFIG)
    cfg = load_config(path) if path else DecoderConfig()

    policy = env.get(ENV_ON_UNRECOGNIZED)
    if policy:
        cfg = replace(cfg, on_unrecognized=_parse_policy(policy, ENV_ON_UNRECOGNIZED))
    level = env.get(ENV_LOG_LEVEL)
    if level:
        cfg = replace(cfg, log_level=level.upper())
    return cfg


def build_registry(config: Optional[DecoderConfig] = None) -> Registry:
    """Instantiate the selected built-in programs plus any extra IDLs."""
    cfg = config or DecoderConfig()
    names = cfg.programs or tuple(sorted(BUILTIN_PROGRAMS))
    schemas = [BUILTIN_PROGRAMS[n]() for n in names]

    for path in cfg.idl_paths:
        try:
            schemas.append(load_idl(path))
        except (OSError, ValueError, KeyError) as e:
            raise ConfigError(f"Failed to load IDL {path}: {e}") from e

    known = {s.name for s in schemas}
    unknown = set(cfg.overrides) - known
    if unknown:
        raise ConfigError(f"overrides name programs that are not loaded: {', '.join(sorted(unknown))}")

    out = []
    for schema in schemas:
        policy = cfg.policy_for(schema.name)
        out.append(schema if policy is None else schema.with_policy(policy))
    logger.debug(f"[config] building registry: {', '.join(s.name for s in out)}")
    try:
        return Registry(out)
    except ValueError as e:
        raise ConfigError(f"Cannot build registry: {e}") from e


def configure_logging(cfg: DecoderConfig) -> None:
    logging.basicConfig(
        level=getattr(logging, cfg.log_level),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


