"""
Fail-closed loader for YAML stream definitions.

Layout:

    assets:            {asset_id: decimals, ...}
    feeds:             {feed_id: {price: int, decimals: int}, ...}
    stream:            creation terms (see `StreamTerms`)
    simulation:        optional; {start: int, deposit: int, claims: [duration, ...]}

Durations accept integer seconds or strings such as "90s", "15m", "12h", "30d".
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from ..core.oracle import PriceQuote
from .factory import StreamTerms


_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_UNIT_SECONDS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}
_DURATION_FIELDS = ("claim_cooldown", "sweep_cooldown", "duration", "notice_period")


class ConfigLoadError(ValueError):
    """Raised when a stream definition is malformed."""


@dataclass(frozen=True)
class Simulation:
    start: int
    deposit: int | None
    claims: tuple[int, ...]


@dataclass(frozen=True)
class StreamDefinition:
    assets: dict[str, int]
    feeds: dict[str, PriceQuote]
    terms: StreamTerms
    simulation: Simulation | None = None


def _require_mapping(obj: Any, *, name: str) -> dict[str, Any]:
    if not isinstance(obj, dict):
        raise ConfigLoadError(f"{name} must be a mapping")
    return obj


def _require_str(obj: Any, *, name: str) -> str:
    if not isinstance(obj, str) or not obj.strip():
        raise ConfigLoadError(f"{name} must be a non-empty string")
    return obj.strip()


def _require_int(obj: Any, *, name: str) -> int:
    if not isinstance(obj, int) or isinstance(obj, bool):
        raise ConfigLoadError(f"{name} must be an integer")
    return obj


def parse_duration(value: Any, *, name: str = "duration") -> int:
    """Seconds from an int or a "<n>[s|m|h|d]" string."""
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 0:
            raise ConfigLoadError(f"{name} must be non-negative")
        return value
    if isinstance(value, str):
        m = _DURATION_RE.fullmatch(value)
        if m:
            return int(m.group(1)) * _UNIT_SECONDS[m.group(2)]
    raise ConfigLoadError(f"{name} must be seconds or a duration string like '30d': {value!r}")


def _parse_terms(obj: Any) -> StreamTerms:
    raw = _require_mapping(obj, name="stream")
    known = {f.name for f in fields(StreamTerms)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigLoadError(f"stream has unknown fields: {', '.join(unknown)}")
    kwargs: dict[str, Any] = {}
    for name in sorted(known):
        if name not in raw:
            raise ConfigLoadError(f"stream.{name} is required")
        val = raw[name]
        if name in _DURATION_FIELDS:
            kwargs[name] = parse_duration(val, name=f"stream.{name}")
        elif name in ("target_amount", "slippage"):
            kwargs[name] = _require_int(val, name=f"stream.{name}")
        else:
            kwargs[name] = _require_str(val, name=f"stream.{name}")
    return StreamTerms(**kwargs)


def _parse_simulation(obj: Any) -> Simulation | None:
    if obj is None:
        return None
    raw = _require_mapping(obj, name="simulation")
    claims = raw.get("claims", [])
    if not isinstance(claims, list):
        raise ConfigLoadError("simulation.claims must be a list")
    deposit = raw.get("deposit")
    return Simulation(
        start=_require_int(raw.get("start", 0), name="simulation.start"),
        deposit=None if deposit is None else _require_int(deposit, name="simulation.deposit"),
        claims=tuple(parse_duration(c, name=f"simulation.claims[{i}]") for i, c in enumerate(claims)),
    )


def parse_definition(obj: Any) -> StreamDefinition:
    root = _require_mapping(obj, name="definition")

    assets: dict[str, int] = {}
    for asset, decimals in _require_mapping(root.get("assets"), name="assets").items():
        assets[_require_str(asset, name="assets key")] = _require_int(decimals, name=f"assets.{asset}")

    feeds: dict[str, PriceQuote] = {}
    for feed_id, raw in _require_mapping(root.get("feeds"), name="feeds").items():
        entry = _require_mapping(raw, name=f"feeds.{feed_id}")
        feeds[_require_str(feed_id, name="feeds key")] = PriceQuote(
            price=_require_int(entry.get("price"), name=f"feeds.{feed_id}.price"),
            decimals=_require_int(entry.get("decimals", 8), name=f"feeds.{feed_id}.decimals"),
        )

    return StreamDefinition(
        assets=assets,
        feeds=feeds,
        terms=_parse_terms(root.get("stream")),
        simulation=_parse_simulation(root.get("simulation")),
    )


def load_definition(path: str | Path) -> StreamDefinition:
    """Read and validate a YAML stream definition."""
    text = Path(path).read_text(encoding="utf-8")
    try:
        obj = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigLoadError(f"invalid YAML in {path}: {exc}") from exc
    return parse_definition(obj)
