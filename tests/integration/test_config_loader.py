from __future__ import annotations

import copy
from pathlib import Path

import pytest
import yaml

from streamer.integration import ConfigLoadError, load_definition, parse_definition
from streamer.integration.config_loader import parse_duration

EXAMPLE = Path(__file__).resolve().parents[2] / "examples" / "comp_usdc_stream.yaml"

BASE = {
    "assets": {"comp": 18, "usdc": 6},
    "feeds": {
        "comp-usd": {"price": 5_000_000_000, "decimals": 8},
        "usdc-usd": {"price": 100_000_000},
    },
    "stream": {
        "distribution_asset": "comp",
        "reference_asset": "usdc",
        "distribution_oracle": "comp-usd",
        "reference_oracle": "usdc-usd",
        "return_address": "0x" + "aa" * 20,
        "payer": "0x" + "bb" * 20,
        "recipient": "0x" + "cc" * 20,
        "target_amount": 2_000_000_000_000,
        "slippage": 500_000,
        "claim_cooldown": "7d",
        "sweep_cooldown": 864_000,
        "duration": "365d",
        "notice_period": "720h",
    },
}


def _with(**sections):
    obj = copy.deepcopy(BASE)
    for key, value in sections.items():
        obj[key] = value
    return obj


def test_example_definition_loads() -> None:
    d = load_definition(EXAMPLE)
    assert d.terms.duration == 365 * 86_400
    assert d.terms.claim_cooldown == 7 * 86_400
    assert d.feeds["comp-usd"].price == 5_000_000_000
    assert sum(d.simulation.claims) == 365 * 86_400


def test_parse_durations_and_defaults() -> None:
    d = parse_definition(_with())
    assert d.terms.sweep_cooldown == 10 * 86_400
    assert d.terms.notice_period == 30 * 86_400
    assert d.feeds["usdc-usd"].decimals == 8
    assert d.simulation is None


@pytest.mark.parametrize(
    ("value", "seconds"),
    [(90, 90), ("90", 90), ("90s", 90), ("15m", 900), ("12h", 43_200), (" 30d ", 2_592_000)],
)
def test_parse_duration(value, seconds) -> None:
    assert parse_duration(value) == seconds


@pytest.mark.parametrize("value", ["30w", "-1d", "1.5d", "", -5, 1.5, True, None])
def test_parse_duration_rejects(value) -> None:
    with pytest.raises(ConfigLoadError):
        parse_duration(value)


def test_unknown_stream_field() -> None:
    obj = _with()
    obj["stream"]["start_time"] = 0
    with pytest.raises(ConfigLoadError, match="unknown fields: start_time"):
        parse_definition(obj)


def test_missing_stream_field() -> None:
    obj = _with()
    del obj["stream"]["recipient"]
    with pytest.raises(ConfigLoadError, match="stream.recipient is required"):
        parse_definition(obj)


def test_target_must_be_int() -> None:
    obj = _with()
    obj["stream"]["target_amount"] = "2000000"
    with pytest.raises(ConfigLoadError):
        parse_definition(obj)


def test_missing_sections() -> None:
    with pytest.raises(ConfigLoadError):
        parse_definition(_with(feeds=None))
    with pytest.raises(ConfigLoadError):
        parse_definition([])


def test_simulation_block() -> None:
    d = parse_definition(_with(simulation={"start": 100, "deposit": 5, "claims": ["1d", 60]}))
    assert d.simulation.start == 100
    assert d.simulation.deposit == 5
    assert d.simulation.claims == (86_400, 60)


def test_simulation_claims_must_be_list() -> None:
    with pytest.raises(ConfigLoadError):
        parse_definition(_with(simulation={"claims": "30d"}))


def test_invalid_yaml(tmp_path: Path) -> None:
    p = tmp_path / "bad.yaml"
    p.write_text("assets: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigLoadError, match="invalid YAML"):
        load_definition(p)


def test_round_trip_through_file(tmp_path: Path) -> None:
    p = tmp_path / "stream.yaml"
    p.write_text(yaml.safe_dump(_with()), encoding="utf-8")
    assert load_definition(p) == parse_definition(_with())
