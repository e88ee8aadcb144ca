"""
Deterministic canonical encoding primitives.

Used to recognize unset identities and to derive escrow addresses that any
party can precompute.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any


ADDRESS_BYTES = 20
ZERO_ADDRESS = "0x" + "00" * ADDRESS_BYTES


def _reject_floats(value: Any) -> None:
    if isinstance(value, float):
        raise TypeError("floats are not allowed in canonical encoding")
    if isinstance(value, dict):
        for k in value.keys():
            if not isinstance(k, str):
                raise TypeError("dict keys must be str for canonical encoding")
        for v in value.values():
            _reject_floats(v)
        return
    if isinstance(value, (list, tuple)):
        for item in value:
            _reject_floats(item)


def canonical_json_bytes(value: Any) -> bytes:
    """
    Canonical JSON encoding for hashing.

    Rules:
    - UTF-8
    - sort_keys=True
    - separators=(',', ':') (no whitespace)
    - allow_nan=False
    - floats rejected (to avoid representation ambiguity)
    """
    _reject_floats(value)
    text = json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return text.encode("utf-8")


def domain_sep_bytes(label: str, version: int = 1) -> bytes:
    """
    Create a domain separation prefix.

    The output is ASCII-only and NUL-terminated to make concatenation unambiguous.
    """
    if not isinstance(label, str) or not label:
        raise TypeError("label must be a non-empty str")
    if "\x00" in label:
        raise ValueError("label must not contain NUL")
    try:
        label_bytes = label.encode("ascii")
    except UnicodeEncodeError as exc:
        raise ValueError("label must be ASCII") from exc
    if not isinstance(version, int) or isinstance(version, bool) or version <= 0:
        raise ValueError("version must be a positive int")
    return b"streamer:" + label_bytes + b":v" + str(version).encode("ascii") + b"\x00"


def is_zero_address(address: str | None) -> bool:
    """True for a missing identity or the all-zero address (in any hex casing)."""
    if not address:
        return True
    s = address.strip().lower()
    if s.startswith("0x"):
        s = s[2:]
    return not s or set(s) == {"0"}


def derive_address(label: str, payload: Any) -> str:
    """Address = last 20 bytes of ``sha256(domain || canonical_json(payload))``."""
    digest = hashlib.sha256(domain_sep_bytes(label) + canonical_json_bytes(payload)).digest()
    return "0x" + digest[-ADDRESS_BYTES:].hex()
