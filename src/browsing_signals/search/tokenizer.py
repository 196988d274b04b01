"""Lowercase alphanumeric tokenizer shared by the search layers."""

from __future__ import annotations

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def tokenize(text: str) -> list[str]:
    """Split ``text`` into lowercase ASCII alphanumeric tokens."""
    return [t for t in _NON_ALNUM.split((text or "").lower()) if t]
