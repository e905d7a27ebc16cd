# stones.py: tolerant stone / length parser
from __future__ import annotations
import re
from typing import Any, List, Optional, Tuple

from models import Stone

_SPLIT_RE = re.compile(r"[\s,;]+")
_KEYS = ("stones", "stones[]", "stone", "stone[]")
_LENGTH_KEYS = ("lengths", "lengths[]", "length", "length[]")


def _as_listish(val: Any) -> List[Any]:
    if val is None:
        return []
    if isinstance(val, (list, tuple)):
        return list(val)
    return [val]


def _tokens(values: List[Any]) -> List[str]:
    out: List[str] = []
    for v in values:
        out.extend(t for t in _SPLIT_RE.split(str(v).strip()) if t)
    return out


def _collect(form_like: Any, keys: Tuple[str, ...]) -> List[str]:
    if isinstance(form_like, str):
        return _tokens([form_like])
    if isinstance(form_like, (list, tuple)):
        return _tokens(list(form_like))
    # MultiDict-like first: it is also a dict but indexing yields one value
    if hasattr(form_like, "getlist"):
        for key in keys:
            values = list(form_like.getlist(key))
            if values:
                return _tokens(values)
        return []
    if isinstance(form_like, dict):
        for key in keys:
            if key in form_like:
                return _tokens(_as_listish(form_like[key]))
    return []


def parse_stones(form_like: Any) -> Tuple[List[Stone], List[str], Optional[str]]:
    """
    Return (stones, decoded_values, error_message_or_None).
    Accepts "GRB BGR RBG", ["GRB", "BGR"], {"stones": [...]}, form lists.
    """
    if not form_like:
        return [], [], "nothing parsed from request"

    tokens = _collect(form_like, _KEYS)
    if not tokens:
        return [], [], "nothing parsed from request"

    stones: List[Stone] = []
    for tok in tokens:
        try:
            stones.append(Stone(tok))
        except ValueError as e:
            return [], tokens, f"bad stone {tok!r}: {e}"
    return stones, [s.value for s in stones], None


def parse_lengths(form_like: Any) -> Tuple[List[int], Optional[str]]:
    """Return (lengths, error_message_or_None) for puzzle generation requests."""
    tokens = _collect(form_like, _LENGTH_KEYS)
    if not tokens:
        return [], "nothing parsed from request"

    lengths: List[int] = []
    for tok in tokens:
        try:
            n = int(tok)
        except ValueError:
            return [], f"bad length {tok!r}"
        if n <= 0:
            return [], f"bad length {tok!r}: must be positive"
        lengths.append(n)
    return lengths, None
