# talent_matcher/utils.py
import math
import re
from typing import Any, Iterable, List, Optional


_ws_re = re.compile(r"\s+")


def normalize_text(text: Any) -> str:
    """Lowercase and collapse whitespace."""
    if not text or not isinstance(text, str):
        return ""
    return _ws_re.sub(" ", text).strip().lower()


def optional_text(text: Any) -> Optional[str]:
    t = normalize_text(text)
    return t or None


def unique_lower(items: Any) -> List[str]:
    if isinstance(items, str):
        items = [items]
    if not isinstance(items, Iterable):
        return []
    out = []
    seen = set()
    for x in items:
        k = normalize_text(x)
        if k and k not in seen:
            seen.add(k)
            out.append(k)
    return out


def parse_number(value: Any) -> Optional[float]:
    """
    Lenient numeric parse. Returns None for absent, non-finite or unparsable input.
    Booleans are not numbers here.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        x = float(value)
    elif isinstance(value, str):
        s = value.strip().replace(",", "").replace("_", "")
        if not s:
            return None
        try:
            x = float(s)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(x):
        return None
    return x


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def clamp(x: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return lo if x < lo else (hi if x > hi else x)


class FrozenDict(dict):
    """
    dict that refuses mutation once built. Config tables hold these so a
    shared config cannot be edited in place; it still serializes as a dict.
    """

    def _readonly(self, *args: Any, **kwargs: Any) -> None:
        raise TypeError(f"{type(self).__name__} is read-only")

    __setitem__ = __delitem__ = __ior__ = _readonly
    clear = pop = popitem = setdefault = update = _readonly

    def __reduce__(self):
        return (type(self), (dict(self),))
