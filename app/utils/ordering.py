import re
from typing import Tuple

_CHUNKS = re.compile(r"(\d+)")


def natural_key(text: str) -> Tuple[Tuple[int, int, str], ...]:
    """
    Sort key that compares digit runs numerically: "2" < "10", "A9" < "A10".

    Each chunk is tagged so numbers and letters never compare against each
    other directly; numeric chunks sort before alphabetic ones.
    """
    parts = _CHUNKS.split((text or "").strip().upper())
    return tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part)
        for part in parts
        if part != ""
    )
