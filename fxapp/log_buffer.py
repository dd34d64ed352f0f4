from __future__ import annotations
"""In-memory log ring for the engine.

The terminal belongs to the player while an effect runs, so nothing in the
engine prints. Runtime messages land here instead and surface in crash
reports.

Lines look like ``[tag] message``. Every line carries a sequence number so a
report can tell how many older lines already fell off the ring.
"""

import itertools
from collections import deque
from typing import Deque, Iterator, List, Optional, Tuple

_MAX = 400
_buf: Deque[Tuple[int, str]] = deque(maxlen=_MAX)
_seq: Iterator[int] = itertools.count(1)


def push(line: str, tag: Optional[str] = None) -> None:
    text = str(line) if tag is None else f"[{tag}] {line}"
    _buf.append((next(_seq), text))


def tail(n: int = 200) -> List[str]:
    if n <= 0:
        return []
    return [text for _seq_no, text in list(_buf)[-n:]]


def tagged(tag: str, n: int = 200) -> List[str]:
    """The last ``n`` lines pushed under ``tag``, e.g. ``tagged("phase")``."""
    if n <= 0:
        return []
    prefix = f"[{tag}]"
    return [text for _seq_no, text in _buf if text.startswith(prefix)][-n:]


def numbered(n: int = 200) -> List[str]:
    if n <= 0:
        return []
    return [f"{seq_no:>6} {text}" for seq_no, text in list(_buf)[-n:]]


def dropped() -> int:
    """How many lines have been evicted from the ring since the last clear()."""
    if not _buf:
        return 0
    return _buf[0][0] - 1


def clear() -> None:
    global _seq
    _buf.clear()
    _seq = itertools.count(1)
