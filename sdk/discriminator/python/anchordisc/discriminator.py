"""Anchor discriminator derivation.

A discriminator is the first 8 bytes of ``sha256("<namespace>:<name>")``.
Instruction names are converted to snake_case first; event names are
hashed exactly as written.
"""

from __future__ import annotations

import hashlib
from typing import Sequence

from anchordisc.config import EVENT_NAMESPACE, GLOBAL_NAMESPACE

DISCRIMINATOR_SIZE = 8


def _sha256_first8(s: str) -> bytes:
    return hashlib.sha256(s.encode()).digest()[:DISCRIMINATOR_SIZE]


# ---------------------------------------------------------------------------
# Name normalization
# ---------------------------------------------------------------------------

_BOUNDARY = 0
_LOWER = 1
_UPPER = 2


def _split_words(piece: str) -> list[str]:
    words = []
    start = 0
    mode = _BOUNDARY
    for i, c in enumerate(piece[:-1]):
        nxt = piece[i + 1]
        if c.islower():
            next_mode = _LOWER
        elif c.isupper():
            next_mode = _UPPER
        else:
            next_mode = mode

        if next_mode == _LOWER and nxt.isupper():
            # fooBar: split after the lowercase run
            words.append(piece[start : i + 1])
            start = i + 1
            mode = _BOUNDARY
        elif mode == _UPPER and c.isupper() and nxt.islower():
            # HTTPServer: split before the last capital of the run
            words.append(piece[start:i])
            start = i
            mode = _BOUNDARY
        else:
            mode = next_mode
    words.append(piece[start:])
    return words


def to_snake_case(s: str) -> str:
    """Convert an identifier to snake_case the way Anchor's codegen does.

    Non-alphanumeric characters separate words and are dropped. Within a
    run of alphanumerics a new word starts at a lower-to-upper transition
    (``createOrder``) and before the last capital of an acronym that is
    followed by lowercase (``HTTPServer``). Digits never start a word.

    Matches Anchor for ASCII and common scripts only: ``str.isalnum`` and
    ``str.lower`` differ from Rust on some code points (combining vowel
    signs such as U+093E, word-final sigma).
    """
    words: list[str] = []
    piece = []
    for c in s:
        if c.isalnum():
            piece.append(c)
        elif piece:
            words.extend(_split_words("".join(piece)))
            piece = []
    if piece:
        words.extend(_split_words("".join(piece)))
    return "_".join(w.lower() for w in words)


# ---------------------------------------------------------------------------
# Hashing
# ---------------------------------------------------------------------------


def preimage(namespace: str, name: str, is_event: bool) -> str:
    """Return the exact string that is hashed for ``(namespace, name)``."""
    normalized = name if is_event else to_snake_case(name)
    return f"{namespace}:{normalized}"


def get_hash(namespace: str, name: str, is_event: bool) -> bytes:
    """Compute the 8-byte discriminator for ``name`` under ``namespace``.

    ``is_event`` alone decides whether the name is normalized; the
    namespace string is hashed as given.
    """
    return _sha256_first8(preimage(namespace, name, is_event))


def instruction_discriminator(name: str) -> bytes:
    return get_hash(GLOBAL_NAMESPACE, name, False)


def event_discriminator(name: str) -> bytes:
    return get_hash(EVENT_NAMESPACE, name, True)


# ---------------------------------------------------------------------------
# Stored discriminators
# ---------------------------------------------------------------------------


def from_stored(seq: Sequence[int] | None) -> bytes | None:
    """Return the first 8 bytes of a stored discriminator.

    Sequences shorter than 8 bytes count as absent and yield None.
    """
    if seq is None or len(seq) < DISCRIMINATOR_SIZE:
        return None
    return bytes(seq[:DISCRIMINATOR_SIZE])


def validate_discriminator(data: bytes, expected: bytes) -> None:
    """Validate the 8-byte discriminator prefix. Raises ValueError on mismatch."""
    if len(data) < DISCRIMINATOR_SIZE:
        raise ValueError(
            f"data too short: {len(data)} bytes, need at least {DISCRIMINATOR_SIZE}"
        )
    got = data[:DISCRIMINATOR_SIZE]
    if got != expected:
        raise ValueError(
            f"invalid discriminator: got {got.hex()}, want {expected.hex()}"
        )
