from __future__ import annotations

import random
import secrets
import string

# No I/O/0/1: codes are read aloud and typed on phones.
ROOM_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
ROOM_CODE_LENGTH = 5

RARE_LETTERS = frozenset("WXYZ")
ROUND_LETTERS = tuple(ch for ch in string.ascii_uppercase if ch not in RARE_LETTERS)


def new_room_code(length: int = ROOM_CODE_LENGTH) -> str:
    return "".join(secrets.choice(ROOM_CODE_ALPHABET) for _ in range(length))


def random_letter(rng: random.Random | None = None) -> str:
    return (rng or random).choice(ROUND_LETTERS)


def normalize_letter(raw: object) -> str | None:
    """First alphabetic character of ``raw``, upper-cased, or None."""
    if not isinstance(raw, str):
        return None
    for ch in raw.strip():
        if ch.isalpha():
            return ch.upper()
    return None
