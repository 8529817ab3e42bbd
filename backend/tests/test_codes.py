import random

from petitbac.game.codes import (
    RARE_LETTERS,
    ROOM_CODE_ALPHABET,
    new_room_code,
    normalize_letter,
    random_letter,
)


def test_room_codes_use_the_unambiguous_alphabet():
    for _ in range(200):
        code = new_room_code()
        assert len(code) == 5
        assert set(code) <= set(ROOM_CODE_ALPHABET)
    assert not set("IO01") & set(ROOM_CODE_ALPHABET)
    assert len(new_room_code(8)) == 8


def test_random_letter_skips_rare_letters():
    rng = random.Random(1234)
    drawn = {random_letter(rng) for _ in range(500)}
    assert drawn
    assert not drawn & RARE_LETTERS
    assert all(len(ch) == 1 and ch.isupper() for ch in drawn)


def test_normalize_letter():
    assert normalize_letter("b") == "B"
    assert normalize_letter("  3é") == "É"
    assert normalize_letter("") is None
    assert normalize_letter("42") is None
    assert normalize_letter(None) is None
