import pytest

from deployadactyl.randomizer import LETTERS, Randomizer, string_runes


def test_string_runes_length_and_alphabet():
    value = string_runes(50)
    assert len(value) == 50
    assert set(value) <= set(LETTERS)


def test_alphabet_is_ascii_letters():
    assert LETTERS.isalpha()
    assert LETTERS.isascii()
    assert len(set(LETTERS)) == len(LETTERS)
    assert LETTERS.lower()[:26] == LETTERS[:26]


def test_randomizer_method():
    value = Randomizer().string_runes(10)
    assert len(value) == 10
    assert set(value) <= set(LETTERS)


def test_zero_length_gives_empty_string():
    assert string_runes(0) == ""


def test_negative_length_raises():
    with pytest.raises(ValueError):
        string_runes(-1)


def test_values_vary():
    values = {string_runes(32) for _ in range(5)}
    assert len(values) > 1