import pytest

from adjacency import KEYBOARD_ADJACENCY, is_adjacent, neighbors

KURMANJI_LETTERS = "abcçdeêfghiîjklmnopqrsştuûvwxyz"


def test_adjacency_is_symmetric():
    for key, near in KEYBOARD_ADJACENCY.items():
        for other in near:
            assert key in KEYBOARD_ADJACENCY[other], f"{key!r} -> {other!r} is one-way"


def test_covers_every_kurmanji_letter():
    assert set(KEYBOARD_ADJACENCY) == set(KURMANJI_LETTERS)


def test_no_key_is_its_own_neighbor():
    for key, near in KEYBOARD_ADJACENCY.items():
        assert key not in near


def test_unmapped_character_has_no_neighbors():
    assert neighbors("7") == frozenset()
    assert neighbors("A") == frozenset()
    assert not is_adjacent("7", "8")


def test_diacritic_keys():
    assert is_adjacent("p", "ê")
    assert is_adjacent("ş", "î")
    assert is_adjacent("m", "ç")
    assert not is_adjacent("u", "û")


def test_table_is_read_only():
    with pytest.raises(TypeError):
        KEYBOARD_ADJACENCY["a"] = frozenset("b")
