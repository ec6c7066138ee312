# adjacency.py
from types import MappingProxyType
from typing import FrozenSet, Mapping

# Physical neighbours on the Kurmanji layout:
#   q w e r t y u i o p ê û
#    a s d f g h j k l ş î
#     z x c v b n m ç
_KEY_NEIGHBORS = {
    "q": "wa",
    "w": "qeas",
    "e": "wrsd",
    "r": "etdf",
    "t": "ryfg",
    "y": "tugh",
    "u": "yihj",
    "i": "uojk",
    "o": "ipkl",
    "p": "oêlş",
    "ê": "pûşî",
    "û": "êî",
    "a": "qwsz",
    "s": "awedzx",
    "d": "serfxc",
    "f": "drtgcv",
    "g": "ftyhvb",
    "h": "gyujbn",
    "j": "huiknm",
    "k": "jiolmç",
    "l": "kopş",
    "ş": "lpêî",
    "î": "şêû",
    "z": "asx",
    "x": "zsdc",
    "c": "xdfv",
    "v": "cfgb",
    "b": "vghn",
    "n": "bhjm",
    "m": "njkç",
    "ç": "mk",
}

_EMPTY: FrozenSet[str] = frozenset()

KEYBOARD_ADJACENCY: Mapping[str, FrozenSet[str]] = MappingProxyType(
    {key: frozenset(neighbors) for key, neighbors in _KEY_NEIGHBORS.items()}
)


def neighbors(ch: str, adjacency: Mapping[str, FrozenSet[str]] = KEYBOARD_ADJACENCY) -> FrozenSet[str]:
    """Keys next to `ch`; unmapped characters have no neighbours."""
    return adjacency.get(ch, _EMPTY)


def is_adjacent(a: str, b: str, adjacency: Mapping[str, FrozenSet[str]] = KEYBOARD_ADJACENCY) -> bool:
    return b in neighbors(a, adjacency)
