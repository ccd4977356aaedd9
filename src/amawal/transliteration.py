"""
Latin ↔ Tifinagh transliteration.
"""

import re

LATIN_TO_TIFINAGH: dict[str, str] = {
    "a": "ⴰ", "b": "ⴱ", "g": "ⴳ", "d": "ⴷ", "ḍ": "ⴹ", "e": "ⴻ",
    "f": "ⴼ", "k": "ⴽ", "h": "ⵀ", "ḥ": "ⵃ", "ɛ": "ⵄ", "x": "ⵅ",
    "q": "ⵇ", "i": "ⵉ", "j": "ⵊ", "l": "ⵍ", "m": "ⵎ", "n": "ⵏ",
    "u": "ⵓ", "r": "ⵔ", "ṛ": "ⵕ", "ɣ": "ⵖ", "gh": "ⵖ", "s": "ⵙ",
    "ṣ": "ⵚ", "c": "ⵛ", "sh": "ⵛ", "t": "ⵜ", "ṭ": "ⵟ", "w": "ⵡ",
    "y": "ⵢ", "z": "ⵣ", "ẓ": "ⵥ",
}

TIFINAGH_TO_LATIN: dict[str, str] = {
    tifinagh: latin for latin, tifinagh in LATIN_TO_TIFINAGH.items() if len(latin) == 1
}
TIFINAGH_TO_LATIN["ⵯ"] = "ʷ"

_TIFINAGH_RE = re.compile("[\u2d30-\u2d7f]")
_LATIN_RE = re.compile(r"^[a-zA-ZḍḤḥɛṛɣṣṭẓ\s]+$")


def to_tifinagh(latin: str) -> str:
    """Transliterate Latin text to Tifinagh.

    Digraphs (gh, sh) are matched before single letters; characters with
    no mapping pass through unchanged.

    Example:
        >>> to_tifinagh("aman")
        'ⴰⵎⴰⵏ'
        >>> to_tifinagh("aghrum")
        'ⴰⵖⵔⵓⵎ'
    """
    result = []
    i = 0
    while i < len(latin):
        digraph = latin[i:i + 2].lower()
        if len(digraph) == 2 and digraph in LATIN_TO_TIFINAGH:
            result.append(LATIN_TO_TIFINAGH[digraph])
            i += 2
            continue
        char = latin[i]
        result.append(LATIN_TO_TIFINAGH.get(char.lower(), char))
        i += 1
    return "".join(result)


def to_latin(tifinagh: str) -> str:
    """Transliterate Tifinagh text to Latin, passing unknown characters through."""
    return "".join(TIFINAGH_TO_LATIN.get(char, char) for char in tifinagh)


def is_tifinagh(text: str) -> bool:
    """True if ``text`` contains any Tifinagh character (U+2D30–U+2D7F)."""
    return bool(_TIFINAGH_RE.search(text))


def is_latin(text: str) -> bool:
    return bool(_LATIN_RE.match(text))
