"""Collection naming.

The default strategy lower-cases the class name and pluralizes it in
English. Any callable taking a type and returning a string can replace it.
"""

from typing import Callable, Dict, FrozenSet

NamingStrategy = Callable[[type], str]

UNCOUNTABLE: FrozenSet[str] = frozenset({
    "equipment", "information", "rice", "money", "species", "series",
    "fish", "sheep", "deer", "news", "data", "metadata", "feedback",
    "software", "hardware", "staff", "moose", "aircraft",
})

IRREGULAR: Dict[str, str] = {
    "person": "people",
    "man": "men",
    "woman": "women",
    "child": "children",
    "mouse": "mice",
    "goose": "geese",
    "foot": "feet",
    "tooth": "teeth",
    "ox": "oxen",
    "datum": "data",
    "criterion": "criteria",
    "phenomenon": "phenomena",
    "index": "indices",
    "matrix": "matrices",
    "vertex": "vertices",
    "analysis": "analyses",
    "crisis": "crises",
    "thesis": "theses",
    "cactus": "cacti",
    "radius": "radii",
    "knife": "knives",
    "wife": "wives",
    "life": "lives",
    "leaf": "leaves",
    "half": "halves",
    "wolf": "wolves",
    "shelf": "shelves",
    "thief": "thieves",
    "hero": "heroes",
    "potato": "potatoes",
    "tomato": "tomatoes",
    "echo": "echoes",
    "veto": "vetoes",
    "topaz": "topazes",
}

_IRREGULAR_PLURALS: FrozenSet[str] = frozenset(IRREGULAR.values())

# Consonant + "o" nouns that take a plain "s"
O_TAKES_S: FrozenSet[str] = frozenset({
    "photo", "piano", "halo", "memo", "logo", "disco", "kilo", "solo", "euro",
    "pro", "demo", "typo", "casino", "combo", "promo", "silo", "tempo", "macro",
    "repo", "info", "limo", "ego", "zero", "auto", "lasso", "gizmo", "condo",
    "dynamo", "kimono", "metro", "poncho", "burrito", "taco", "torso", "cello",
    "espresso", "ghetto", "tuxedo", "canto", "crescendo", "avocado",
})

# "f" endings that keep their "f"
F_TAKES_S: FrozenSet[str] = frozenset({"golf", "gulf", "chief", "roof", "proof", "belief", "reef"})

_VOWELS = "aeiou"


def pluralize(word: str) -> str:
    """Return the English plural of a singular noun.

    Dictionary entries win; anything else falls through to suffix rules and
    finally to appending "s".
    """
    if not word:
        return word
    lower = word.lower()
    if lower in UNCOUNTABLE or lower in _IRREGULAR_PLURALS:
        return word
    if lower in IRREGULAR:
        return IRREGULAR[lower]

    # quiz -> quizzes, fez -> fezzes
    if (
        len(lower) >= 3
        and lower.endswith("z")
        and lower[-2] in _VOWELS
        and (lower[-3] not in _VOWELS or lower.endswith("uiz"))
    ):
        return word + "zes"
    if lower.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    if lower.endswith("y") and not lower.endswith(("ay", "ey", "iy", "oy", "uy")):
        return word[:-1] + "ies"

    if lower not in F_TAKES_S:
        if lower.endswith("ife"):
            return word[:-2] + "ves"
        if lower.endswith(("lf", "eaf", "oaf", "arf")):
            return word[:-1] + "ves"

    if (
        len(lower) >= 2
        and lower.endswith("o")
        and lower[-2] not in _VOWELS
        and lower not in O_TAKES_S
    ):
        return word + "es"
    return word + "s"


def pluralized_lowercase(entity_type: type) -> str:
    """Default strategy: `Person` -> `people`, `Order` -> `orders`."""
    return pluralize(entity_type.__name__.lower())
