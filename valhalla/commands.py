"""Name lookups used by game master commands."""

from __future__ import annotations

DEFAULT_MAP_ID = 180000000

_MAPS = {
    # Maple island
    "amherst": 1010000,
    "southperry": 60000,
    # Victoria island
    "lith": 104000000,
    "henesys": 100000000,
    "kerning": 103000000,
    "perion": 102000000,
    "ellinia": 101000000,
    "sleepy": 105040300,
    "gm": 180000000,
    # Ossyria
    "orbis": 200000000,
    "elnath": 211000000,
    "ludi": 220000000,
    "omega": 221000000,
    "aqua": 230000000,
    # Misc
    "balrog": 105090900,
}

_JOBS = {
    "Beginner": 0,
    "Warrior": 100,
    "Fighter": 110,
    "Crusader": 111,
    "Page": 120,
    "WhiteKnight": 121,
    "Spearman": 130,
    "DragonKnight": 131,
    "Magician": 200,
    "FirePoisonWizard": 210,
    "FirePoisonMage": 211,
    "IceLightWizard": 220,
    "IceLightMage": 221,
    "Cleric": 230,
    "Priest": 231,
    "Bowman": 300,
    "Hunter": 310,
    "Ranger": 311,
    "Crossbowman": 320,
    "Sniper": 321,
    "Thief": 400,
    "Assassin": 410,
    "Hermit": 411,
    "Bandit": 420,
    "ChiefBandit": 421,
    "Gm": 500,
    "SuperGm": 510,
}

_MOBS = {
    "balrog": (8130100,),
    "cbalrog": (8150000,),
    "zakum": (
        8800003,  # arm 1
        8800004,
        8800005,
        8800006,
        8800007,
        8800008,
        8800009,
        8800010,  # arm 8
        8800000,  # body
    ),
    "pap": (8500001,),
    "pianus": (8520000,),
    "mushmom": (6130101,),
    "zmushmom": (6300005,),
}


class UnknownMobError(ValueError):
    """Raised when a mob name has no known spawn list."""


def map_name_to_id(name: str) -> int:
    """Map a short town name to its map id; unknown names go to the GM map."""
    return _MAPS.get(name, DEFAULT_MAP_ID)


def job_name_to_id(name: str) -> int:
    """Map a job name to its id; unknown names give the beginner job."""
    return _JOBS.get(name, 0)


def mob_name_to_ids(name: str) -> list[int]:
    """Return the mob ids spawned for a boss name."""
    try:
        return list(_MOBS[name])
    except KeyError:
        raise UnknownMobError(f"Unknown mob name: {name}") from None