"""Channel-side game rules and packet payloads for a 2D MMORPG server."""

__version__ = "0.1.0"

__all__ = [
    "packet",
    "commands",
    "geometry",
    "npc",
    "field",
    "message",
    "item",
    "gmcommand",
]