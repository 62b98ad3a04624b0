"""Parsing of game master chat commands into validated command records."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .commands import UnknownMobError, job_name_to_id, map_name_to_id, mob_name_to_ids
from .packet import PacketWriter

LOADOUT_ITEMS = (
    1372010, 1402005, 1422013, 1412021, 1382016, 1432030, 1442002, 1302023,
    1322045, 1312015, 1332027, 1332026, 1462017, 1472033, 1452020, 1092029,
    1092025,
)
DROP_MESOS = 1000
TEST_MOB_ID = 5100001
DEFAULT_DEATH_TYPE = 1
RAW_PACKET_PREFIX = bytes(4)

NPCO_OPCODE = 0x9F
NPCO_NPC_ID = 9200000
NPCO_SCRIPT = "cody"

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1

_NO_ARGUMENT_COMMANDS = frozenset(
    {"mapInfo", "pos", "wheader", "createInstance", "testMob", "portal"}
)
_AMOUNT_COMMANDS = {
    "hp": (16, True),
    "mp": (16, True),
    "exp": (32, True),
    "gexp": (32, True),
    "level": (8, False),
}


class GmCommandError(ValueError):
    """Raised when a game master command is unknown or has bad arguments."""


@dataclass(frozen=True)
class GmCommand:
    """A parsed game master command.

    ``target`` names another player when the command acts on someone else;
    ``value`` holds the command's numeric argument, ``ids`` the item, mob,
    map or spawn ids it refers to, and ``count`` how many times to apply it.
    """

    name: str
    args: tuple[str, ...] = ()
    target: str | None = None
    value: int | None = None
    count: int = 1
    text: str = ""
    ids: tuple[int, ...] = ()
    payload: bytes = b""


def _wrap(value: int, bits: int, signed: bool) -> int:
    mask = (1 << bits) - 1
    value &= mask
    if signed and value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _atoi(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise GmCommandError(f"invalid number: {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise GmCommandError(f"number out of range: {text!r}")
    return value


def _try_atoi(text: str) -> int | None:
    try:
        return _atoi(text)
    except GmCommandError:
        return None


def _target_and_amount(name: str, args: tuple[str, ...]) -> tuple[str | None, int]:
    if len(args) == 2:
        return args[0], _atoi(args[1])
    if len(args) == 1:
        return None, _atoi(args[0])
    if name == "levelup" and not args:
        return None, 1
    return None, 0


def parse_gm_command(message: str) -> GmCommand:
    """Parse a chat line such as ``/warp henesys`` into a command."""
    words = message[message.find("/") + 1:].split(" ")
    name, args = words[0], tuple(words[1:])

    def build(**fields) -> GmCommand:
        return GmCommand(name=name, args=args, **fields)

    if name in _NO_ARGUMENT_COMMANDS:
        return build()

    if name == "packet":
        if not args:
            raise GmCommandError("packet needs hex data")
        try:
            data = bytes.fromhex(args[0])
        except ValueError as exc:
            raise GmCommandError(f"invalid hex packet: {args[0]!r}") from exc
        return build(payload=RAW_PACKET_PREFIX + data)

    if name in ("notice", "msgBox"):
        if not args:
            raise GmCommandError(f"{name} needs a message")
        return build(text=" ".join(args))

    if name == "header":
        return build(text=" ".join(args))

    if name in ("kill", "revive"):
        return build(target=args[0] if len(args) == 1 else None)

    if name == "changeInstance":
        target, instance_id = None, 0
        if len(args) == 1:
            instance_id = _atoi(args[0])
        elif len(args) == 2:
            target, instance_id = args[0], _atoi(args[1])
        return build(target=target, value=instance_id)

    if name == "deleteInstance":
        if len(args) != 1:
            raise GmCommandError("deleteInstance needs exactly one instance id")
        instance_id = _atoi(args[0])
        if instance_id < 1:
            raise GmCommandError("Cannot delete instance 0")
        return build(value=instance_id)

    if name in _AMOUNT_COMMANDS:
        bits, signed = _AMOUNT_COMMANDS[name]
        target, amount = _target_and_amount(name, args)
        return build(target=target, value=_wrap(amount, bits, signed))

    if name == "levelup":
        target, amount = _target_and_amount(name, args)
        return build(target=target, value=_wrap(amount, 8, False))

    if name == "job":
        job_name = ""
        if len(args) == 1:
            job_name = args[0]
        elif len(args) == 2:
            job_name = args[1]
        number = _try_atoi(job_name) if job_name else 0
        job_id = job_name_to_id(job_name) if number is None else _wrap(number, 16, True)
        return build(value=job_id)

    if name == "item":
        item_id, amount = 0, 1
        if args:
            item_id = _wrap(_atoi(args[0]), 32, True)
            if len(args) == 2:
                amount = _wrap(_atoi(args[1]), 16, True)
        return build(ids=(item_id,), count=amount)

    if name == "mesos":
        if len(args) == 1:
            return build(value=_wrap(_atoi(args[0]), 32, True))
        return build()

    if name == "warp":
        target, map_name = None, ""
        if len(args) == 1:
            map_name = args[0]
        elif len(args) == 2:
            target, map_name = args[0], args[1]
        number = _try_atoi(map_name) if map_name else 0
        map_id = map_name_to_id(map_name) if number is None else _wrap(number, 32, True)
        return build(target=target or None, ids=(map_id,))

    if name == "loadout":
        return build(ids=LOADOUT_ITEMS)

    if name == "drop":
        return build(ids=LOADOUT_ITEMS, value=DROP_MESOS)

    if name == "killMob":
        spawn_id = _wrap(_atoi(args[0]), 32, True) if args else 0
        return build(ids=(spawn_id,))

    if name == "killmobs":
        death_type = _wrap(_atoi(args[0]), 8, False) if args else DEFAULT_DEATH_TYPE
        return build(value=death_type)

    if name == "spawnMob":
        mob_id = _wrap(_atoi(args[0]), 32, True) if args else 0
        count = _atoi(args[1]) if len(args) == 2 else 1
        return build(ids=(mob_id,), count=count)

    if name == "spawnBoss":
        mob_ids: tuple[int, ...] = ()
        if args:
            try:
                mob_ids = tuple(mob_name_to_ids(args[0]))
            except UnknownMobError as exc:
                raise GmCommandError(str(exc)) from exc
        count = _atoi(args[1]) if len(args) == 2 else 1
        return build(ids=mob_ids, count=count)

    if name == "dropr":
        if not args:
            raise GmCommandError("Supply drop id")
        return build(ids=(_wrap(_atoi(args[0]), 32, True),))

    if name == "npco":
        start_date = 1 + 1 * 100 + 2001 * 10000
        end_date = 1 + 1 * 100 + 2099 * 10000
        payload = (
            PacketWriter(NPCO_OPCODE)
            .write_byte(2)
            .write_int32(NPCO_NPC_ID)
            .write_string(NPCO_SCRIPT)
            .write_uint32(start_date)
            .write_uint32(end_date)
            .to_bytes()
        )
        return build(payload=payload)

    raise GmCommandError(f"Unknown gm command {name}")