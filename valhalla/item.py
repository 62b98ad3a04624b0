"""Item records, stat rolling, drop tables and the inventory wire encoding."""

from __future__ import annotations

import json
import math
import random
import uuid
from dataclasses import dataclass, field
from os import PathLike

from .packet import PacketWriter

MAX_ITEM_STACK = 200
PET_NAME_LENGTH = 13
RECHARGEABLE_GROUP = 207
SHIELD_WEAPON_TYPE = 17

INV_EQUIP = 1
INV_USE = 2
INV_SETUP = 3
INV_ETC = 4
INV_CASH = 5

_WEAPON_TYPES = {
    30: 1,  # one-handed sword
    31: 2,  # one-handed axe
    32: 3,  # one-handed blunt
    33: 4,  # dagger
    37: 5,  # wand
    38: 6,  # staff
    40: 7,  # two-handed sword
    41: 8,  # two-handed axe
    42: 9,  # two-handed blunt
    43: 10,  # spear
    44: 11,  # pole arm
    45: 12,  # bow
    46: 13,  # crossbow
    47: 14,  # claw
    48: 15,  # knuckle
    49: 16,  # gun
    9: SHIELD_WEAPON_TYPE,
}


def _int16(value: int) -> int:
    return ((int(value) + 0x8000) & 0xFFFF) - 0x8000


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


@dataclass(frozen=True)
class DropTableEntry:
    """One possible drop of a mob."""

    is_mesos: bool = False
    item_id: int = 0
    min: int = 0
    max: int = 0
    quest_id: int = 0
    chance: int = 0


def load_drop_table(path: str | PathLike[str]) -> dict[int, list[DropTableEntry]]:
    """Read a JSON drop table keyed by mob id."""
    with open(path, encoding="utf-8") as handle:
        raw = json.load(handle)

    return {
        int(mob_id): [
            DropTableEntry(
                is_mesos=bool(entry.get("isMesos", False)),
                item_id=int(entry.get("itemId", 0)),
                min=int(entry.get("min", 0)),
                max=int(entry.get("max", 0)),
                quest_id=int(entry.get("questId", 0)),
                chance=int(entry.get("chance", 0)),
            )
            for entry in entries or ()
        ]
        for mob_id, entries in raw.items()
    }


@dataclass(frozen=True)
class ItemInfo:
    """Static item data that new items are generated from."""

    cash: bool = False
    inc_acc: float = 0.0
    inc_eva: float = 0.0
    inc_speed: float = 0.0
    inc_mad: float = 0.0
    inc_mdd: float = 0.0
    inc_pad: float = 0.0
    inc_pdd: float = 0.0
    inc_str: int = 0
    inc_dex: int = 0
    inc_int: int = 0
    inc_luk: int = 0
    attack_speed: int = 0
    req_level: int = 0
    tuc: int = 0
    pet: bool = False
    stand: int = 0


def weapon_type_for(item_id: int) -> int:
    """Weapon category of an item id; 0 when it is not a weapon."""
    if item_id < 0:
        return 0
    return _WEAPON_TYPES.get(item_id // 10000 % 100, 0)


@dataclass
class Item:
    """An item held in an inventory, dropped or for sale."""

    id: int
    inv_id: int = 0
    slot_id: int = 0
    amount: int = 1
    cash: bool = False
    pet: bool = False
    db_id: int = 0
    uuid: uuid.UUID = field(default_factory=uuid.uuid4)
    expire_time: int = 0
    creator_name: str = ""
    flag: int = 0
    upgrade_slots: int = 0
    req_level: int = 0
    scroll_level: int = 0
    strength: int = 0
    dexterity: int = 0
    intelligence: int = 0
    luck: int = 0
    req_str: int = 0
    req_dex: int = 0
    req_int: int = 0
    req_luk: int = 0
    hp: int = 0
    mp: int = 0
    watk: int = 0
    matk: int = 0
    wdef: int = 0
    mdef: int = 0
    accuracy: int = 0
    avoid: int = 0
    hands: int = 0
    speed: int = 0
    jump: int = 0
    attack_speed: int = 0
    stand: int = 0

    @property
    def weapon_type(self) -> int:
        return weapon_type_for(self.id)

    @property
    def two_handed(self) -> bool:
        return 6 < self.weapon_type < 15

    def is_stackable(self) -> bool:
        return (
            self.inv_id != INV_CASH
            and self.inv_id != INV_EQUIP
            and _trunc_div(self.id, 10000) != RECHARGEABLE_GROUP
            and self.amount <= MAX_ITEM_STACK
        )

    def is_rechargeable(self) -> bool:
        return _trunc_div(self.id, 10000) == RECHARGEABLE_GROUP

    def is_shield(self) -> bool:
        return self.weapon_type == SHIELD_WEAPON_TYPE

    def to_bytes(self, short_slot: bool) -> bytes:
        """Encode the item as shown in inventory or storage windows."""
        writer = PacketWriter()

        if short_slot:
            writer.write_int16(self.slot_id)
        elif self.cash and self.slot_id < 0:
            writer.write_byte(abs(self.slot_id + 100) & 0xFF)
        else:
            writer.write_byte(abs(self.slot_id) & 0xFF)

        if self.inv_id == INV_EQUIP:
            writer.write_byte(0x01)
        elif self.pet:
            writer.write_byte(0x03)
        else:
            writer.write_byte(0x02)

        writer.write_int32(self.id)
        writer.write_bool(self.cash)
        if self.cash:
            writer.write_uint64(self.id & 0xFFFFFFFFFFFFFFFF)
        writer.write_int64(self.expire_time)

        if self.inv_id == INV_EQUIP:
            writer.write_byte(self.upgrade_slots)
            writer.write_byte(self.scroll_level)
            for stat in (
                self.strength,
                self.dexterity,
                self.intelligence,
                self.luck,
                self.hp,
                self.mp,
                self.watk,
                self.matk,
                self.wdef,
                self.mdef,
                self.accuracy,
                self.avoid,
                self.hands,
                self.speed,
                self.jump,
            ):
                writer.write_int16(stat)
            writer.write_string(self.creator_name)
            writer.write_int16(self.flag)
        elif self.pet:
            writer.write_padded_string(self.creator_name, PET_NAME_LENGTH)
            writer.write_byte(0)
            writer.write_int16(0)
            writer.write_byte(0)
            writer.write_int64(self.expire_time)
            writer.write_int32(0)
        else:
            writer.write_int16(self.amount)
            writer.write_string(self.creator_name)
            writer.write_int16(self.flag)
            if self.is_rechargeable():
                writer.write_int32(0)

        return writer.to_bytes()

    def inventory_bytes(self) -> bytes:
        return self.to_bytes(False)

    def short_bytes(self) -> bytes:
        return self.to_bytes(True)


def _roll_stat(stat: float, bias: int, average: bool, rng) -> int:
    if average:
        return _int16(int(stat))

    high = math.ceil(stat * 1.1)
    low = math.floor(stat * 0.9)

    if bias == 1:
        return _int16(high)
    if bias == -1:
        return _int16(low)
    if high == low:
        return _int16(high)
    return _int16(rng.randrange(low, high))


def create_bias_item(
    info: ItemInfo | None,
    item_id: int,
    amount: int,
    bias: int,
    average: bool,
    rng: random.Random | None = None,
) -> Item:
    """Generate an item; bias 1 rolls best stats, -1 worst, 0 random."""
    if info is None:
        raise LookupError(f"Unable to generate item of id: {item_id}")

    rng = rng or random

    def roll(stat: float) -> int:
        return _roll_stat(stat, bias, average, rng)

    return Item(
        id=item_id,
        inv_id=_trunc_div(item_id, 1_000_000) & 0xFF,
        cash=info.cash,
        accuracy=roll(info.inc_acc),
        avoid=roll(info.inc_eva),
        speed=roll(info.inc_speed),
        matk=roll(info.inc_mad),
        mdef=roll(info.inc_mdd),
        watk=roll(info.inc_pad),
        wdef=roll(info.inc_pdd),
        strength=info.inc_str,
        dexterity=info.inc_dex,
        intelligence=info.inc_int,
        luck=info.inc_luk,
        attack_speed=info.attack_speed,
        req_level=info.req_level,
        upgrade_slots=info.tuc,
        pet=info.pet,
        amount=max(amount, 1),
        stand=info.stand & 0xFF,
    )


def create_perfect_item(info: ItemInfo | None, item_id: int, amount: int) -> Item:
    return create_bias_item(info, item_id, amount, 1, False)


def create_item(
    info: ItemInfo | None,
    item_id: int,
    amount: int,
    rng: random.Random | None = None,
) -> Item:
    return create_bias_item(info, item_id, amount, 0, False, rng)


def create_worst_item(info: ItemInfo | None, item_id: int, amount: int) -> Item:
    return create_bias_item(info, item_id, amount, -1, False)


def create_average_item(info: ItemInfo | None, item_id: int, amount: int) -> Item:
    return create_bias_item(info, item_id, amount, 0, True)