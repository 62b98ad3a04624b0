"""NPC records and the payloads of NPC dialogue, shop and storage packets.

Each builder returns the packet payload that follows the opcode byte.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from .geometry import Pos
from .packet import PacketWriter

MAX_INT32 = 0x7FFFFFFF
DEFAULT_SLOT_MAX = 100
STORAGE_SHOW_ALL_TABS = 0x7E
_DIALOGUE = 4


@dataclass
class Npc:
    """An NPC placed in a field."""

    id: int
    spawn_id: int
    pos: Pos
    face_left: bool = False
    rx0: int = 0
    rx1: int = 0
    controller: Any = None


@dataclass(frozen=True)
class ShopItemInfo:
    """Price data for an item sold in a shop."""

    price: int = 0
    unit_price: float = 0.0
    slot_max: int = 0


class _StorableItem(Protocol):
    def short_bytes(self) -> bytes: ...


def set_controller(npc_id: int, is_local: bool) -> bytes:
    return PacketWriter().write_bool(is_local).write_int32(npc_id).to_bytes()


def npc_movement(data: bytes) -> bytes:
    return PacketWriter().write_bytes(data).to_bytes()


def _dialogue(npc_id: int, kind: int, msg: str) -> PacketWriter:
    return (
        PacketWriter()
        .write_byte(_DIALOGUE)
        .write_int32(npc_id)
        .write_byte(kind)
        .write_string(msg)
    )


def chat_back_next(npc_id: int, msg: str, has_next: bool, has_back: bool) -> bytes:
    return _dialogue(npc_id, 0, msg).write_bool(has_back).write_bool(has_next).to_bytes()


def chat_ok(npc_id: int, msg: str) -> bytes:
    return chat_back_next(npc_id, msg, False, False)


def chat_yes_no(npc_id: int, msg: str) -> bytes:
    return _dialogue(npc_id, 1, msg).to_bytes()


def chat_user_string(
    npc_id: int, msg: str, default_input: str, min_length: int, max_length: int
) -> bytes:
    return (
        _dialogue(npc_id, 2, msg)
        .write_string(default_input)
        .write_int16(min_length)
        .write_int16(max_length)
        .to_bytes()
    )


def chat_user_number(
    npc_id: int, msg: str, default_input: int, min_length: int, max_length: int
) -> bytes:
    return (
        _dialogue(npc_id, 3, msg)
        .write_int32(default_input)
        .write_int32(min_length)
        .write_int32(max_length)
        .to_bytes()
    )


def chat_selection(npc_id: int, msg: str) -> bytes:
    return _dialogue(npc_id, 4, msg).to_bytes()


def chat_style_window(npc_id: int, msg: str, styles: Sequence[int]) -> bytes:
    writer = _dialogue(npc_id, 5, msg).write_byte(len(styles) & 0xFF)
    for style in styles:
        writer.write_int32(style)
    return writer.to_bytes()


def chat_pet(npc_id: int, msg: str, pets: Mapping[int, int]) -> bytes:
    """Pet selection dialogue; pets maps cash id to inventory slot."""
    writer = _dialogue(npc_id, 6, msg).write_byte(len(pets) & 0xFF)
    for cash_id, slot in pets.items():
        writer.write_int64(cash_id).write_byte(slot)
    return writer.to_bytes()


def chat_unknown(npc_id: int, msg: str) -> bytes:
    return (
        _dialogue(npc_id, 7, msg)
        .write_byte(1)
        .write_byte(1)
        .write_int32(0)
        .write_byte(1)
        .to_bytes()
    )


def _lookup_info(
    lookup: Callable[[int], ShopItemInfo | None], item_id: int
) -> ShopItemInfo | None:
    try:
        return lookup(item_id)
    except LookupError:
        return None


def shop(
    npc_id: int,
    items: Iterable[Sequence[int]],
    lookup: Callable[[int], ShopItemInfo | None],
) -> bytes:
    """Shop window listing.

    Each entry is ``[item_id]`` for the default price or ``[item_id, price]``.
    ``lookup`` returns the item's price data, or None (or raises LookupError)
    when the item is unknown.
    """
    entries = list(items)
    writer = PacketWriter().write_int32(npc_id).write_int16(len(entries))

    for entry in entries:
        item_id = entry[0]
        info = _lookup_info(lookup, item_id)
        writer.write_int32(item_id)

        if len(entry) == 2:
            writer.write_int32(entry[1])
        elif info is None:
            writer.write_int32(MAX_INT32)
        else:
            writer.write_int32(info.price)

        if info is None:
            info = ShopItemInfo()

        if item_id // 10000 == 207:
            writer.write_uint64(int(info.unit_price * info.slot_max))

        writer.write_int16(info.slot_max if info.slot_max != 0 else DEFAULT_SLOT_MAX)

    return writer.to_bytes()


def shop_result(code: int) -> bytes:
    return PacketWriter().write_byte(code).to_bytes()


def shop_continue() -> bytes:
    return shop_result(0x08)


def shop_not_enough_stock() -> bytes:
    return shop_result(0x09)


def shop_not_enough_mesos() -> bytes:
    return shop_result(0x0A)


def trade_error() -> bytes:
    return shop_result(0xFF)


def storage_show(
    npc_id: int,
    storage_mesos: int,
    storage_slots: int,
    items: Iterable[_StorableItem],
) -> bytes:
    writer = (
        PacketWriter()
        .write_int32(npc_id)
        .write_byte(storage_slots)
        .write_int16(STORAGE_SHOW_ALL_TABS)
        .write_int32(storage_mesos)
    )
    for item in items:
        writer.write_bytes(item.short_bytes())
    return writer.to_bytes()