"""Payloads of chat, notice and system message packets.

Each builder returns the payload that follows the opcode byte.
"""

from __future__ import annotations

from .packet import PacketWriter


def _info(kind: int) -> PacketWriter:
    return PacketWriter().write_byte(kind)


def red_text(msg: str) -> bytes:
    return _info(9).write_string(msg).to_bytes()


def guild_points_change(amount: int) -> bytes:
    return _info(6).write_int32(amount).to_bytes()


def fame_change(amount: int) -> bytes:
    return _info(4).write_int32(amount).to_bytes()


def item_expired(item_id: int) -> bytes:
    return _info(2).write_int32(item_id).to_bytes()


def item_expired2(item_id: int) -> bytes:
    return _info(8).write_byte(1).write_int32(item_id).to_bytes()


def mesos_change_chat(amount: int) -> bytes:
    return _info(5).write_int32(amount).to_bytes()


def unable_to_pick_up(item_not_available: bool) -> bytes:
    return _info(0).write_byte(0xFE if item_not_available else 0xFF).to_bytes()


def drop_pick_up(is_mesos: bool, item_id: int, amount: int) -> bytes:
    writer = _info(0)
    if is_mesos:
        writer.write_int32(amount).write_int32(0)
    else:
        writer.write_int32(item_id).write_int32(amount)
    return writer.to_bytes()


def exp_gained(white_text: bool, appear_in_chat: bool, amount: int) -> bytes:
    return (
        _info(3)
        .write_bool(white_text)
        .write_int32(amount)
        .write_bool(appear_in_chat)
        .to_bytes()
    )


def notice(msg: str) -> bytes:
    return _info(0).write_string(msg).to_bytes()


def dialogue_box(msg: str) -> bytes:
    return _info(1).write_string(msg).to_bytes()


def cannot_change_channel() -> bytes:
    return _info(1).to_bytes()


def white_bar(msg: str) -> bytes:
    return _info(2).write_string(msg).to_bytes()


def broadcast_channel(sender_name: str, msg: str, channel: int, ear: bool) -> bytes:
    """Channel megaphone header; the client does not take the message body here."""
    return (
        _info(3)
        .write_string(sender_name)
        .write_byte(channel)
        .write_byte(0x01 if ear else 0x00)
        .to_bytes()
    )


def scrolling_header(msg: str) -> bytes:
    return _info(4).write_bool(len(msg) > 0).write_string(msg).to_bytes()


def bubbleless_chat(msg_type: int, sender: str, msg: str) -> bytes:
    """Chat without a bubble: 0 buddy, 1 party, 2 guild."""
    return PacketWriter().write_byte(msg_type).write_string(sender).write_string(msg).to_bytes()


def whisper(sender: str, message: str, channel: int) -> bytes:
    return (
        PacketWriter()
        .write_byte(0x12)
        .write_string(sender)
        .write_byte(channel)
        .write_string(message)
        .to_bytes()
    )


def find_result(
    character: str, is_online: bool, in_cash_shop: bool, same_channel: bool, map_id: int
) -> bytes:
    """Result of the /find command."""
    writer = PacketWriter()
    if map_id >= 0:
        writer.write_byte(0x09).write_string(character)
        if in_cash_shop:
            writer.write_byte(0x02).write_int32(0).write_int32(0)
        elif same_channel:
            writer.write_byte(0x01).write_int32(map_id).write_int32(0).write_int32(0)
        else:
            writer.write_byte(0x03).write_int32(map_id).write_int32(0).write_int32(0)
    else:
        writer.write_byte(0x0A).write_string(character).write_bool(is_online)
    return writer.to_bytes()


def all_chat(sender_id: int, is_admin: bool, msg: str) -> bytes:
    return PacketWriter().write_int32(sender_id).write_bool(is_admin).write_string(msg).to_bytes()


def gm_ban(good: bool) -> bytes:
    return PacketWriter().write_byte(6).write_byte(1).to_bytes()


def gm_remove_from_ranks() -> bytes:
    return PacketWriter().write_byte(6).write_byte(0).to_bytes()


def gm_warning(good: bool) -> bytes:
    return PacketWriter().write_byte(14).write_byte(1 if good else 0).to_bytes()


def gm_blocked_access() -> bytes:
    return PacketWriter().write_byte(4).write_byte(0).to_bytes()


def gm_unblock() -> bytes:
    return PacketWriter().write_byte(5).write_byte(0).to_bytes()


def gm_wrong_npc() -> bytes:
    return PacketWriter().write_byte(8).write_int16(0).to_bytes()