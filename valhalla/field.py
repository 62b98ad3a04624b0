"""Fields, their instances and portals, and the map-level packet payloads.

Each packet builder returns the payload that follows the opcode byte.
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from dataclasses import field as dc_field
from typing import Any

from .geometry import (
    FieldLimits,
    FieldRectangle,
    Foothold,
    FootholdHistogram,
    Pos,
    calculate_field_limits,
)
from .packet import PacketWriter

SPAWN_PORTAL_NAME = "sp"
DROP_HEIGHT_OFFSET = 90

ENV_SHOW_EFFECT = 3
ENV_PLAY_SOUND = 4
ENV_BGM_CHANGE = 6


class FieldError(LookupError):
    """Raised for missing instances, missing portals and invalid field operations."""


@dataclass(frozen=True)
class Portal:
    """A portal inside a field and where it leads."""

    id: int = 0
    pos: Pos = dc_field(default_factory=Pos)
    name: str = ""
    dest_field_id: int = 0
    dest_name: str = ""
    temporary: bool = False


def random_spawn_portal(
    portals: Iterable[Portal], rng: random.Random | None = None
) -> Portal:
    """Pick one of the spawn portals at random."""
    spawns = [p for p in portals if p.name == SPAWN_PORTAL_NAME]
    if not spawns:
        raise FieldError("No spawn portals in map")
    return (rng or random).choice(spawns)


def nearest_spawn_portal_id(portals: Iterable[Portal], pos: Pos) -> int:
    """Return the id of the spawn portal closest to pos; the first wins ties."""
    nearest: Portal | None = None
    for portal in portals:
        if portal.name != SPAWN_PORTAL_NAME:
            continue
        if nearest is None or portal.pos.distance_square(pos) < nearest.pos.distance_square(pos):
            nearest = portal
    if nearest is None:
        raise FieldError("Portal not found")
    return nearest.id


def portal_by_name(portals: Iterable[Portal], name: str) -> Portal:
    for portal in portals:
        if portal.name == name:
            return portal
    raise FieldError(f"No portal with the name {name!r}")


def portal_by_id(portals: Iterable[Portal], portal_id: int) -> Portal:
    for portal in portals:
        if portal.id == portal_id:
            return portal
    raise FieldError(f"No portal with the id {portal_id}")


@dataclass
class FieldInstance:
    """One copy of a field that a group of players shares."""

    id: int
    field_id: int
    portals: list[Portal] = dc_field(default_factory=list)
    town: bool = False
    return_map_id: int = 0
    time_limit: int = 0
    histogram: FootholdHistogram | None = None
    players: list[Any] = dc_field(default_factory=list)
    properties: dict[str, Any] = dc_field(default_factory=dict)
    id_counter: int = 0
    bgm: str = ""
    show_boat: bool = False
    boat_type: int = 0

    def next_id(self) -> int:
        """Hand out the next object id used inside this instance."""
        self.id_counter += 1
        return self.id_counter

    def random_spawn_portal(self, rng: random.Random | None = None) -> Portal:
        return random_spawn_portal(self.portals, rng)

    def calculate_final_drop_pos(self, origin: Pos) -> Pos:
        """Return where a drop released at origin lands."""
        if self.histogram is None:
            raise FieldError("Field has no footholds to land on")
        start = replace(origin, y=origin.y - DROP_HEIGHT_OFFSET)
        return self.histogram.get_final_position(start)

    def __str__(self) -> str:
        info = f"field ID: {self.field_id}, players({len(self.players)}): "
        for plr in self.players:
            info += f" {getattr(plr, 'name', plr)}({getattr(plr, 'pos', '')})"
        return info


@dataclass
class Field:
    """A map and the instances created from it."""

    id: int
    portals: Sequence[Portal] = ()
    footholds: Sequence[Foothold] = ()
    town: bool = False
    return_map_id: int = 0
    time_limit: int = 0
    vr_limit: FieldRectangle = dc_field(default_factory=FieldRectangle)
    mob_rate: float = 0.0
    instances: list[FieldInstance] = dc_field(default_factory=list, init=False)
    histogram: FootholdHistogram | None = dc_field(default=None, init=False)
    limits: FieldLimits = dc_field(init=False)

    def __post_init__(self) -> None:
        self.footholds = tuple(self.footholds)
        self.portals = tuple(self.portals)
        if self.footholds:
            self.histogram = FootholdHistogram(self.footholds)
        self.limits = calculate_field_limits(self.footholds, self.vr_limit, self.mob_rate)

    def create_instance(self) -> int:
        """Create a new instance and return its id."""
        instance_id = len(self.instances)
        portals = [replace(p, id=index) for index, p in enumerate(self.portals)]
        self.instances.append(
            FieldInstance(
                id=instance_id,
                field_id=self.id,
                portals=portals,
                town=self.town,
                return_map_id=self.return_map_id,
                time_limit=self.time_limit,
                histogram=self.histogram,
            )
        )
        return instance_id

    def valid_instance(self, instance_id: int) -> bool:
        return 0 <= instance_id < len(self.instances)

    def get_instance(self, instance_id: int) -> FieldInstance:
        if not self.valid_instance(instance_id):
            raise FieldError("Invalid instance id")
        return self.instances[instance_id]

    def delete_instance(self, instance_id: int) -> None:
        if not self.valid_instance(instance_id):
            raise FieldError("Invalid instance")
        if self.instances[instance_id].players:
            raise FieldError("Cannot delete an instance with players in it")
        del self.instances[instance_id]


def player_left(char_id: int) -> bytes:
    return PacketWriter().write_int32(char_id).to_bytes()


def spawn_mystic_door(spawn_id: int, pos: Pos, instant: bool) -> bytes:
    return (
        PacketWriter()
        .write_bool(instant)
        .write_int32(spawn_id)
        .write_int16(pos.x)
        .write_int16(pos.y)
        .to_bytes()
    )


def spawn_town_mystic_door(dst_map: int, dest_pos: Pos) -> bytes:
    return (
        PacketWriter()
        .write_int32(dst_map)
        .write_int32(dst_map)
        .write_int16(dest_pos.x)
        .write_int16(dest_pos.y)
        .to_bytes()
    )


def remove_mystic_door(spawn_id: int, instant: bool) -> bytes:
    return PacketWriter().write_bool(instant).write_int32(spawn_id).to_bytes()


def boat(show: bool) -> bytes:
    return PacketWriter().write_int16(0x01 if show else 0x02).to_bytes()


def show_moving_object(docked: bool) -> bytes:
    return PacketWriter().write_byte(0x0A).write_byte(4 if docked else 5).to_bytes()


def environment_change(setting: int, value: str) -> bytes:
    return PacketWriter().write_int32(setting).write_string(value).to_bytes()


def show_effect(path: str) -> bytes:
    return environment_change(ENV_SHOW_EFFECT, path)


def play_sound(path: str) -> bytes:
    return environment_change(ENV_PLAY_SOUND, path)


def bgm_change(path: str) -> bytes:
    return environment_change(ENV_BGM_CHANGE, path)