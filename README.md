# valhalla

Building blocks for the channel side of a 2D MMORPG server: the little-endian
wire encoding, field geometry, portals and instances, items, NPC dialogue and
shop windows, chat and system messages, and game master commands. It uses only
the standard library.

Packet builders in `field`, `message` and `npc` return the payload that
follows the opcode byte, as `bytes`.

## Modules

- `valhalla.packet`: `PacketWriter` (chainable `write_byte`, `write_bool`,
  `write_int8/16/32/64`, `write_uint32/64`, `write_bytes`, `write_string`,
  `write_padded_string`, `to_bytes`) and `PacketReader` (matching `read_*`
  methods, `skip`, `rest`). Strings carry an int16 length prefix. A read past
  the end raises `PacketUnderflowError`.
- `valhalla.geometry`: `Pos`, `Foothold`, `FootholdHistogram` (finds where a
  falling object comes to rest with `get_final_position`), `FieldRectangle`
  and `calculate_field_limits`, which returns a `FieldLimits` with the view
  rectangle and the minimum and maximum mob capacity.
- `valhalla.field`: `Field`, `FieldInstance`, `Portal` and `FieldError`;
  spawn-portal helpers (`random_spawn_portal`, `nearest_spawn_portal_id`,
  `portal_by_name`, `portal_by_id`); payloads for players leaving, mystic
  doors, boats, moving objects and environment changes (`show_effect`,
  `play_sound`, `bgm_change`).
- `valhalla.message`: red text, notices, dialogue boxes, scrolling header,
  whispers, `/find` results, all-chat, bubbleless chat, pick-up and EXP
  messages, and GM notices.
- `valhalla.npc`: `Npc`, `ShopItemInfo`, dialogue windows (`chat_ok`,
  `chat_yes_no`, `chat_user_string`, `chat_selection`, ...), `shop`,
  shop results and `storage_show`.
- `valhalla.item`: `Item`, `ItemInfo`, stat rolling with `create_perfect_item`,
  `create_item`, `create_worst_item`, `create_average_item` and
  `create_bias_item`, `weapon_type_for`, the inventory encoding
  (`inventory_bytes`, `short_bytes`) and `load_drop_table` for JSON drop
  tables (`DropTableEntry`).
- `valhalla.commands`: `map_name_to_id`, `job_name_to_id` and
  `mob_name_to_ids` (raises `UnknownMobError`).
- `valhalla.gmcommand`: `parse_gm_command` turns a `/command` chat line into a
  `GmCommand` record, raising `GmCommandError` for unknown commands or bad
  arguments.

## Install

    pip install .

## Example

```python
from valhalla import message
from valhalla.field import Field, Portal
from valhalla.geometry import Foothold, Pos
from valhalla.gmcommand import parse_gm_command

payload = message.notice("Server restart in 5 minutes")

field = Field(
    id=100000000,
    portals=[Portal(name="sp", pos=Pos(0, 0))],
    footholds=[Foothold(1, -100, 0, 100, 0)],
)
inst = field.get_instance(field.create_instance())
inst.calculate_final_drop_pos(Pos(0, -10))   # Pos(x=0, y=0, foothold=1)

cmd = parse_gm_command("/warp henesys")
cmd.ids                                      # (100000000,)
```

## What it does not do

The package has no network server, no connection or session handling and no
database storage: it builds and reads packet bodies and applies game rules to
values you pass in. It does not decode character or mob movement blocks, and
it keeps no monster state. `GmCommand` records describe what a command asks
for; carrying them out against players and fields is left to the caller.

## Tests

    pip install .[test]
    pytest