"""Shared fixtures for compschema tests."""

import json
import struct

import pytest

from compschema.protocol.wire import WireType, encode_primitive


@pytest.fixture
def varint_encoder():
    """Synthetic compact encoder: 1 byte for 0, 2 bytes for 128."""
    return lambda value: encode_primitive(WireType.VARINT, value)


@pytest.fixture
def fixed_encoder():
    """Synthetic fixed encoder: always 4 bytes."""
    return lambda value: struct.pack(">i", value)


@pytest.fixture
def definition() -> dict:
    """A small definition dump covering every classifier rule."""
    rarity = {
        "kind": "enum", "name": "Rarity", "qualname": "item.Rarity",
        "values": ["common", "uncommon", "rare", "epic"],
    }
    return {
        "version": "1.21.11",
        "components": [
            {"name": "minecraft:max_stack_size", "type": {"kind": "int"}},
            {"name": "minecraft:repair_cost", "type": {"kind": "int"}, "codec": "int32"},
            {"name": "minecraft:unbreakable", "type": {"kind": "unit"}},
            {"name": "minecraft:glider", "type": {"kind": "unit"}, "networked": False},
            {"name": "minecraft:enchantment_glint_override", "type": {"kind": "bool"}},
            {"name": "minecraft:minimum_attack_charge", "type": {"kind": "float"}},
            {"name": "minecraft:item_model", "type": {"kind": "identifier"}},
            {"name": "minecraft:damage_resistant", "type": {"kind": "tag", "of": {"kind": "unit"}}},
            {"name": "minecraft:custom_name", "type": {"kind": "chat"}},
            {
                "name": "minecraft:jukebox_playable",
                "type": {"kind": "either_holder", "of": {"kind": "record", "name": "JukeboxSong"}},
            },
            {
                "name": "minecraft:instrument",
                "type": {"kind": "holder", "of": {"kind": "record", "name": "Instrument"}},
            },
            {"name": "minecraft:rarity", "type": rarity},
            {
                "name": "minecraft:dyed_color",
                "type": {
                    "kind": "record", "name": "DyedItemColor",
                    "fields": [{"name": "rgb", "type": {"kind": "int"}}],
                },
                "codec": "int32",
            },
            {
                "name": "minecraft:map_id",
                "type": {
                    "kind": "record", "name": "MapId",
                    "fields": [{"name": "id", "type": {"kind": "int"}}],
                },
            },
            {
                "name": "minecraft:charged_projectiles",
                "type": {
                    "kind": "record", "name": "ChargedProjectiles",
                    "fields": [{"name": "items", "type": {"kind": "list", "of": {"kind": "item_stack"}}}],
                },
            },
            {
                "name": "minecraft:food",
                "type": {
                    "kind": "record", "name": "FoodProperties",
                    "fields": [
                        {"name": "nutrition", "type": {"kind": "int", "framing": "varint"}},
                        {"name": "saturation", "type": {"kind": "float"}},
                        {"name": "canAlwaysEat", "type": {"kind": "bool"}},
                    ],
                },
            },
            {
                "name": "minecraft:tooltip_rarity",
                "type": {
                    "kind": "record", "name": "TooltipRarity",
                    "fields": [{"name": "rarity", "type": rarity}],
                },
            },
            {"name": "minecraft:lore", "type": {"kind": "list", "of": {"kind": "chat"}}},
            {"name": "minecraft:broken", "type": {"kind": "mystery"}},
        ],
    }


@pytest.fixture
def definition_file(tmp_path, definition):
    path = tmp_path / "registry.json"
    path.write_text(json.dumps(definition), encoding="utf-8")
    return path
