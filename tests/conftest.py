"""
Pytest configuration and fixtures for open5e-client tests.
"""

import copy
import sys
from pathlib import Path

import pytest

# Add src directory to Python path to allow importing open5e_client
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


# ==============================================================================
# Sample Open5e Data
# ==============================================================================

DOCUMENT_SRD = {
    "document__slug": "wotc-srd",
    "document__title": "5e Core Rules",
    "document__license_url": "http://open5e.com/legal",
    "document__url": "http://dnd.wizards.com/articles/features/systems-reference-document-srd",
}

SAMPLE_MONSTER_DATA = {
    "slug": "goblin",
    "name": "Goblin",
    "desc": "",
    "size": "Small",
    "type": "humanoid",
    "subtype": "goblinoid",
    "group": None,
    "alignment": "neutral evil",
    "armor_class": 15,
    "armor_desc": "leather armor, shield",
    "hit_points": 7,
    "hit_dice": "2d6",
    "speed": {"walk": 30},
    "strength": 8,
    "dexterity": 14,
    "constitution": 10,
    "intelligence": 10,
    "wisdom": 8,
    "charisma": 8,
    "strength_save": None,
    "dexterity_save": None,
    "constitution_save": None,
    "intelligence_save": None,
    "wisdom_save": None,
    "charisma_save": None,
    "perception": 9,
    "skills": {"stealth": 6},
    "damage_vulnerabilities": "",
    "damage_resistances": "",
    "damage_immunities": "",
    "condition_immunities": "",
    "senses": "darkvision 60 ft., passive Perception 9",
    "languages": "Common, Goblin",
    "challenge_rating": "1/4",
    "cr": 0.25,
    "actions": [
        {
            "name": "Scimitar",
            "desc": "Melee Weapon Attack: +4 to hit, reach 5 ft., one target. Hit: 5 (1d6 + 2) slashing damage.",
            "attack_bonus": 4,
            "damage_dice": "1d6+2",
        }
    ],
    "bonus_actions": None,
    "reactions": None,
    "legendary_desc": "",
    "legendary_actions": None,
    "special_abilities": [
        {
            "name": "Nimble Escape",
            "desc": "The goblin can take the Disengage or Hide action as a bonus action on each of its turns.",
        }
    ],
    "spell_list": [],
    "page_no": 315,
    "environments": ["Forest", "Hill"],
    "img": None,
    **DOCUMENT_SRD,
}

SAMPLE_CLASS_DATA = {
    "slug": "barbarian",
    "name": "Barbarian",
    "desc": "### Rage \n\nIn battle, you fight with primal ferocity.",
    "hit_dice": "1d12",
    "hp_at_1st_level": "12 + your Constitution modifier",
    "hp_at_higher_levels": "1d12 (or 7) + your Constitution modifier per barbarian level after 1st",
    "prof_armor": "Light armor, medium armor, shields",
    "prof_weapons": "Simple weapons, martial weapons",
    "prof_tools": "None",
    "prof_saving_throws": "Strength, Constitution",
    "prof_skills": "Choose two from Animal Handling, Athletics, Intimidation, Nature, Perception, and Survival",
    "equipment": "You start with the following equipment...",
    "table": "| Level | Proficiency Bonus | Features | Rages |\n|---|---|---|---|\n| 1st | +2 | Rage, Unarmored Defense | 2 |",
    "spellcasting_ability": "",
    "subtypes_name": "Primal Paths",
    "archetypes": [
        {
            "slug": "path-of-the-berserker",
            "name": "Path of the Berserker",
            "desc": "For some barbarians, rage is a means to an end.",
            **DOCUMENT_SRD,
        }
    ],
    **DOCUMENT_SRD,
}

SAMPLE_RACE_DATA = {
    "slug": "elf",
    "name": "Elf",
    "desc": "## Elf Traits\nYour elf character has a variety of natural abilities.",
    "asi_desc": "**_Ability Score Increase._** Your Dexterity score increases by 2.",
    "asi": [{"attributes": ["Dexterity"], "value": 2}],
    "age": "Elves typically claim adulthood around the age of 100.",
    "alignment": "Elves love freedom, variety, and self-expression.",
    "size": "**_Size._** Elves range from under 5 to over 6 feet tall.",
    "size_raw": "Medium",
    "speed": {"walk": 30},
    "speed_desc": "**_Speed._** Your base walking speed is 30 feet.",
    "languages": "**_Languages._** You can speak, read, and write Common and Elvish.",
    "vision": "**_Darkvision._** Accustomed to twilit forests and the night sky.",
    "traits": "**_Keen Senses._** You have proficiency in the Perception skill.",
    "subraces": [
        {
            "slug": "high-elf",
            "name": "High Elf",
            "desc": "As a high elf, you have a keen mind.",
            "asi": [{"attributes": ["Intelligence"], "value": 1}],
            "traits": "**_Cantrip._** You know one cantrip of your choice from the wizard spell list.",
            "asi_desc": "**_Ability Score Increase._** Your Intelligence score increases by 1.",
            **DOCUMENT_SRD,
        }
    ],
    **DOCUMENT_SRD,
}

SAMPLE_SPELL_DATA = {
    "slug": "fire-bolt",
    "name": "Fire Bolt",
    "desc": "You hurl a mote of fire at a creature or object within range.",
    "higher_level": "",
    "page": "phb 242",
    "range": "120 feet",
    "target_range_sort": 120,
    "components": "V, S",
    "requires_verbal_components": True,
    "requires_somatic_components": True,
    "requires_material_components": False,
    "material": "",
    "can_be_cast_as_ritual": False,
    "ritual": "no",
    "duration": "Instantaneous",
    "concentration": "no",
    "requires_concentration": False,
    "casting_time": "1 action",
    "level": "Cantrip",
    "level_int": 0,
    "spell_level": 0,
    "school": "evocation",
    "dnd_class": "Sorcerer, Wizard",
    "archetype": "",
    "circles": "",
    "spell_lists": ["sorcerer", "wizard"],
    **DOCUMENT_SRD,
}

SAMPLE_MAGIC_ITEM_DATA = {
    "slug": "cloak-of-protection",
    "name": "Cloak of Protection",
    "desc": "You gain a +1 bonus to AC and saving throws while you wear this cloak.",
    "type": "Wondrous item",
    "rarity": "uncommon",
    "requires_attunement": "requires attunement",
    **DOCUMENT_SRD,
}


# Configure anyio to only use asyncio (not trio)
@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def monster_data():
    return copy.deepcopy(SAMPLE_MONSTER_DATA)


@pytest.fixture
def class_data():
    return copy.deepcopy(SAMPLE_CLASS_DATA)


@pytest.fixture
def race_data():
    return copy.deepcopy(SAMPLE_RACE_DATA)


@pytest.fixture
def spell_data():
    return copy.deepcopy(SAMPLE_SPELL_DATA)


@pytest.fixture
def magic_item_data():
    return copy.deepcopy(SAMPLE_MAGIC_ITEM_DATA)


@pytest.fixture(autouse=True)
def clean_open5e_env(monkeypatch):
    """Keep OPEN5E_* variables from the developer's shell out of tests."""
    for name in ("OPEN5E_API_URL", "OPEN5E_TIMEOUT"):
        # setenv first so teardown also drops values loaded from a .env
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
