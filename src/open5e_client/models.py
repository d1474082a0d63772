"""
Data models for Open5e content.

Each model describes the shape of one record as returned by the Open5e API
and validates raw JSON into an immutable, typed value. Scalar fields are
strict: a number is never accepted where a string is expected and vice versa.
"""

import math
from enum import Enum
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
    model_validator,
)

from .validation import challenge_rating_to_float


# =============================================================================
# Enums and Constants
# =============================================================================

class DocumentSlug(str, Enum):
    """Source publications known to the Open5e API."""
    O5E = "o5e"
    WOTC_SRD = "wotc-srd"
    TOB = "tob"
    CC = "cc"
    TOB2 = "tob2"
    DMAG = "dmag"
    MENAGERIE = "menagerie"
    TOB3 = "tob3"
    A5E = "a5e"
    KP = "kp"
    DMAG_E = "dmag-e"
    WARLOCK = "warlock"
    VOM = "vom"
    TOH = "toh"
    TALDOREI = "taldorei"
    BLACKFLAG = "blackflag"


DOCUMENTS: dict[str, DocumentSlug] = {
    "Open5e Original Content": DocumentSlug.O5E,
    "5e Core Rules": DocumentSlug.WOTC_SRD,
    "Tome of Beasts": DocumentSlug.TOB,
    "Creature Codex": DocumentSlug.CC,
    "Tome of Beasts 2": DocumentSlug.TOB2,
    "Tome of Beasts 3": DocumentSlug.TOB3,
    "Kobold Press": DocumentSlug.KP,
    "Monster Menagerie": DocumentSlug.MENAGERIE,
    "Level Up Advanced 5e": DocumentSlug.A5E,
    "Deep Magic": DocumentSlug.DMAG,
    "Deep Magic Extended": DocumentSlug.DMAG_E,
    "Vault of Magic": DocumentSlug.VOM,
    "Tome of Heroes": DocumentSlug.TOH,
    "Warlock Archives": DocumentSlug.WARLOCK,
    "Tal’Dorei": DocumentSlug.TALDOREI,
    "Black Flag": DocumentSlug.BLACKFLAG,
}

# Flat keys the API uses for the source document of every record
DOCUMENT_FIELDS = ("slug", "title", "url", "license_url")

Number = StrictInt | StrictFloat
PositiveNumber = Annotated[StrictInt, Field(gt=0)] | Annotated[StrictFloat, Field(gt=0)]
NonNegativeNumber = Annotated[StrictInt, Field(ge=0)] | Annotated[StrictFloat, Field(ge=0)]
SpellLevel = Annotated[StrictInt, Field(ge=0, le=9)]


# =============================================================================
# Base Models
# =============================================================================

class Open5eModel(BaseModel):
    """Immutable base for every parsed value. Unknown keys are ignored."""
    model_config = ConfigDict(frozen=True)


class Document(Open5eModel):
    """Source publication a record belongs to."""
    slug: StrictStr = Field(description="Document slug, e.g. 'wotc-srd'")
    title: StrictStr = Field(description="Document title, e.g. '5e Core Rules'")
    url: StrictStr
    license_url: StrictStr | None = None


class GameObject(Open5eModel):
    """Fields shared by all Open5e content."""
    slug: StrictStr = Field(min_length=1, description="Unique identifier within a collection")
    name: StrictStr
    desc: StrictStr = Field(description="Long-form markdown description")
    document: Document

    @model_validator(mode="before")
    @classmethod
    def nest_document(cls, data: Any) -> Any:
        """Collect the flat `document__*` keys into a nested `document`."""
        if not isinstance(data, dict) or "document" in data:
            return data
        data = dict(data)
        document = {}
        for key in DOCUMENT_FIELDS:
            raw_key = f"document__{key}"
            if raw_key in data:
                document[key] = data.pop(raw_key)
        data["document"] = document
        return data

    def to_open5e(self) -> dict[str, Any]:
        """Export back to the flat JSON form used by the API."""
        data = self.model_dump(mode="json", exclude={"document"})
        for key, value in self.document.model_dump(mode="json").items():
            data[f"document__{key}"] = value
        return data


# =============================================================================
# Monster Models
# =============================================================================

class Speed(Open5eModel):
    """Movement speeds in feet."""
    walk: Number | None = None
    swim: Number | None = None
    fly: Number | None = None
    burrow: Number | None = None
    climb: Number | None = None
    hover: StrictBool | None = None


class MonsterAction(Open5eModel):
    """An entry in one of a monster's action or ability lists."""
    name: StrictStr
    desc: StrictStr
    damage_dice: StrictStr | None = None
    attack_bonus: Number | None = None


def abilities_or_empty(value: Any) -> Any:
    """
    Normalize a raw ability block.

    The API sends a list of entries, or null/"" when a monster has none.
    Anything that is not a list but is null or a string collapses to an empty
    list; other values are passed on and fail validation.
    """
    if value is None or isinstance(value, str):
        return []
    return value


class Monster(GameObject):
    """A creature stat block."""
    size: StrictStr
    type: StrictStr
    subtype: StrictStr | None = None
    group: StrictStr | None = None
    alignment: StrictStr

    armor_class: Number
    armor_desc: StrictStr | None = None
    hit_points: Number
    hit_dice: StrictStr
    speed: Speed

    strength: PositiveNumber
    dexterity: PositiveNumber
    constitution: PositiveNumber
    intelligence: PositiveNumber
    wisdom: PositiveNumber
    charisma: PositiveNumber

    strength_save: Number | None = None
    dexterity_save: Number | None = None
    constitution_save: Number | None = None
    intelligence_save: Number | None = None
    wisdom_save: Number | None = None
    charisma_save: Number | None = None

    perception: Number | None = None
    skills: dict[str, Number] = Field(description="Skill name -> bonus")
    damage_vulnerabilities: StrictStr | None = None
    damage_resistances: StrictStr | None = None
    damage_immunities: StrictStr | None = None
    condition_immunities: StrictStr | None = None
    senses: StrictStr
    languages: StrictStr | None = None

    challenge_rating: StrictStr = Field(description="Display form, e.g. '1/8'")
    cr: NonNegativeNumber = Field(description="Numeric form of challenge_rating")

    actions: tuple[MonsterAction, ...] = ()
    reactions: tuple[MonsterAction, ...] = ()
    legendary_desc: StrictStr = ""
    legendary_actions: tuple[MonsterAction, ...] = ()
    special_abilities: tuple[MonsterAction, ...] = ()
    spell_list: tuple[StrictStr, ...] = ()

    page_no: Number | None = None
    img: StrictStr | None = None

    @field_validator(
        "actions", "reactions", "legendary_actions", "special_abilities",
        mode="before",
    )
    @classmethod
    def normalize_ability_block(cls, v: Any) -> Any:
        return abilities_or_empty(v)

    @model_validator(mode="after")
    def check_challenge_rating(self) -> "Monster":
        expected = challenge_rating_to_float(self.challenge_rating)
        if not math.isclose(expected, self.cr):
            raise ValueError(
                f"challenge_rating '{self.challenge_rating}' does not match cr {self.cr}"
            )
        return self


# =============================================================================
# Class Models
# =============================================================================

class Archetype(GameObject):
    """Subclass of a character class (e.g. Path of the Berserker)."""
    pass


class CharacterClass(GameObject):
    """Character class with its proficiencies and archetypes."""
    hit_dice: StrictStr = Field(description="Hit die, e.g. '1d12'")
    hp_at_1st_level: StrictStr
    hp_at_higher_levels: StrictStr
    prof_armor: StrictStr
    prof_weapons: StrictStr
    prof_tools: StrictStr
    prof_saving_throws: StrictStr
    prof_skills: StrictStr
    equipment: StrictStr
    table: StrictStr = Field(description="Markdown level table")
    spellcasting_ability: StrictStr
    subtypes_name: StrictStr
    archetypes: tuple[Archetype, ...]


# =============================================================================
# Race Models
# =============================================================================

class AbilityScoreIncrease(Open5eModel):
    """Ability score increase granted by a race or subrace."""
    attributes: tuple[StrictStr, ...]
    value: Number


class RaceSpeed(Open5eModel):
    walk: Number


class Subrace(GameObject):
    asi: tuple[AbilityScoreIncrease, ...]
    traits: StrictStr
    asi_desc: StrictStr


class Race(GameObject):
    """Playable race with its traits and subraces."""
    asi_desc: StrictStr
    asi: tuple[AbilityScoreIncrease, ...]
    age: StrictStr
    alignment: StrictStr
    size: StrictStr
    size_raw: StrictStr
    speed: RaceSpeed
    speed_desc: StrictStr
    languages: StrictStr
    vision: StrictStr
    traits: StrictStr
    subraces: tuple[Subrace, ...]


# =============================================================================
# Spell Models
# =============================================================================

class Spell(GameObject):
    """Spell with casting mechanics and class lists."""
    higher_level: StrictStr | None = None
    page: StrictStr
    range: StrictStr
    target_range_sort: Number
    components: StrictStr = Field(description="Display form, e.g. 'V, S, M'")
    requires_verbal_components: StrictBool
    requires_somatic_components: StrictBool
    requires_material_components: StrictBool
    material: StrictStr | None = None
    can_be_cast_as_ritual: StrictBool
    ritual: StrictStr
    duration: StrictStr
    concentration: StrictStr
    requires_concentration: StrictBool
    casting_time: StrictStr
    level: StrictStr = Field(description="Display form, e.g. '3rd-level'")
    level_int: SpellLevel
    spell_level: SpellLevel
    school: StrictStr
    dnd_class: StrictStr
    archetype: StrictStr
    circles: StrictStr
    classes: tuple[StrictStr, ...] | None = None

    @model_validator(mode="after")
    def check_level(self) -> "Spell":
        if self.level_int != self.spell_level:
            raise ValueError(
                f"level_int {self.level_int} does not match spell_level {self.spell_level}"
            )
        return self


# =============================================================================
# Magic Item Models
# =============================================================================

class MagicItem(GameObject):
    type: StrictStr | None = None
    rarity: StrictStr
    requires_attunement: StrictBool

    @field_validator("requires_attunement", mode="before")
    @classmethod
    def parse_attunement(cls, v: Any) -> Any:
        # API sends "" or "requires attunement (by a wizard)"
        if isinstance(v, str):
            return "attunement" in v.lower()
        return v


__all__ = [
    "DocumentSlug",
    "DOCUMENTS",
    "Open5eModel",
    "Document",
    "GameObject",
    "Speed",
    "MonsterAction",
    "Monster",
    "Archetype",
    "CharacterClass",
    "AbilityScoreIncrease",
    "RaceSpeed",
    "Subrace",
    "Race",
    "Spell",
    "MagicItem",
    "abilities_or_empty",
]
