from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from trioduel.domain.enums import ElementType
from trioduel.domain.models import CharacterTemplate, Move
from trioduel.domain.rules_config import DEFAULT_RULES


class MoveSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, description="Move name shown in the battle log")
    power: int = Field(
        ...,
        ge=0,
        validation_alias=AliasChoices("power", "damage"),
        description="Base power before type and variance",
    )
    cost: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("cost", "resource_cost", "resourceCost", "mpCost"),
        description="Resource paid to use the move",
    )

    def to_domain(self) -> Move:
        return Move(name=self.name, power=self.power, cost=self.cost)


class CharacterSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1, description="Stable catalog identifier")
    name: str = Field(..., min_length=1, description="Display name")
    element: ElementType = Field(
        default=ElementType.UNCLASSIFIED,
        validation_alias=AliasChoices("element", "type"),
        description="Elemental type; unknown values load as unclassified",
    )
    max_hp: int = Field(..., gt=0, validation_alias=AliasChoices("max_hp", "maxHp"))
    max_resource: int = Field(
        default=DEFAULT_RULES.roster.default_max_resource,
        gt=0,
        validation_alias=AliasChoices("max_resource", "maxResource", "maxMp", "max_mp"),
    )
    moves: list[MoveSchema] = Field(
        default_factory=list, validation_alias=AliasChoices("moves", "attacks")
    )
    image: str | None = Field(None, description="Sprite or emoji used by front ends")

    @field_validator("element", mode="before")
    @classmethod
    def _coerce_element(cls, value: object) -> ElementType:
        if isinstance(value, ElementType):
            return value
        return ElementType.parse(value if isinstance(value, str) else None)

    def to_domain(self) -> CharacterTemplate:
        return CharacterTemplate(
            id=self.id,
            name=self.name,
            element=self.element,
            max_hp=self.max_hp,
            max_resource=self.max_resource,
            moves=tuple(move.to_domain() for move in self.moves),
            image=self.image,
        )


class CatalogFile(BaseModel):
    characters: list[CharacterSchema] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_ids(self) -> "CatalogFile":
        seen: set[str] = set()
        for character in self.characters:
            if character.id in seen:
                raise ValueError(f"duplicate character id: {character.id}")
            seen.add(character.id)
        return self

    def to_domain(self) -> tuple[CharacterTemplate, ...]:
        return tuple(character.to_domain() for character in self.characters)
