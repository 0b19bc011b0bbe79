"""JSON-based catalog repository."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from trioduel.domain.models import CharacterTemplate
from trioduel.schemas.catalog import CatalogFile, CharacterSchema, MoveSchema

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parents[1] / "data" / "characters.json"


class JsonCatalogRepository:
    """Load character templates from a ``{"characters": [...]}`` document."""

    def __init__(self, path: Path = DEFAULT_CATALOG_PATH) -> None:
        self.path = path
        self._adapter: TypeAdapter[CatalogFile] = TypeAdapter(CatalogFile)

    def load(self) -> tuple[CharacterTemplate, ...]:
        """Read and validate the catalog.

        Raises ``FileNotFoundError`` for a missing file and pydantic's
        ``ValidationError`` for malformed content.
        """

        data = self.path.read_bytes()
        try:
            catalog = self._adapter.validate_json(data)
        except ValidationError:
            logger.warning("catalog %s failed validation", self.path)
            raise
        templates = catalog.to_domain()
        logger.debug("loaded %d templates from %s", len(templates), self.path)
        return templates

    def save(self, templates: tuple[CharacterTemplate, ...] | list[CharacterTemplate]) -> Path:
        """Serialize ``templates`` to the repository path and return it."""

        catalog = CatalogFile(
            characters=[
                CharacterSchema(
                    id=template.id,
                    name=template.name,
                    element=template.element,
                    max_hp=template.max_hp,
                    max_resource=template.max_resource,
                    moves=[
                        MoveSchema(name=move.name, power=move.power, cost=move.cost)
                        for move in template.moves
                    ],
                    image=template.image,
                )
                for template in templates
            ]
        )
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(self._adapter.dump_json(catalog, indent=2))
        return self.path
