from .catalog import CatalogFile, CharacterSchema, MoveSchema

__all__ = [
    "CatalogFile",
    "CharacterSchema",
    "MoveSchema",
]
