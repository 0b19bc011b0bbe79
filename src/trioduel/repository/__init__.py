from .json_store import DEFAULT_CATALOG_PATH, JsonCatalogRepository

__all__ = ["DEFAULT_CATALOG_PATH", "JsonCatalogRepository"]
