"""Application services shared by several use cases."""

from .entity_name_cache import CacheRefresh, EntityNameCache

__all__ = ["CacheRefresh", "EntityNameCache"]
