"""Caches em memória da aplicação."""

from app.infra.cache.ttl_cache import DEFAULT_TTL_SECONDS, TTLCache

__all__ = ["DEFAULT_TTL_SECONDS", "TTLCache"]
