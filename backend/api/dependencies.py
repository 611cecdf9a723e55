"""Shared dependencies for API routes."""

from functools import lru_cache

from config import settings
from services.session_store import SessionStore
from services.taxonomy_resolver import TaxonomyResolver
from services.taxonomy_store import load_seed


@lru_cache
def get_resolver() -> TaxonomyResolver:
    """Resolver over the seeded in-memory taxonomy, built once per process."""
    store = load_seed(settings.taxonomy_seed_path)
    return TaxonomyResolver(store)


@lru_cache
def get_session_store() -> SessionStore:
    return SessionStore()
