"""Shared test configuration, fixtures and pytest markers."""

import pytest

from config import settings
from services.taxonomy_resolver import TaxonomyResolver
from services.taxonomy_store import InMemoryTaxonomyStore, load_seed


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "seed: loads the bundled taxonomy seed file"
    )


@pytest.fixture
def store() -> InMemoryTaxonomyStore:
    """Small hand-built taxonomy."""
    s = InMemoryTaxonomyStore()
    react = s.add_skill("React", "frameworks", popularity=96)
    s.add_skill("Redux", "frameworks", popularity=40)
    js = s.add_skill("JavaScript", "languages", popularity=97)
    k8s = s.add_skill("Kubernetes", "tools", popularity=89)
    s.add_skill("Python", "languages", popularity=98)
    s.add_equivalent(react.id, "ReactJS")
    s.add_equivalent(react.id, "React.js")
    s.add_equivalent(js.id, "JS")
    s.add_equivalent(k8s.id, "k8s")
    s.add_relationship(js.id, react.id, "used-with")
    return s


@pytest.fixture
def resolver(store) -> TaxonomyResolver:
    return TaxonomyResolver(store)


@pytest.fixture(scope="session")
def seed_resolver() -> TaxonomyResolver:
    return TaxonomyResolver(load_seed(settings.taxonomy_seed_path))
