import pytest

from services.errors import StoreUnavailable
from services.taxonomy_resolver import TaxonomyResolver
from services.taxonomy_store import InMemoryTaxonomyStore


class UnavailableStore(InMemoryTaxonomyStore):
    def find_by_normalized_name(self, normalized_name):
        raise StoreUnavailable("connection refused")

    def all_skills(self):
        raise StoreUnavailable("connection refused")

    def search_names(self, fragment, limit=20):
        raise StoreUnavailable("connection refused")


class TestLookups:
    def test_find_skill_exact_only(self, resolver):
        assert resolver.find_skill("  REACT ").name == "React"
        assert resolver.find_skill("Reac") is None
        assert resolver.find_skill("") is None

    def test_find_equivalents(self, resolver):
        assert set(resolver.find_equivalents("React")) == {"ReactJS", "React.js"}
        assert resolver.find_equivalents("Vue") == []

    def test_resolve_term(self, resolver):
        assert resolver.resolve_term("k8s").name == "Kubernetes"
        assert resolver.resolve_term("Kubernetes").name == "Kubernetes"
        assert resolver.resolve_term("unknown") is None

    def test_related_skills_are_children(self, resolver):
        assert [s.name for s in resolver.find_related_skills("JavaScript")] == ["React"]
        assert resolver.find_related_skills("React") == []

    def test_search_by_prefix(self, resolver):
        assert [s.name for s in resolver.search_by_prefix("re")] == ["React", "Redux"]
        assert resolver.search_by_prefix("re", limit=0) == []
        assert resolver.search_by_prefix("") == []

    def test_popular_skills(self, resolver):
        assert [s.name for s in resolver.get_popular_skills(2)] == ["Python", "JavaScript"]

    def test_skills_by_category(self, resolver):
        assert [s.name for s in resolver.find_skills_by_category("tools")] == ["Kubernetes"]

    def test_categories_of(self, resolver):
        assert resolver.categories_of("PyTorch") == ["frameworks"]
        assert resolver.categories_of("Redux") == ["other"]

    def test_related_skills_listed_once_across_edge_types(self, store):
        js = store.find_by_normalized_name("javascript")
        react = store.find_by_normalized_name("react")
        store.add_relationship(js.id, react.id, "requires")
        related = TaxonomyResolver(store).find_related_skills("JavaScript")
        assert [s.name for s in related] == ["React"]

    def test_related_domain_terms(self, resolver):
        assert resolver.related_domain_terms("PyTorch", limit=2) == ["TensorFlow", "Keras"]
        assert "PyTorch" not in resolver.related_domain_terms("PyTorch", limit=50)
        assert resolver.related_domain_terms("Redux") == []

    def test_all_categories(self, store):
        assert TaxonomyResolver(store).get_all_categories() == []
        store.add_category("Frameworks")
        assert TaxonomyResolver(store).get_all_categories() == ["Frameworks"]

    @pytest.mark.seed
    def test_seed_categories(self, seed_resolver):
        assert "Cloud Platforms" in seed_resolver.get_all_categories()


class TestEquivalence:
    def test_normalized_equality(self, resolver):
        assert resolver.are_equivalent("react", "REACT")

    def test_registered_equivalent_both_directions(self, resolver):
        assert resolver.are_equivalent("React", "ReactJS")
        assert resolver.are_equivalent("reactjs", "React")

    def test_not_equivalent(self, resolver):
        assert not resolver.are_equivalent("React", "Redux")

    def test_not_transitive(self):
        store = InMemoryTaxonomyStore()
        a = store.add_skill("Alpha")
        b = store.add_skill("Beta")
        store.add_equivalent(a.id, "Beta", strict=False)
        store.add_equivalent(b.id, "Gamma")
        r = TaxonomyResolver(store)
        assert r.are_equivalent("Alpha", "Beta")
        assert r.are_equivalent("Beta", "Gamma")
        assert not r.are_equivalent("Alpha", "Gamma")

    def test_without_store_exact_only(self):
        r = TaxonomyResolver(None)
        assert r.are_equivalent("Python", "python")
        assert not r.are_equivalent("React", "ReactJS")

    def test_semantic_matches(self, resolver):
        matches = resolver.find_semantic_matches(["React", "Python"], ["React.js", "k8s"])
        assert matches == {"React": ["React.js"]}


class TestStoreUnavailable:
    @pytest.fixture
    def down(self):
        return TaxonomyResolver(UnavailableStore())

    def test_lookups_degrade_to_empty(self, down):
        assert down.find_skill("React") is None
        assert down.find_equivalents("React") == []
        assert down.get_popular_skills() == []
        assert down.search_by_prefix("re") == []

    def test_equivalence_degrades_to_exact(self, down):
        assert down.are_equivalent("React", "react")
        assert not down.are_equivalent("React", "ReactJS")


class TestAmbiguousEquivalents:
    def test_clean_store(self, resolver):
        assert resolver.ambiguous_equivalents() == {}

    def test_term_with_two_owners(self, store):
        redux = store.find_by_normalized_name("redux")
        store.add_equivalent(redux.id, "react.js")
        result = TaxonomyResolver(store).ambiguous_equivalents()
        assert result == {"react.js": ["react", "redux"]}

    @pytest.mark.seed
    def test_seed_collisions_reported(self, seed_resolver):
        result = seed_resolver.ambiguous_equivalents()
        assert set(result["azure"]) == {"azure", "microsoft azure"}
