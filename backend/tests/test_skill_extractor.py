from models.schemas.skill_set import PRIMARY_CATEGORIES
from services.skill_extractor import extract_skills_pattern


def test_finds_languages_with_word_boundaries():
    found = extract_skills_pattern("Senior JavaScript and Python developer")
    assert "JavaScript" in found["languages"]
    assert "Python" in found["languages"]
    assert "Java" not in found["languages"]


def test_go_not_inside_google():
    found = extract_skills_pattern("Worked at Google on search ranking")
    assert "Go" not in found["languages"]


def test_symbol_languages():
    found = extract_skills_pattern("Shipped C++ and C# services")
    assert "C++" in found["languages"]
    assert "C#" in found["languages"]


def test_ai_terms_reported_as_technical():
    found = extract_skills_pattern("Applied machine learning and NLP to support tickets")
    assert "Machine learning" in found["technical"]
    assert "NLP" in found["technical"]


def test_ai_not_inside_email():
    found = extract_skills_pattern("Reach me by email")
    assert "AI" not in found["technical"]


def test_soft_skills_and_databases():
    found = extract_skills_pattern("Strong leadership. Used PostgreSQL and Redis.")
    assert found["soft"] == ["Leadership"]
    assert found["databases"] == ["PostgreSQL", "Redis"]


def test_all_categories_present():
    found = extract_skills_pattern("")
    assert set(found) == set(PRIMARY_CATEGORIES)
    assert not any(found.values())
