import pytest

from models.schemas.skill_set import ScoredSkill, SkillSet
from services.skill_matcher import (
    find_partial_matches,
    match_skills,
    round_half_up_percentage,
    token_similarity,
)


def make_set(kind="resume", **skills):
    return SkillSet(
        kind=kind,
        skills={cat: [ScoredSkill(name=n, confidence=0.9) for n in names] for cat, names in skills.items()},
    )


class TestMatchSkills:
    def test_containment_match(self):
        report = match_skills(make_set(frameworks=["React"]), make_set("job", frameworks=["React.js"]))
        assert report.match_percentage == 100
        assert report.matched_skills == ["react.js"]
        assert report.missing_skills == []

    def test_empty_job_set(self):
        report = match_skills(make_set(languages=["Python"]), make_set("job"))
        assert report.match_percentage == 0
        assert report.matched_skills == []
        assert report.missing_skills == []
        assert report.partial_matches == []

    def test_empty_resume(self):
        report = match_skills(make_set(), make_set("job", languages=["Python", "Rust"]))
        assert report.match_percentage == 0
        assert report.missing_skills == ["python", "rust"]

    def test_two_of_three_rounds_to_67(self):
        report = match_skills(
            make_set(languages=["Python"], databases=["SQL"]),
            make_set("job", languages=["Python", "Rust"], databases=["SQL"]),
        )
        assert report.match_percentage == 67
        assert report.matched_skills == ["python", "sql"]
        assert report.missing_skills == ["rust"]

    def test_job_skill_counted_once(self):
        job = make_set("job", frameworks=["PyTorch"], ai_frameworks=["PyTorch"], other=["pytorch"])
        report = match_skills(make_set(frameworks=["PyTorch"]), job)
        assert report.matched_skills == ["pytorch"]
        assert report.match_percentage == 100

    def test_java_matches_javascript(self):
        report = match_skills(make_set(languages=["Java"]), make_set("job", languages=["JavaScript"]))
        assert report.match_percentage == 100

    def test_equivalent_via_resolver(self, resolver):
        resume = make_set(tools=["k8s"])
        job = make_set("job", tools=["Kubernetes"])
        assert match_skills(resume, job).missing_skills == ["kubernetes"]
        assert match_skills(resume, job, resolver).matched_skills == ["kubernetes"]

    def test_result_is_deterministic(self, resolver):
        resume = make_set(languages=["Python", "Go"], tools=["Docker"])
        job = make_set("job", languages=["Python", "Rust"], tools=["Kubernetes", "Docker"])
        assert match_skills(resume, job, resolver) == match_skills(resume, job, resolver)


class TestPartialMatches:
    def test_shared_token(self):
        report = match_skills(
            make_set(technical=["Machine Learning"]),
            make_set("job", technical=["Deep Learning"]),
        )
        assert report.match_percentage == 0
        assert len(report.partial_matches) == 1
        partial = report.partial_matches[0]
        assert (partial.resume_skill, partial.job_skill) == ("machine learning", "deep learning")
        assert partial.similarity == pytest.approx(1 / 3, abs=1e-3)

    def test_sorted_by_similarity(self):
        partial = find_partial_matches(
            ["google cloud platform", "google cloud"],
            ["google cloud functions"],
        )
        assert [p.resume_skill for p in partial] == ["google cloud", "google cloud platform"]
        assert partial[0].similarity >= partial[1].similarity

    def test_below_threshold_dropped(self):
        assert find_partial_matches(["python"], ["rust"]) == []

    def test_token_similarity(self):
        assert token_similarity("React", "react") == 1.0
        assert token_similarity("data pipelines", "data engineering") == pytest.approx(1 / 3)
        assert token_similarity("", "python") == 0.0


class TestCategoryBreakdown:
    def test_per_category_lists(self):
        report = match_skills(
            make_set(languages=["Python"], frameworks=["React"], soft=["Leadership"]),
            make_set("job", languages=["Python", "Rust"], frameworks=["Angular"]),
        )
        breakdown = {b.category: b for b in report.skills_by_category}
        assert breakdown["languages"].matched == ["python"]
        assert breakdown["languages"].missing == ["rust"]
        assert breakdown["frameworks"].matched == []
        assert breakdown["frameworks"].missing == ["angular"]
        # present only in the resume set
        assert breakdown["soft"].matched == []
        assert breakdown["soft"].missing == []

    def test_matching_is_scoped_to_category(self):
        report = match_skills(
            make_set(tools=["Python"]),
            make_set("job", languages=["Python"]),
        )
        breakdown = {b.category: b for b in report.skills_by_category}
        assert report.match_percentage == 100
        assert breakdown["languages"].missing == ["python"]


@pytest.mark.parametrize("part,whole,expected", [
    (0, 3, 0),
    (1, 3, 33),
    (2, 3, 67),
    (1, 8, 13),
    (1, 200, 1),
    (3, 3, 100),
    (1, 0, 0),
])
def test_round_half_up_percentage(part, whole, expected):
    assert round_half_up_percentage(part, whole) == expected
