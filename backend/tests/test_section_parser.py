from services.section_parser import parse_sections, preprocess_for_skill_extraction


SAMPLE_RESUME = """John Doe
john.doe@email.com | (555) 123-4567

Summary
Experienced software engineer with 5+ years building web applications.

Experience
Senior Software Engineer | TechCorp | 2021 - Present
• Built REST APIs serving 1M requests/day
• Led team of 5 engineers

Education
B.S. Computer Science | State University | 2019

Skills
Python, JavaScript, React, Docker, AWS, PostgreSQL, Git
"""


def test_parse_sections_detects_all():
    sections = parse_sections(SAMPLE_RESUME)
    assert "summary" in sections
    assert "experience" in sections
    assert "education" in sections
    assert "skills" in sections
    assert "header" in sections


def test_parse_sections_content():
    sections = parse_sections(SAMPLE_RESUME)
    assert "REST APIs" in sections["experience"]
    assert "Computer Science" in sections["education"]
    assert "Python" in sections["skills"]


def test_parse_sections_empty():
    sections = parse_sections("")
    assert len(sections) <= 1  # At most 'header' with empty content


def test_skills_section_header_variants():
    text = "Technical Skills:\nPython, Go\n\nProjects\nA compiler"
    sections = parse_sections(text)
    assert sections["skills"] == "Python, Go"
    assert sections["projects"] == "A compiler"


def test_preprocess_leads_with_skills_section():
    result = preprocess_for_skill_extraction(SAMPLE_RESUME)
    assert result.startswith("Python, JavaScript, React, Docker, AWS, PostgreSQL, Git")
    assert "John Doe" in result


def test_preprocess_short_skills_section_keeps_text():
    text = "Jane Roe\nSkills\nPython\n\nExperience\nBuilt things"
    assert preprocess_for_skill_extraction(text) == "Jane Roe\nSkills\nPython\nExperience\nBuilt things"


def test_preprocess_without_sections():
    assert preprocess_for_skill_extraction("  Python   developer \n\n") == "Python developer"
