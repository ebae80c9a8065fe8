import pytest

from services.chunk_extractor import (
    extract_all,
    extract_key,
    is_date_range,
    is_key_paragraph,
    is_skill_list,
    split_sentences,
)
from services.errors import InvalidInput


SAMPLE_RESUME_HTML = """
<html>
<head><title>Jane Doe - Resume</title><style>body { color: red; }</style></head>
<body>
  <h1>Jane Doe</h1>
  <p>jane.doe@email.com | (555) 123-4567</p>
  <h2>Summary</h2>
  <p>Backend engineer focused on data platforms. Enjoys mentoring junior developers.</p>
  <h2>Experience</h2>
  <div>
    <span>Senior Software Engineer</span>
    <span>August 2023 – Present</span>
  </div>
  <ul>
    <li>Built REST APIs serving 1M requests/day</li>
    <li>Led team of 5 engineers</li>
    <li>Jan 2020 - Dec 2022</li>
  </ul>
  <h2>Skills</h2>
  <p>Python, Java, Go, SQL</p>
  <p>EXPERT LEVEL ENGINEERING</p>
  <script>var tracking = "Built REST APIs";</script>
</body>
</html>
"""


# --- helpers ---


def test_is_date_range():
    assert is_date_range("August 2023 – Present")
    assert is_date_range("2019 - 2021")
    assert is_date_range("Jan 2020 — Dec 2022")
    assert not is_date_range("Built REST APIs serving 1M requests/day")


def test_is_skill_list():
    assert is_skill_list("Python, Java, Go, SQL")
    assert not is_skill_list("Python and Java")
    # Only two segments
    assert not is_skill_list("Python, Java")
    # Long clauses separated by commas read as a sentence
    long_sentence = (
        "Designed the ingestion pipeline for partner data feeds, "
        "reduced processing latency across all regional clusters, "
        "and documented the operational runbooks for on-call staff"
    )
    assert not is_skill_list(long_sentence)


def test_split_sentences():
    sentences = split_sentences("Built REST APIs. Led a team of five engineers.")
    assert sentences == ["Built REST APIs.", "Led a team of five engineers."]


def test_is_key_paragraph():
    assert is_key_paragraph("Backend engineer focused on data platforms.")
    assert not is_key_paragraph("Too short")
    assert not is_key_paragraph("x" * 301)
    assert not is_key_paragraph("Contact me at jane.doe@email.com anytime")
    assert not is_key_paragraph("Call me on (555) 123-4567 after five")
    assert not is_key_paragraph("EXPERT LEVEL ENGINEERING")
    assert not is_key_paragraph("Worked there August 2023 – Present")


# --- extract_all ---


def test_extract_all_blank_raises():
    with pytest.raises(InvalidInput):
        extract_all("")
    with pytest.raises(InvalidInput):
        extract_all("   \n\t ")


def test_extract_all_non_string_raises():
    with pytest.raises(InvalidInput):
        extract_all(None)


def test_extract_all_skips_headings_scripts_and_head():
    chunks = extract_all(SAMPLE_RESUME_HTML)
    assert "Jane Doe" not in chunks
    assert "Summary" not in chunks
    assert "Jane Doe - Resume" not in chunks
    assert not any("tracking" in c for c in chunks)
    assert not any("color" in c for c in chunks)


def test_extract_all_drops_date_ranges():
    chunks = extract_all(SAMPLE_RESUME_HTML)
    assert "August 2023 – Present" not in chunks
    assert "Jan 2020 - Dec 2022" not in chunks


def test_extract_all_splits_skill_list():
    chunks = extract_all("<p>Python, Java, Go, SQL</p>")
    assert chunks == ["Python", "Java", "Go", "SQL"]


def test_extract_all_sentence_tokenizes_leaf_text():
    chunks = extract_all(SAMPLE_RESUME_HTML)
    assert "Backend engineer focused on data platforms." in chunks
    assert "Enjoys mentoring junior developers." in chunks
    assert "Built REST APIs serving 1M requests/day" in chunks
    assert "Senior Software Engineer" in chunks


def test_extract_all_only_leaf_elements():
    html = "<div><p>Outer text <b>bold part</b></p></div>"
    chunks = extract_all(html)
    assert chunks == ["bold part"]


def test_extract_all_deduplicates_case_sensitive():
    html = "<ul><li>Python</li><li>Python</li><li>python</li></ul>"
    assert extract_all(html) == ["Python", "python"]


def test_extract_all_idempotent():
    assert set(extract_all(SAMPLE_RESUME_HTML)) == set(extract_all(SAMPLE_RESUME_HTML))


def test_extract_all_fragment_without_body():
    chunks = extract_all("<span>Shipped a billing service.</span>")
    assert chunks == ["Shipped a billing service."]


# --- extract_key ---


def test_extract_key_blank_returns_empty():
    assert extract_key("") == []
    assert extract_key("  \n ") == []


def test_extract_key_list_items_verbatim():
    html = "<ul><li>Built REST APIs. Cut latency by 40%.</li></ul>"
    assert extract_key(html) == ["Built REST APIs. Cut latency by 40%."]


def test_extract_key_filters_noise():
    chunks = extract_key(SAMPLE_RESUME_HTML)
    assert "Built REST APIs serving 1M requests/day" in chunks
    assert "Led team of 5 engineers" in chunks
    assert "Backend engineer focused on data platforms." in chunks
    assert "Enjoys mentoring junior developers." in chunks
    # Paragraphs are kept whole, no skill-list split
    assert "Python, Java, Go, SQL" in chunks
    assert "Python" not in chunks
    # Contact line, upper-case banner and dates are noise
    assert not any("@" in c for c in chunks)
    assert "EXPERT LEVEL ENGINEERING" not in chunks
    assert "Jan 2020 - Dec 2022" not in chunks
    # Only <li> and <p> are considered
    assert "Senior Software Engineer" not in chunks


def test_date_range_never_emitted():
    html = "<ul><li>August 2023 – Present</li></ul><p>August 2023 – Present</p><span>August 2023 – Present</span>"
    assert "August 2023 – Present" not in extract_all(html)
    assert "August 2023 – Present" not in extract_key(html)


def test_extract_key_ignores_headings():
    html = "<h3>Led platform migration to Kubernetes</h3><p>Led platform migration to Kubernetes</p>"
    assert extract_key(html) == ["Led platform migration to Kubernetes"]
