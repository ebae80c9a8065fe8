"""Resume HTML segmentation into text chunks for semantic matching.

Two views of the same document are produced:

- ``extract_all``: every leaf text node, split into skill-list segments or
  sentences. Used as the candidate pool when matching job requirements.
- ``extract_key``: list items and qualifying paragraphs only. Used as the
  resume side when measuring how focused the resume is on the job.
"""

import logging
import re

from bs4 import BeautifulSoup
from nltk.tokenize.punkt import PunktSentenceTokenizer

from services.errors import InvalidInput

logger = logging.getLogger(__name__)

# Tags removed before traversal: non-content and headings
_STRIP_TAGS = ["style", "script", "h1", "h2", "h3", "h4", "h5", "h6"]

# "August 2023 – Present", "2019 - 2021", "Jan 2020 — Dec 2021"
DATE_RANGE_RE = re.compile(
    r"(\d{4}|\w+\s\d{4})\s*[-–—]\s*(\d{4}|\w+\s\d{4}|\w+)", re.IGNORECASE
)
EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+\.[\w.-]+")
PHONE_RE = re.compile(r"(?:\+?\d{1,3}[\s.-]?)?\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}")

# Skill list heuristic: more than two segments, short on average
SKILL_LIST_MIN_SEGMENTS = 3
SKILL_LIST_MAX_AVG_LEN = 35

# Paragraph length window for key content
KEY_PARAGRAPH_MIN_LEN = 15
KEY_PARAGRAPH_MAX_LEN = 300

# Untrained Punkt: default parameters, no corpus download needed
_sentence_tokenizer = PunktSentenceTokenizer()


def is_date_range(text: str) -> bool:
    """Check whether text looks like an employment date range."""
    return bool(DATE_RANGE_RE.search(text))


def is_skill_list(text: str) -> bool:
    """Heuristic: comma-separated, 3+ segments, average segment under 35 chars."""
    if "," not in text:
        return False
    segments = text.split(",")
    return (
        len(segments) >= SKILL_LIST_MIN_SEGMENTS
        and len(text) / len(segments) < SKILL_LIST_MAX_AVG_LEN
    )


def split_sentences(text: str) -> list[str]:
    """Sentence-tokenize text and return trimmed, non-empty sentences."""
    return [s.strip() for s in _sentence_tokenizer.tokenize(text) if s.strip()]


def is_key_paragraph(text: str) -> bool:
    """Noise filter for paragraphs: drops dates, contact lines, banners."""
    if not KEY_PARAGRAPH_MIN_LEN <= len(text) <= KEY_PARAGRAPH_MAX_LEN:
        return False
    if is_date_range(text):
        return False
    if EMAIL_RE.search(text) or PHONE_RE.search(text):
        return False
    if text.isupper():
        return False
    return True


def _dedupe(chunks: list[str]) -> list[str]:
    """Exact-match deduplication keeping first-seen order."""
    return list(dict.fromkeys(chunks))


def _clean_soup(html: str) -> BeautifulSoup:
    soup = BeautifulSoup(html, "html.parser")
    # extract() tolerates tags nested inside an already removed tag
    for tag in soup.find_all(_STRIP_TAGS):
        tag.extract()
    return soup


def _leaf_texts(soup: BeautifulSoup) -> list[str]:
    """Trimmed text of every element with no element children, in document order."""
    root = soup.body or soup
    texts: list[str] = []
    for element in root.find_all(True):
        if element.find(True) is not None:
            continue
        text = element.get_text().strip()
        if text:
            texts.append(text)
    return texts


def extract_all(html: str) -> list[str]:
    """Extract every meaningful text chunk from resume HTML.

    Leaf text that looks like a skill list is split on commas; everything
    else is split into sentences. Date ranges are dropped.

    Raises InvalidInput if html is not a non-empty string.
    """
    if not isinstance(html, str) or not html.strip():
        raise InvalidInput("Input must be a non-empty HTML string")

    soup = _clean_soup(html)
    chunks: list[str] = []

    for text in _leaf_texts(soup):
        if is_date_range(text):
            continue
        if is_skill_list(text):
            chunks.extend(seg.strip() for seg in text.split(",") if seg.strip())
        else:
            chunks.extend(split_sentences(text))

    result = _dedupe(chunks)
    logger.debug("Extracted %d chunks from resume HTML", len(result))
    return result


def extract_key(html: str) -> list[str]:
    """Extract key resume content: list items and qualifying paragraphs.

    Unlike extract_all, blank input yields an empty list.
    """
    if not isinstance(html, str) or not html.strip():
        return []

    soup = _clean_soup(html)
    chunks: list[str] = []

    # List items are treated as atomic achievement statements
    for item in soup.find_all("li"):
        text = item.get_text().strip()
        if text and not is_date_range(text):
            chunks.append(text)

    for para in soup.find_all("p"):
        text = para.get_text().strip()
        if is_key_paragraph(text):
            chunks.extend(split_sentences(text))

    result = _dedupe(chunks)
    logger.debug("Extracted %d key chunks from resume HTML", len(result))
    return result
