"""Bidirectional best-match coverage between two embedded text sets."""

from collections.abc import Sequence

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity as sklearn_cosine

from models.responses import NO_MATCH_SCORE, CoverageEntry

EmbeddedText = tuple[str, np.ndarray]


def cosine_similarity(a, b) -> float:
    """Cosine similarity of two vectors; 0.0 if either has zero magnitude."""
    a = np.asarray(a, dtype=np.float64).reshape(1, -1)
    b = np.asarray(b, dtype=np.float64).reshape(1, -1)
    # sklearn normalizes zero vectors to zero, so their similarity is 0
    return float(sklearn_cosine(a, b)[0][0])


def best_matches(
    sources: Sequence[EmbeddedText],
    candidates: Sequence[EmbeddedText],
) -> list[CoverageEntry]:
    """For each source, find the highest-scoring candidate by cosine similarity.

    Ties keep the first candidate in scan order. With no candidates every
    entry carries best_match_text=None and the -1 sentinel score.
    """
    if not sources:
        return []

    if not candidates:
        return [
            CoverageEntry(source_text=text, best_match_text=None, score=NO_MATCH_SCORE)
            for text, _ in sources
        ]

    source_matrix = np.vstack([np.asarray(vec, dtype=np.float64) for _, vec in sources])
    candidate_matrix = np.vstack([np.asarray(vec, dtype=np.float64) for _, vec in candidates])
    sim_matrix = sklearn_cosine(source_matrix, candidate_matrix)  # (n_sources, n_candidates)

    entries: list[CoverageEntry] = []
    for i, (text, _) in enumerate(sources):
        # argmax returns the first index on ties
        best_idx = int(np.argmax(sim_matrix[i]))
        entries.append(CoverageEntry(
            source_text=text,
            best_match_text=candidates[best_idx][0],
            score=float(sim_matrix[i, best_idx]),
        ))
    return entries


def sort_by_score(entries: Sequence[CoverageEntry]) -> list[CoverageEntry]:
    """Stable sort, highest score first."""
    return sorted(entries, key=lambda e: e.score, reverse=True)


def coverage_scores(entries: Sequence[CoverageEntry]) -> dict[str, float]:
    """Map each source text to its best-match score.

    Entries without a match score 0.0; the -1 sentinel is not a similarity.
    """
    return {e.source_text: e.score if e.has_match else 0.0 for e in entries}
