"""Shared test configuration, pytest markers and a deterministic fake encoder."""

import os
import re
import zlib

import numpy as np
import pytest

from services.embedding_provider import EmbeddingProvider

FAKE_DIM = 4096
_TOKEN_RE = re.compile(r"[a-z0-9+#]+")


class HashingEncoder:
    """Bag-of-words encoder: identical token sets give identical unit vectors.

    Stands in for a SentenceTransformer so tests never download a model.
    """

    def __init__(self, dim: int = FAKE_DIM) -> None:
        self.dim = dim
        self.calls: list[list[str]] = []

    def encode(self, texts, batch_size=32, convert_to_numpy=True, show_progress_bar=False):
        self.calls.append(list(texts))
        out = np.zeros((len(texts), self.dim), dtype=np.float32)
        for i, text in enumerate(texts):
            for token in _TOKEN_RE.findall(text.lower()):
                out[i, zlib.crc32(token.encode()) % self.dim] += 1.0
            norm = np.linalg.norm(out[i])
            if norm > 0:
                out[i] /= norm
        return out


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: loads real ML models (slow, needs GPU/CPU)"
    )


def pytest_collection_modifyitems(config, items):
    """Skip real-model tests unless RUN_INTEGRATION=1."""
    if os.environ.get("RUN_INTEGRATION") == "1":
        return
    skip = pytest.mark.skip(reason="set RUN_INTEGRATION=1 to load real models")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def hashing_encoder():
    return HashingEncoder()


@pytest.fixture
def fake_provider(hashing_encoder):
    return EmbeddingProvider(model_name="fake-hashing", loader=lambda: hashing_encoder)
