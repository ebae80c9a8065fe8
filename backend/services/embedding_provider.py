"""Sentence embedding provider with a guarded, load-once model.

The provider is created once at application startup and injected into
request handlers. The underlying model is loaded lazily on first use; any
number of concurrent first callers share a single in-flight load.
"""

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import Any

import numpy as np

from services.errors import EmbeddingUnavailable, InvalidInput

logger = logging.getLogger(__name__)

DEFAULT_MODEL_NAME = "sentence-transformers/all-MiniLM-L6-v2"
DEFAULT_BATCH_SIZE = 32


def load_sentence_transformer(model_name: str, device: str | None = None) -> Any:
    """Build a mean-pooled, L2-normalized SentenceTransformer for model_name."""
    from sentence_transformers import SentenceTransformer, models

    transformer = models.Transformer(model_name)
    pooling = models.Pooling(
        transformer.get_word_embedding_dimension(),
        pooling_mode="mean",
    )
    return SentenceTransformer(
        modules=[transformer, pooling, models.Normalize()],
        device=device,
    )


class EmbeddingProvider:
    """Text-to-vector provider backed by a lazily loaded encoder.

    ``loader`` is a zero-argument callable returning an object with a
    sentence-transformers compatible ``encode`` method. It defaults to
    building ``model_name`` with mean pooling and normalization.
    """

    def __init__(
        self,
        model_name: str = DEFAULT_MODEL_NAME,
        batch_size: int = DEFAULT_BATCH_SIZE,
        device: str | None = None,
        loader: Callable[[], Any] | None = None,
    ) -> None:
        self.model_name = model_name
        self.batch_size = batch_size
        self.device = device
        self._loader = loader or (lambda: load_sentence_transformer(model_name, device))
        self._model: Any = None
        self._loading: asyncio.Future | None = None
        self._init_lock = asyncio.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._model is not None

    def _load_model(self) -> Any:
        logger.info("Loading embedding model: %s", self.model_name)
        model = self._loader()
        logger.info("Embedding model loaded: %s", self.model_name)
        return model

    async def get_model(self) -> Any:
        """Return the loaded model, loading it on first call.

        Concurrent callers during the first load all await the same load.
        A caller cancelled while waiting does not cancel the shared load.
        A failed load is raised to every waiter as EmbeddingUnavailable and
        is not cached, so a later request may try again.
        """
        if self._model is not None:
            return self._model

        async with self._init_lock:
            if self._model is not None:
                return self._model
            if self._loading is None:
                loop = asyncio.get_running_loop()
                self._loading = loop.run_in_executor(None, self._load_model)
                self._loading.add_done_callback(self._on_load_done)
            loading = self._loading

        try:
            return await asyncio.shield(loading)
        except Exception as e:
            logger.error("Failed to load embedding model %s: %s", self.model_name, e)
            raise EmbeddingUnavailable(
                f"Embedding model '{self.model_name}' could not be loaded"
            ) from e

    def _on_load_done(self, loading: asyncio.Future) -> None:
        # Runs even when every waiter was cancelled
        if self._loading is loading:
            self._loading = None
        if not loading.cancelled() and loading.exception() is None:
            self._model = loading.result()

    async def warm_up(self) -> None:
        """Pre-load the model (e.g. at startup)."""
        await self.get_model()

    async def embed(self, texts: Sequence[str]) -> np.ndarray:
        """Embed a batch of texts into an (N, dim) array of unit vectors.

        Row i corresponds to texts[i]. Raises InvalidInput for an empty batch
        or any empty/non-string entry.
        """
        _validate_texts(texts)
        model = await self.get_model()
        batch = list(texts)

        try:
            vectors = await asyncio.to_thread(
                model.encode,
                batch,
                batch_size=self.batch_size,
                convert_to_numpy=True,
                show_progress_bar=False,
            )
        except Exception as e:
            logger.error("Embedding inference failed for %d texts: %s", len(batch), e)
            raise EmbeddingUnavailable("Embedding inference failed") from e

        vectors = np.asarray(vectors, dtype=np.float32)
        if vectors.ndim != 2 or vectors.shape[0] != len(batch):
            raise EmbeddingUnavailable(
                f"Encoder returned shape {vectors.shape} for {len(batch)} texts"
            )
        return vectors


def _validate_texts(texts: Sequence[str]) -> None:
    if isinstance(texts, str) or not texts:
        raise InvalidInput("Input must be a non-empty sequence of strings")
    for i, text in enumerate(texts):
        if not isinstance(text, str) or not text:
            raise InvalidInput(f"Entry {i} must be a non-empty string")
