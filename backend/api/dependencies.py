"""Shared dependencies for API routes."""

from fastapi import Request

from config import settings
from services.embedding_provider import EmbeddingProvider


def create_embedding_provider() -> EmbeddingProvider:
    return EmbeddingProvider(
        model_name=settings.embedding_model_name,
        batch_size=settings.embedding_batch_size,
        device=settings.embedding_device,
    )


def get_embedding_provider(request: Request) -> EmbeddingProvider:
    return request.app.state.embedding_provider
