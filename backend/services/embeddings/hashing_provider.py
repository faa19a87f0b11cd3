"""Deterministic local embeddings via feature hashing.

No model download and no network: the same text always maps to the same
vector, which makes it the default for tests and offline runs. Similarity
is lexical (shared word unigrams/bigrams), not semantic.
"""

import logging

from services.embeddings.base import EmbeddingProvider

logger = logging.getLogger(__name__)


class HashingEmbeddingProvider(EmbeddingProvider):
    provider_name = "hashing"

    def __init__(self, dimensions: int = 1536, max_chars: int = 8000) -> None:
        super().__init__(dimensions)
        self.max_chars = max_chars
        self._vectorizer = None

    def load(self) -> None:
        from sklearn.feature_extraction.text import HashingVectorizer

        self._vectorizer = HashingVectorizer(
            n_features=self.dimensions,
            ngram_range=(1, 2),
            alternate_sign=True,
            norm="l2",
        )

    async def embed(self, text: str) -> list[float]:
        return self.embed_sync(text)

    def embed_sync(self, text: str) -> list[float]:
        self.ensure_loaded()
        if not text or not text.strip():
            return self.zero_vector()
        row = self._vectorizer.transform([text[: self.max_chars]]).toarray()[0]
        return [float(v) for v in row]
