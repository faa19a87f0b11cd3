"""Abstract base class for text embedding providers."""

from abc import ABC, abstractmethod
import logging

logger = logging.getLogger(__name__)


class EmbeddingUnavailableError(RuntimeError):
    """The provider could not produce an embedding (unconfigured or remote failure)."""


class EmbeddingProvider(ABC):
    """Maps free text to a fixed-length vector.

    Subclasses must implement:
        - provider_name: identifier used by the provider registry
        - load(): create clients / vectorizers, called once on first use
        - embed(text): async, returns exactly ``dimensions`` floats

    ``embed`` never raises for empty or very long text; it may raise
    EmbeddingUnavailableError, which callers treat as "no embedding".
    """

    provider_name: str = ""
    _loaded: bool = False

    def __init__(self, dimensions: int = 1536) -> None:
        if dimensions <= 0:
            raise ValueError(f"dimensions must be positive, got {dimensions}")
        self.dimensions = dimensions

    @abstractmethod
    def load(self) -> None:
        """Prepare the provider. Called once by ensure_loaded()."""

    @abstractmethod
    async def embed(self, text: str) -> list[float]:
        """Return the embedding of ``text``."""

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def ensure_loaded(self) -> None:
        """Load provider if not already loaded."""
        if not self._loaded:
            logger.info("Loading embedding provider: %s", self.provider_name)
            self.load()
            self._loaded = True
            logger.info("Embedding provider ready: %s (%d dims)", self.provider_name, self.dimensions)

    def zero_vector(self) -> list[float]:
        return [0.0] * self.dimensions

    def fit_dimensions(self, values: list[float]) -> list[float]:
        """Pad with zeros or truncate so the vector has exactly ``dimensions`` entries."""
        if len(values) >= self.dimensions:
            return [float(v) for v in values[: self.dimensions]]
        return [float(v) for v in values] + [0.0] * (self.dimensions - len(values))
