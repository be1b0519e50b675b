"""Abstract base class for all scoring stage services."""

from abc import ABC, abstractmethod
from typing import Any
import logging
import threading

logger = logging.getLogger(__name__)


class BaseScoringService(ABC):
    """Base class for the stateless scoring stages.

    Subclasses must implement:
        - service_name: identifier used in the registry
        - load(): compile lookup tables/patterns and resolve collaborators
        - predict(**kwargs): run the stage and return its typed schema

    load() runs at most once per instance, even when several worker threads
    reach ensure_loaded() together.
    """

    service_name: str = ""
    _loaded: bool = False
    # Re-entrant: a stage's load() may load the stages it depends on
    _load_lock = threading.RLock()

    @abstractmethod
    def load(self) -> None:
        """Prepare read-only tables. Called once by the registry."""

    @abstractmethod
    def predict(self, **kwargs: Any) -> Any:
        """Run the stage. Returns a Pydantic schema defined per stage."""

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def ensure_loaded(self) -> None:
        """Load the service if not already loaded."""
        if self._loaded:
            return
        with self._load_lock:
            if self._loaded:
                return
            logger.info("Loading scoring service: %s", self.service_name)
            self.load()
            self._loaded = True
            logger.info("Scoring service ready: %s", self.service_name)
