"""Edge store — the persistence boundary for labeled measurements."""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod

from edgelabeler.models import MeasurementEdgesPayload

logger = logging.getLogger(__name__)


class EdgeStore(ABC):
    """Accepts the final edge collection of a measurement."""

    @abstractmethod
    async def save_edges(self, payload: MeasurementEdgesPayload) -> None:
        """Persist `payload`. Raise on failure."""
        ...


class InMemoryEdgeStore(EdgeStore):
    """Keeps saved payloads in a dict keyed by measurement id."""

    def __init__(self) -> None:
        self.measurements: dict[str, MeasurementEdgesPayload] = {}

    async def save_edges(self, payload: MeasurementEdgesPayload) -> None:
        self.measurements[payload.measurement_id] = payload.model_copy(deep=True)
        logger.info(
            f"Stored {len(payload.edges)} edges for measurement {payload.measurement_id}"
        )

    def get(self, measurement_id: str) -> MeasurementEdgesPayload | None:
        return self.measurements.get(measurement_id)
