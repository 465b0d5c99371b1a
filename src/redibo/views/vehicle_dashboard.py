"""State holder for the host's vehicle dashboard."""

from typing import Any, List, Optional

from ..parsing.normalizer import MalformedRecordError, normalize_vehicle_envelope
from ..state.selection import SelectionState
from ..utils.logging import get_logger
from ..vehicles.vehicle_models import CanonicalVehicle, VehicleFleet
from .comment_listing import LoadResult
from .derived import FleetStats, fleet_stats

logger = get_logger(__name__)


class VehicleDashboard:
    """Full vehicle collection with a single detailed selection; no paging."""

    def __init__(self) -> None:
        self.fleet = VehicleFleet()
        self.selection = SelectionState()
        self.last_error: Optional[str] = None

    @property
    def vehicles(self) -> List[CanonicalVehicle]:
        return self.fleet.vehicles

    def load(self, payload: Any) -> LoadResult:
        """Replace the fleet from a ``{autos, total, autos_con_placa}`` payload."""
        try:
            fleet = normalize_vehicle_envelope(payload)
        except MalformedRecordError as e:
            logger.warning("Discarding vehicle payload: %s", e)
            self.fleet = VehicleFleet()
            self.last_error = str(e)
            self.selection.clear()
            return LoadResult(ok=False, error=str(e))

        self.fleet = fleet
        self.last_error = None
        self.selection.prune(self.vehicles)
        if fleet.reported_total and fleet.reported_total != len(fleet.vehicles):
            logger.info(
                "Server reported %d vehicles but sent %d", fleet.reported_total, len(fleet.vehicles)
            )
        return LoadResult(ok=True, count=len(fleet.vehicles))

    def select(self, vehicle_id: int) -> None:
        self.selection.select(vehicle_id)

    def clear_selection(self) -> None:
        self.selection.clear()

    def selected(self) -> Optional[CanonicalVehicle]:
        return self.selection.current(self.vehicles)

    def stats(self) -> FleetStats:
        """Counters recomputed from the current collection."""
        return fleet_stats(self.vehicles)
