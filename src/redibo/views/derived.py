"""Presentation-only values computed from canonical data."""

import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Iterable, Optional, Sequence

from ..reviews.review_models import CanonicalComment, VehicleSummary
from ..vehicles.vehicle_models import AvailabilityState, CanonicalVehicle

TOTAL_STARS = 5
PLACEHOLDER_IMAGE = "/placeholder.svg?height=80&width=120"

SPANISH_MONTHS = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)

AVAILABILITY_LABELS = {
    AvailabilityState.AVAILABLE: "DISPONIBLE",
    AvailabilityState.RESERVED: "RESERVADO",
    AvailabilityState.MAINTENANCE: "MANTENIMIENTO",
}


@dataclass(frozen=True)
class StarBreakdown:
    full: int
    has_half: bool
    empty: int

    def render(self, full_icon: str = "★", half_icon: str = "⯪", empty_icon: str = "☆") -> str:
        return full_icon * self.full + (half_icon if self.has_half else "") + empty_icon * self.empty


@dataclass(frozen=True)
class FleetStats:
    total: int
    with_plate: int


def star_breakdown(rating: float) -> StarBreakdown:
    """
    Decompose a rating into full/half/empty star icons.

    Precondition: 0 <= rating <= 5 (clamped upstream by the normalizer). For
    ratings in range the three parts always add up to five icons.
    """
    full = math.floor(rating)
    has_half = rating % 1 >= 0.5
    empty = TOTAL_STARS - full - (1 if has_half else 0)
    return StarBreakdown(full=full, has_half=has_half, empty=empty)


def count_vehicles(vehicles: Sequence[CanonicalVehicle]) -> int:
    return len(vehicles)


def count_with_plate(vehicles: Iterable[CanonicalVehicle]) -> int:
    return sum(1 for vehicle in vehicles if vehicle.plate.strip())


def fleet_stats(vehicles: Sequence[CanonicalVehicle]) -> FleetStats:
    return FleetStats(total=count_vehicles(vehicles), with_plate=count_with_plate(vehicles))


def vehicle_title(vehicle: Optional[VehicleSummary]) -> str:
    """Heading for a comment card, e.g. ``"Toyota Corolla 2020"``."""
    if vehicle is None:
        return "Vehículo"
    parts = [vehicle.brand or "Vehículo", vehicle.model, str(vehicle.year) if vehicle.year else ""]
    return " ".join(part for part in parts if part)


def cover_image(vehicle: Optional[VehicleSummary]) -> str:
    if vehicle is not None and vehicle.images:
        return vehicle.images[0].content
    return PLACEHOLDER_IMAGE


def comment_body(comment: CanonicalComment) -> str:
    return comment.body if comment.body.strip() else "Sin comentarios"


def format_comment_date(value: datetime) -> str:
    """Long Spanish date, e.g. ``"5 mayo 2025"`` (UTC calendar day)."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return f"{value.day} {SPANISH_MONTHS[value.month - 1]} {value.year}"


def format_range_bound(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def availability_label(state: AvailabilityState) -> str:
    return AVAILABILITY_LABELS[state]


def primary_fuel(vehicle: CanonicalVehicle) -> str:
    return vehicle.fuel_types[0] if vehicle.fuel_types else "No especificado"


def city_label(vehicle: CanonicalVehicle) -> str:
    return vehicle.address.city or "Ciudad no especificada"
