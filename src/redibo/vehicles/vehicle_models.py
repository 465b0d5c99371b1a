from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class AvailabilityState(str, Enum):
    AVAILABLE = "AVAILABLE"
    RESERVED = "RESERVED"
    MAINTENANCE = "MAINTENANCE"


class VehicleImage(BaseModel):
    content: str = ""  # URL or inline binary reference
    content_id: Optional[str] = None


class VehicleAddress(BaseModel):
    street: str = ""
    house_number: str = ""
    province: str = ""
    city: str = ""


class CanonicalVehicle(BaseModel):
    """Fully-defaulted vehicle as shown on the host dashboard.

    Every field is populated after normalization, whatever shape the
    backend sent.
    """
    id: int = 0
    vin: str = ""
    brand: str = ""
    model: str = ""
    year: int = 0
    plate: str = ""
    seats: int = 0
    doors: int = 0
    insured: bool = False
    daily_price: float = Field(default=0.0, ge=0)
    maintenance_count: int = Field(default=0, ge=0)
    transmission: str = ""
    availability: AvailabilityState = AvailabilityState.MAINTENANCE
    address: VehicleAddress = Field(default_factory=VehicleAddress)
    fuel_types: List[str] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)
    images: List[VehicleImage] = Field(default_factory=list)


class VehicleFleet(BaseModel):
    """Normalized vehicle envelope for one host."""
    vehicles: List[CanonicalVehicle] = Field(default_factory=list)
    reported_total: int = 0  # server-side counter, informational
    reported_with_plate: int = 0
