from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..utils.time import EPOCH
from ..vehicles.vehicle_models import VehicleImage


class AuthorSummary(BaseModel):
    id: int = 0
    name: str = ""
    photo: Optional[str] = None


class VehicleSummary(BaseModel):
    """Vehicle relation embedded in a comment when the backend joined it."""
    id: int = 0
    brand: str = ""
    model: str = ""
    year: int = 0
    images: List[VehicleImage] = Field(default_factory=list)
    owner_role_id: int = 0


class CanonicalComment(BaseModel):
    """A renter's review of one of the host's vehicles.

    Timestamps are aware UTC datetimes so they compare chronologically,
    never as raw strings.
    """
    id: int = 0
    vehicle_id: int = 0
    user_id: int = 0
    body: str = ""
    rating: float = Field(default=0.0, ge=0, le=5)
    created_at: datetime = EPOCH
    updated_at: datetime = EPOCH
    author: AuthorSummary = Field(default_factory=AuthorSummary)
    vehicle: Optional[VehicleSummary] = None
