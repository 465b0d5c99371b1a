"""View-state holders and derived values for the presentation layer."""

from .comment_listing import CommentListing, LoadResult
from .vehicle_dashboard import VehicleDashboard

__all__ = ["CommentListing", "LoadResult", "VehicleDashboard"]
