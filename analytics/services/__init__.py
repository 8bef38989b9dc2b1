"""Analytics services for business logic and data processing."""

from analytics.services.tracker_statistics_service import TrackerStatisticsService

__all__ = [
    "TrackerStatisticsService",
]
