"""
Analytics package for tracker statistics.

The package is organized into:
- services/: aggregation of enriched tracker points into summary statistics
"""

from analytics.services import TrackerStatisticsService

__all__ = ["TrackerStatisticsService"]
