"""
Google Analytics Module - GA4 reports and property discovery.
"""

from app.environments.google.analytics.client import AnalyticsClient
from app.environments.google.analytics.schemas import Ga4DataRow, Ga4Property

__all__ = [
    "AnalyticsClient",
    "Ga4DataRow",
    "Ga4Property",
]
