"""
Analytics Plugin Package

Provides Net Promoter Score calculation and significance testing for
Likelihood to Recommend survey data.
"""

from .nps_analytics_plugin import NPSAnalyticsPlugin

__all__ = ["NPSAnalyticsPlugin"]
