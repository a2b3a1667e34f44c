"""Plugins module for Semantic Kernel NPS tools."""

from .analytics.nps_analytics_plugin import NPSAnalyticsPlugin

__all__ = ["NPSAnalyticsPlugin"]
