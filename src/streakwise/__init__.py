"""Streakwise habit streak and completion analytics."""

from __future__ import annotations

from .config import BaseConfig, TestConfig
from .services.analytics import AnalyticsResult, compute_analytics

__all__ = ["AnalyticsResult", "BaseConfig", "TestConfig", "compute_analytics"]
