"""Recommendation services package."""

from src.services.recommendations.engine import RecommendationEngine

__all__ = ["RecommendationEngine"]
