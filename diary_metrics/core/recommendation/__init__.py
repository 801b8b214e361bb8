"""
Recommendation module for sleep window titration.
"""

from diary_metrics.core.recommendation.titration import calculate_new_prescription, get_titration_recommendation

__all__ = ['get_titration_recommendation', 'calculate_new_prescription']
