"""Core business logic layer.

Subpackages:
- planning: catalog-driven plan generation, random selection, plan repair and the offline fallback plan
- goals: goal weight and daily calorie calculation
- reporting: nutrition aggregation
"""
__all__ = ["planning", "goals", "reporting"]
