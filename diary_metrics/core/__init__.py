"""
Core modules for the sleep diary metrics engine.

This package contains the core functionality for:
- Weekly aggregation of diary entries
- Week-over-week and baseline comparison
- Display formatting
- Sleep window titration
"""
