# tests/strategies/settings.py
"""Standardized Hypothesis settings tiers for property tests.

Import these instead of using inline @settings(max_examples=...).

Tiers:
- THOROUGH_SETTINGS: 300 examples - algebraic laws of the transforms
- STANDARD_SETTINGS: 100 examples - regular property tests
- QUICK_SETTINGS: 20 examples - simple rejection tests
"""

from hypothesis import settings

# Transform laws underpin every derived schema
THOROUGH_SETTINGS = settings(max_examples=300)

STANDARD_SETTINGS = settings(max_examples=100)

QUICK_SETTINGS = settings(max_examples=20)
