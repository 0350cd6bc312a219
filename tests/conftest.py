# tests/conftest.py
"""Shared test fixtures and helpers.

Fixture schemas model the shapes used throughout the docs:
- person: {id: number, firstName: string, lastName: string}
- animal / dog / pattern: capability shapes for subtype and tag tests

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from structkit import FUNCTION, NUMBER, STRING, FieldSpec, Schema

# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Shared Schemas
# =============================================================================


@pytest.fixture
def person() -> Schema:
    """{id: number, firstName: string, lastName: string}."""
    return Schema.build({"id": NUMBER, "firstName": STRING, "lastName": STRING}, name="PickType")


@pytest.fixture
def optional_names() -> Schema:
    """{id: number, firstName?: string, lastName?: string}."""
    return Schema.build(
        {
            "id": NUMBER,
            "firstName": FieldSpec(STRING, optional=True),
            "lastName": FieldSpec(STRING, optional=True),
        },
        name="RequiredType",
    )


@pytest.fixture
def animal() -> Schema:
    return Schema.build({"live": FUNCTION}, name="Animal")


@pytest.fixture
def dog() -> Schema:
    return Schema.build({"live": FUNCTION, "woof": FUNCTION}, name="Dog")


@pytest.fixture
def pattern() -> Schema:
    """Shape of a regular-expression object: no 'live' operation."""
    return Schema.build(
        {"source": STRING, "flags": STRING, "test": FUNCTION, "exec": FUNCTION},
        name="RegExp",
    )
