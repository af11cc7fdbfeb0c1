"""
Test fixtures and utilities for mark_counter tests.

Provides reusable fixtures for images, registries and sessions.
"""

import numpy as np
import pytest

from mark_counter.core.marking import (
    ColorRegistry,
    MarkingSession,
    MarkStore,
    SelectionController,
    ToolAttributes,
)


@pytest.fixture
def test_image():
    """Create a test RGB image."""
    return np.random.randint(0, 255, (100, 200, 3), dtype=np.uint8)


@pytest.fixture
def black_image():
    """Create a uniform black image, handy for checking drawn pixels."""
    return np.zeros((60, 80, 3), dtype=np.uint8)


@pytest.fixture
def registry():
    """Registry with three colors, in report order."""
    return ColorRegistry.from_pairs(
        [("red", "Red"), ("yellow", "Yellow"), ("lime", "Green")]
    )


@pytest.fixture
def store():
    return MarkStore()


@pytest.fixture
def controller(store):
    """Selection controller creating red marks by default."""
    return SelectionController(store, ToolAttributes(color="red"))


@pytest.fixture
def session(registry, test_image):
    """Session with the test image loaded at zoom 1.0."""
    session = MarkingSession(registry)
    session.load_image(test_image, "test.png")
    return session
