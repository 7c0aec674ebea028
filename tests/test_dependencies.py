"""Test that required dependencies are available."""

import pytest


def test_required_dependencies():
    """Test that all required dependencies can be imported."""
    required_deps = [
        "click",
        "loguru",
        "rich",
        "pydantic",
        "yaml",  # pyyaml
    ]

    missing = []
    for dep in required_deps:
        try:
            __import__(dep)
        except ImportError:
            missing.append(dep)

    if missing:
        pytest.fail(f"Missing required dependencies: {missing}")


def test_pydantic_supports_validate_by_name():
    import pydantic

    major, minor = (int(part) for part in pydantic.VERSION.split(".")[:2])
    assert (major, minor) >= (2, 11)
