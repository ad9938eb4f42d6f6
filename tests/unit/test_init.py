r"""Unit tests for package initialization and metadata."""

from __future__ import annotations

import pytest

import aretry


def test_package_version_is_string() -> None:
    """Test that __version__ is a string."""
    assert isinstance(aretry.__version__, str)


def test_package_version_format() -> None:
    """Test that __version__ follows semantic versioning."""
    assert "." in aretry.__version__


def test_all_exports_defined() -> None:
    """Test that all items in __all__ are defined in the module."""
    for name in aretry.__all__:
        assert hasattr(aretry, name), f"{name} is in __all__ but not defined in module"


@pytest.mark.parametrize(
    "name",
    [
        "AsyncResilientClient",
        "AsyncRetryExecutor",
        "RequestCancelledError",
        "ResilientClient",
        "RetriesExhaustedError",
        "RetryExecutor",
        "RetryPolicy",
    ],
)
def test_public_api(name: str) -> None:
    assert name in aretry.__all__
    assert callable(getattr(aretry, name))
