"""Test utilities for larder applications.

    from larder.testing import TestClient
"""

from larder.testing.client import TestClient

__all__ = ["TestClient"]
