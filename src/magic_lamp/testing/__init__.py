"""Test utilities for fixture apps.

    from magic_lamp.testing import TestClient
"""

from magic_lamp.testing.client import TestClient

__all__ = ["TestClient"]
