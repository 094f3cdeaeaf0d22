"""Test utilities for iota applications::

    from iota.testing import TestClient
"""

from iota.testing.client import TestClient

__all__ = ["TestClient"]
