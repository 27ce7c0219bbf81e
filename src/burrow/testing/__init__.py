"""Test utilities for burrow applications::

    from burrow.testing import MemoryFileSystem, TestClient
"""

from burrow.testing.client import TestClient
from burrow.testing.memory import MemoryFileSystem

__all__ = ["MemoryFileSystem", "TestClient"]
