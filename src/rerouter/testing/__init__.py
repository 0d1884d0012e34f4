"""Test utilities for rerouter applications.

Provides an in-process ASGI test client and redirect assertions::

    from rerouter.testing import TestClient, assert_permanent_redirect
"""

from rerouter.testing.assertions import (
    assert_passthrough,
    assert_permanent_redirect,
    assert_redirect,
    assert_temporary_redirect,
)
from rerouter.testing.client import TestClient

__all__ = [
    "TestClient",
    "assert_passthrough",
    "assert_permanent_redirect",
    "assert_redirect",
    "assert_temporary_redirect",
]
