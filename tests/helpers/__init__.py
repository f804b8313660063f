"""Test helpers for FieldSync."""

from tests.helpers.fake_time_authority import FakeTimeAuthority
from tests.helpers.observations import FIXED_TIMESTAMP, make_observation

__all__ = ["FIXED_TIMESTAMP", "FakeTimeAuthority", "make_observation"]
