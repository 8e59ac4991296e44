"""Test helpers for recognition engine tests.

Helpers:
    FakeTimeAuthority: Controllable time authority for deterministic tests
    make_entry / make_chain: Ledger entries with valid hashes and linkage
    make_profile / make_recognizer: Seed records for the stubs

Usage:
    from tests.helpers import FakeTimeAuthority, make_chain
"""

from tests.helpers.builders import (
    make_chain,
    make_entry,
    make_profile,
    make_recognizer,
)
from tests.helpers.fake_time_authority import FakeTimeAuthority

__all__ = [
    "FakeTimeAuthority",
    "make_chain",
    "make_entry",
    "make_profile",
    "make_recognizer",
]
