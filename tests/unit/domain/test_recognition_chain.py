"""Unit tests for recognition chain verification."""

from dataclasses import replace
from datetime import timedelta
from uuid import uuid4

from src.domain.services.recognition_chain import (
    chronological,
    detect_recognition_fork,
    find_tampered_entries,
    verify_recognition_chain,
)
from tests.helpers import make_chain, make_entry
from tests.helpers.builders import T0


class TestVerifyRecognitionChain:
    def test_empty_ledger_is_valid(self) -> None:
        result = verify_recognition_chain([])
        assert result.valid
        assert result.entries_checked == 0

    def test_linked_chain_is_valid(self) -> None:
        result = verify_recognition_chain(make_chain(5))
        assert result.valid
        assert result.broken_at_index is None
        assert result.entries_checked == 5

    def test_insertion_order_is_irrelevant(self) -> None:
        chain = make_chain(4)
        assert verify_recognition_chain(list(reversed(chain))).valid

    def test_first_entry_with_predecessor_breaks_at_zero(self) -> None:
        chain = make_chain(3)
        chain[0] = replace(chain[0], previous_entry_hash="f" * 64)
        result = verify_recognition_chain(chain)
        assert not result.valid
        assert result.broken_at_index == 0
        assert result.entry_id == chain[0].entry_id
        assert result.entries_checked == 1

    def test_reports_first_broken_link(self) -> None:
        chain = make_chain(4)
        chain[2] = replace(chain[2], previous_entry_hash=chain[0].entry_hash)
        result = verify_recognition_chain(chain)
        assert not result.valid
        assert result.broken_at_index == 2
        assert result.entry_id == chain[2].entry_id

    def test_equal_timestamps_keep_supplied_order(self) -> None:
        chain = make_chain(3, step=timedelta(0))
        assert verify_recognition_chain(chain).valid

    def test_to_dict(self) -> None:
        chain = make_chain(2)
        chain[1] = replace(chain[1], previous_entry_hash=None)
        assert verify_recognition_chain(chain).to_dict() == {
            "valid": False,
            "broken_at_index": 1,
            "entry_id": str(chain[1].entry_id),
            "entries_checked": 2,
        }


class TestDetectRecognitionFork:
    def test_no_fork_in_linear_chain(self) -> None:
        assert detect_recognition_fork(make_chain(5)) is None

    def test_single_entry_has_no_fork(self) -> None:
        assert detect_recognition_fork(make_chain(1)) is None

    def test_two_entries_sharing_a_predecessor(self) -> None:
        chain = make_chain(2)
        rival = make_entry(
            profile_id=chain[0].profile_id,
            created_at=T0 + timedelta(minutes=5),
            previous_entry_hash=chain[0].entry_hash,
        )
        report = detect_recognition_fork([*chain, rival])
        assert report is not None
        assert report.previous_entry_hash == chain[0].entry_hash
        assert report.conflicting_entry_ids == (chain[1].entry_id, rival.entry_id)
        assert report.entry_hashes == (chain[1].entry_hash, rival.entry_hash)

    def test_two_entries_claiming_to_be_first(self) -> None:
        profile_id = uuid4()
        first = make_entry(profile_id=profile_id, created_at=T0)
        second = make_entry(profile_id=profile_id, created_at=T0 + timedelta(seconds=1))
        report = detect_recognition_fork([first, second])
        assert report is not None
        assert report.previous_entry_hash is None
        assert report.to_dict()["conflicting_entry_ids"] == [
            str(first.entry_id),
            str(second.entry_id),
        ]


class TestFindTamperedEntries:
    def test_untouched_entries_verify(self) -> None:
        assert find_tampered_entries(make_chain(3)) == []

    def test_rewritten_timestamp_is_detected(self) -> None:
        chain = make_chain(3)
        chain[1] = replace(chain[1], created_at=chain[1].created_at + timedelta(days=1))
        assert find_tampered_entries(chain) == [chain[1].entry_id]


def test_chronological_is_stable() -> None:
    chain = make_chain(3, step=timedelta(0))
    assert chronological(chain) == chain
