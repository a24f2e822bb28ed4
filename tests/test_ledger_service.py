"""
Tests for the ledger processing service.
"""
import io
from decimal import Decimal

import pytest

from builders import (
    TRACKED_USER,
    credit,
    debit,
    header,
    ledger,
    start_autopay,
    stop_autopay,
)
from mps7.exceptions import ConfigurationError, FormatError, InputError, ValidationError
from services.ledger_service import LedgerService


def test_process_stream_totals():
    """Test a mixed stream is folded into the expected totals."""
    data = ledger(
        debit(100.00, user_id=TRACKED_USER),
        credit(40.00, user_id=TRACKED_USER),
        debit(19.99),
        start_autopay(),
        stop_autopay(),
    )
    summary = LedgerService().process_stream(io.BytesIO(data))
    
    assert summary.header_version == 1
    assert summary.header_declared_count == 5
    assert summary.records_processed == 5
    assert summary.total_debits == Decimal("119.99")
    assert summary.total_credits == Decimal("40.0")
    assert summary.autopays_started == 1
    assert summary.autopays_ended == 1
    assert summary.tracked_user_id == TRACKED_USER
    assert summary.tracked_user_balance == Decimal("60.0")
    assert summary.record_count_matches


def test_process_stream_header_only():
    """A header with no records is a valid, empty ledger."""
    summary = LedgerService().process_stream(io.BytesIO(header(0)))
    assert summary.records_processed == 0
    assert summary.record_count_matches


def test_count_mismatch_is_not_fatal():
    """Declared five, found four: run completes with four records."""
    data = ledger(debit(1.0), debit(2.0), credit(3.0), start_autopay(), count=5)
    summary = LedgerService().process_stream(io.BytesIO(data))
    
    assert summary.records_processed == 4
    assert summary.header_declared_count == 5
    assert not summary.record_count_matches


def test_bad_magic_reads_no_records():
    """Corrupted magic aborts before the record section is touched."""
    stream = io.BytesIO(header(1, magic=b"MPS8") + debit(1.0))
    
    with pytest.raises(FormatError):
        LedgerService().process_stream(stream)
    assert stream.tell() == 9


def test_unknown_type_aborts_run():
    """An unknown record type aborts the whole run."""
    data = ledger(debit(1.0), count=2) + b"\x04" + b"\x00" * 12
    
    with pytest.raises(FormatError) as exc_info:
        LedgerService().process_stream(io.BytesIO(data))
    assert exc_info.value.message == "unknown record type"


def test_invalid_amount_aborts_run():
    """A non-finite amount aborts with a validation error."""
    data = ledger(debit(1.0), credit(float("nan")))
    
    with pytest.raises(ValidationError):
        LedgerService().process_stream(io.BytesIO(data))


def test_stream_is_not_closed():
    """The service never closes a caller-owned stream."""
    stream = io.BytesIO(ledger(start_autopay()))
    LedgerService().process_stream(stream)
    assert not stream.closed


def test_tracked_user_override():
    """An explicit tracked user replaces the configured one."""
    data = ledger(debit(10.0, user_id=7), credit(2.5, user_id=7))
    summary = LedgerService(tracked_user_id=7).process_stream(io.BytesIO(data))
    assert summary.tracked_user_id == 7
    assert summary.tracked_user_balance == Decimal("7.5")


def test_tracked_user_from_settings(monkeypatch):
    """Tracked user comes from TRACKED_USER_ID when not overridden."""
    monkeypatch.setenv("TRACKED_USER_ID", "99")
    data = ledger(debit(5.0, user_id=99))
    summary = LedgerService().process_stream(io.BytesIO(data))
    assert summary.tracked_user_id == 99
    assert summary.tracked_user_balance == Decimal("5.0")


def test_tracked_user_override_out_of_range():
    """Overrides outside the unsigned 64-bit range are rejected."""
    with pytest.raises(ConfigurationError):
        LedgerService(tracked_user_id=-1)


def test_process_file(write_ledger):
    """Test decoding from a file on disk."""
    path = write_ledger(ledger(debit(604.27), stop_autopay()))
    summary = LedgerService().process_file(path)
    assert summary.records_processed == 2
    assert summary.total_debits == Decimal("604.27")


def test_process_file_missing(tmp_path):
    """Missing files raise InputError before decoding starts."""
    with pytest.raises(InputError) as exc_info:
        LedgerService().process_file(tmp_path / "missing.dat")
    assert "missing.dat" in exc_info.value.details["file_path"]


def test_process_file_directory(tmp_path):
    """Directories are not valid data files."""
    with pytest.raises(InputError):
        LedgerService().process_file(tmp_path)


def test_process_file_truncated(write_ledger):
    """Truncated files surface the format error unchanged."""
    path = write_ledger(ledger(debit(1.0))[:-10])
    
    with pytest.raises(FormatError) as exc_info:
        LedgerService().process_file(path)
    assert exc_info.value.message == "truncated record"
