"""
Running totals over decoded records.
"""
from decimal import Decimal, localcontext

from mps7.schema import LEDGER_CONTEXT, Header, LedgerSummary, Record, RecordType


class Aggregate:
    """
    Mutable accumulator folded once per record.
    
    Starts zero-valued, is owned by a single decode run, and turns into an
    immutable LedgerSummary through finalize(). No folds are accepted after
    that point.
    """
    
    def __init__(self, header: Header, tracked_user_id: int):
        """
        Initialize the accumulator.
        
        Args:
            header: Decoded file header (declared count is kept for reconciliation)
            tracked_user_id: User whose running balance is maintained
        """
        self.header_version = header.version
        self.header_declared_count = header.declared_record_count
        self.tracked_user_id = tracked_user_id
        self.records_processed = 0
        self.debits_count = 0
        self.credits_count = 0
        self.total_debits = Decimal("0")
        self.total_credits = Decimal("0")
        self.autopays_started = 0
        self.autopays_ended = 0
        self.tracked_user_balance = Decimal("0")
        self._finalized = False
    
    def fold(self, record: Record) -> None:
        """
        Apply one record to the running totals.
        
        Debits increase the tracked user's balance and credits decrease it.
        Sums run under LEDGER_CONTEXT so no digits are rounded away.
        """
        if self._finalized:
            raise RuntimeError("Aggregate is finalized and can no longer be updated")
        
        self.records_processed += 1
        tracked = record.user_id == self.tracked_user_id
        
        with localcontext(LEDGER_CONTEXT):
            if record.record_type is RecordType.DEBIT:
                self.debits_count += 1
                self.total_debits += record.amount
                if tracked:
                    self.tracked_user_balance += record.amount
            elif record.record_type is RecordType.CREDIT:
                self.credits_count += 1
                self.total_credits += record.amount
                if tracked:
                    self.tracked_user_balance -= record.amount
            elif record.record_type is RecordType.START_AUTOPAY:
                self.autopays_started += 1
            elif record.record_type is RecordType.STOP_AUTOPAY:
                self.autopays_ended += 1
    
    def finalize(self) -> LedgerSummary:
        """Freeze the totals into a LedgerSummary."""
        self._finalized = True
        return LedgerSummary(
            header_version=self.header_version,
            header_declared_count=self.header_declared_count,
            records_processed=self.records_processed,
            debits_count=self.debits_count,
            credits_count=self.credits_count,
            total_debits=self.total_debits,
            total_credits=self.total_credits,
            autopays_started=self.autopays_started,
            autopays_ended=self.autopays_ended,
            tracked_user_id=self.tracked_user_id,
            tracked_user_balance=self.tracked_user_balance,
        )
