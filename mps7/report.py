"""
Text report for a decoded ledger.
Line order is fixed so output stays reproducible.
"""
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import List, Optional

from mps7.schema import LEDGER_CONTEXT, LedgerSummary

CENTS = Decimal("0.01")


def format_currency(amount: Decimal, symbol: str = "$") -> str:
    """
    Format a Decimal amount as currency with two decimal places.
    
    Args:
        amount: Exact amount
        symbol: Currency symbol placed before the digits
    
    Returns:
        String like "$19.99" or "-$5.00"
    """
    with localcontext(LEDGER_CONTEXT):
        rounded = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
        sign = "-" if rounded < 0 else ""
        return f"{sign}{symbol}{abs(rounded)}"


def record_count_warning(summary: LedgerSummary) -> Optional[str]:
    """
    Build the warning for a header/record count mismatch.
    
    Returns:
        Warning message, or None when the counts agree
    """
    if summary.record_count_matches:
        return None
    return (
        "WARNING: Records count does not match header value: "
        f"Records: {summary.records_processed} Header: {summary.header_declared_count}"
    )


def build_report_lines(summary: LedgerSummary, currency_symbol: str = "$") -> List[str]:
    """
    Build the report lines for a summary.
    
    Args:
        summary: Final ledger summary
        currency_symbol: Symbol used for monetary values
    
    Returns:
        Report lines in output order
    """
    return [
        f"Header Row Record Count: {summary.header_declared_count}",
        f"Total Records: {summary.records_processed}",
        f"Total Credits: {format_currency(summary.total_credits, currency_symbol)}",
        f"Total Debits: {format_currency(summary.total_debits, currency_symbol)}",
        f"Total Autopays Started: {summary.autopays_started}",
        f"Total Autopays Ended: {summary.autopays_ended}",
        f"Balance for user ID {summary.tracked_user_id}: "
        f"{format_currency(summary.tracked_user_balance, currency_symbol)}",
    ]


def format_report(summary: LedgerSummary, currency_symbol: str = "$") -> str:
    """Render the report as a single newline-joined string."""
    return "\n".join(build_report_lines(summary, currency_symbol))
