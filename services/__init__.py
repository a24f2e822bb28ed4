"""
Service layer for business logic.

This package contains service classes that orchestrate the
ledger pipeline: source checks, header and record decoding,
and aggregation into a final summary.
"""
