"""
Core decoding modules for MPS7 transaction logs.

This package contains:
- aggregate: Running totals and the final ledger summary
- binary: Exact-size reads from a byte source
- config: Application configuration and settings
- exceptions: Custom exception classes
- header: File header decoding
- logger: Logging configuration
- records: Record stream decoding
- report: Text report and currency formatting
- schema: Pydantic models for headers, records and summaries
"""
