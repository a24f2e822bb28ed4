"""
Pydantic models for the MPS7 data model.
Headers, records and the final summary are immutable once built.
"""
import math
from decimal import ROUND_HALF_UP, Context, Decimal
from enum import IntEnum
from typing import Annotated, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from mps7.exceptions import FormatError

MAGIC = b"MPS7"

MAX_TIMESTAMP = 2**32 - 1
MAX_USER_ID = 2**64 - 1
MAX_RECORD_COUNT = 2**32 - 1

# Digits needed to hold any exact sum of shortest-form doubles (1e308 down to 5e-324)
LEDGER_PRECISION = 800
LEDGER_CONTEXT = Context(prec=LEDGER_PRECISION, rounding=ROUND_HALF_UP)

# Bytes following the type code
BASE_BODY_SIZE = 12
AMOUNT_SIZE = 8


class RecordType(IntEnum):
    """Record kinds keyed by their leading type code."""
    DEBIT = 0
    CREDIT = 1
    START_AUTOPAY = 2
    STOP_AUTOPAY = 3
    
    @classmethod
    def from_code(cls, code: int) -> "RecordType":
        """
        Map a type code to its record kind.
        
        Args:
            code: Unsigned byte read from the stream
        
        Returns:
            Matching RecordType
        
        Raises:
            FormatError: If the code is not a known record type
        """
        try:
            return cls(code)
        except ValueError:
            raise FormatError("unknown record type", details={"type_code": code}) from None
    
    @property
    def has_amount(self) -> bool:
        return self in (RecordType.DEBIT, RecordType.CREDIT)
    
    @property
    def body_size(self) -> int:
        return BASE_BODY_SIZE + AMOUNT_SIZE if self.has_amount else BASE_BODY_SIZE
    
    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    RecordType.DEBIT: "Debit",
    RecordType.CREDIT: "Credit",
    RecordType.START_AUTOPAY: "StartAutopay",
    RecordType.STOP_AUTOPAY: "StopAutopay",
}


def normalize_amount(v):
    """
    Convert a decoded double to an exact Decimal.
    
    Goes through the shortest round-trip repr so 19.99 stays 19.99
    instead of expanding the binary fraction.
    """
    if v is None:
        return None
    if isinstance(v, bool):
        raise ValueError("invalid amount")
    if isinstance(v, Decimal):
        if not v.is_finite():
            raise ValueError("invalid amount")
        return v
    if isinstance(v, float):
        if not math.isfinite(v):
            raise ValueError("invalid amount")
        return Decimal(repr(v))
    if isinstance(v, int):
        return Decimal(v)
    raise ValueError("invalid amount")


class Header(BaseModel):
    """Fixed 9-byte file header."""
    model_config = ConfigDict(frozen=True)
    
    magic: bytes = MAGIC
    version: int = Field(..., ge=0, le=255)
    declared_record_count: int = Field(..., ge=0, le=MAX_RECORD_COUNT)


class Record(BaseModel):
    """
    One decoded transaction-log record.
    Debit and Credit carry an amount; the autopay kinds never do.
    """
    model_config = ConfigDict(frozen=True)
    
    record_type: RecordType
    timestamp: int = Field(..., ge=0, le=MAX_TIMESTAMP, strict=True, description="Epoch seconds")
    user_id: int = Field(..., ge=0, le=MAX_USER_ID, strict=True)
    amount: Annotated[Optional[Decimal], BeforeValidator(normalize_amount)] = None
    
    @model_validator(mode="after")
    def validate_amount_presence(self):
        """Amount must be present exactly for the monetary kinds."""
        if self.record_type.has_amount and self.amount is None:
            raise ValueError(f"{self.record_type.label} record requires an amount")
        if not self.record_type.has_amount and self.amount is not None:
            raise ValueError(f"{self.record_type.label} record cannot carry an amount")
        return self
    
    @property
    def wire_size(self) -> int:
        return 1 + self.record_type.body_size


class LedgerSummary(BaseModel):
    """Final aggregate handed to callers once the stream is exhausted."""
    model_config = ConfigDict(frozen=True)
    
    header_version: int
    header_declared_count: int
    records_processed: int = 0
    debits_count: int = 0
    credits_count: int = 0
    total_debits: Decimal = Decimal("0")
    total_credits: Decimal = Decimal("0")
    autopays_started: int = 0
    autopays_ended: int = 0
    tracked_user_id: int
    tracked_user_balance: Decimal = Decimal("0")
    
    @property
    def record_count_matches(self) -> bool:
        return self.records_processed == self.header_declared_count
