"""
Record stream decoding.
Turns the bytes after the header into validated Record values, one at a time.
"""
import struct
from typing import BinaryIO, Iterator, Optional

from pydantic import ValidationError as PydanticValidationError

from mps7.binary import read_exact
from mps7.exceptions import FormatError, ValidationError
from mps7.header import HEADER_SIZE
from mps7.logger import setup_logger
from mps7.schema import Record, RecordType

logger = setup_logger(__name__)

TYPE_FORMAT = ">B"
BASE_FORMAT = ">IQ"
AMOUNT_FORMAT = ">IQd"

# Messages raised for each field that fails validation
FIELD_ERRORS = {
    "timestamp": "invalid timestamp",
    "user_id": "invalid user id",
    "amount": "invalid amount",
}


def build_record(
    record_type: RecordType,
    timestamp: int,
    user_id: int,
    amount: Optional[float] = None,
    offset: Optional[int] = None
) -> Record:
    """
    Validate decoded fields and build a Record.
    
    The range checks on timestamp and user id can never fail for values
    unpacked from their fixed-width unsigned fields; they are kept so the
    contract holds for any caller, not only the stream decoder.
    
    Args:
        record_type: Kind of record
        timestamp: Epoch seconds
        user_id: User identifier
        amount: Raw double for Debit/Credit, None otherwise
        offset: Stream offset of the record, for error details
    
    Returns:
        Validated Record with amount converted to Decimal
    
    Raises:
        ValidationError: If any field is outside its contract
    """
    try:
        return Record(
            record_type=record_type,
            timestamp=timestamp,
            user_id=user_id,
            amount=amount,
        )
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = error["loc"][0] if error["loc"] else None
        raise ValidationError(
            FIELD_ERRORS.get(field, "invalid record"),
            details={
                "offset": offset,
                "record_type": record_type.label,
                "field": field,
                "error": error["msg"],
            }
        ) from e


def decode_record(stream: BinaryIO, offset: int = HEADER_SIZE) -> Optional[Record]:
    """
    Decode the next record from the stream.
    
    Args:
        stream: Binary source positioned at a record boundary
        offset: Current stream offset, used only for error details
    
    Returns:
        The decoded Record, or None at a clean end of stream
    
    Raises:
        FormatError: On an unknown type code or a truncated body
        ValidationError: If a decoded field is out of contract
    """
    type_byte = read_exact(stream, 1)
    if not type_byte:
        return None
    
    (code,) = struct.unpack(TYPE_FORMAT, type_byte)
    try:
        record_type = RecordType.from_code(code)
    except FormatError as e:
        e.details["offset"] = offset
        raise
    
    body_size = record_type.body_size
    body = read_exact(stream, body_size)
    if len(body) < body_size:
        raise FormatError(
            "truncated record",
            details={
                "offset": offset,
                "record_type": record_type.label,
                "expected": body_size,
                "received": len(body),
            }
        )
    
    if record_type.has_amount:
        timestamp, user_id, amount = struct.unpack(AMOUNT_FORMAT, body)
    else:
        timestamp, user_id = struct.unpack(BASE_FORMAT, body)
        amount = None
    
    return build_record(record_type, timestamp, user_id, amount, offset=offset)


def iter_records(stream: BinaryIO, offset: int = HEADER_SIZE) -> Iterator[Record]:
    """
    Yield records until the stream is exhausted.
    
    Records are decoded lazily: the next one is not read until the caller
    has finished with the current one. Any error ends the iteration.
    
    Args:
        stream: Binary source positioned just after the header
        offset: Offset of the first record
    
    Yields:
        Validated Record values in stream order
    """
    while True:
        record = decode_record(stream, offset)
        if record is None:
            return
        offset += record.wire_size
        yield record
