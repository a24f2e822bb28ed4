"""
MPS7 file header decoding.

Layout (9 bytes, big-endian):
    Bytes 0-3: magic          "MPS7"
    Byte 4:    version        unsigned 8-bit
    Bytes 5-8: record count   unsigned 32-bit, as declared by the writer
"""
import struct
from typing import BinaryIO

from mps7.binary import read_exact
from mps7.exceptions import FormatError
from mps7.logger import setup_logger
from mps7.schema import MAGIC, Header

logger = setup_logger(__name__)

HEADER_FORMAT = ">4sBI"
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)


def decode_header(stream: BinaryIO) -> Header:
    """
    Read and validate the header at the start of a byte source.
    
    Consumes exactly HEADER_SIZE bytes (fewer only when the source is
    truncated). The version byte is kept for reporting but never selects
    a different decoding path.
    
    Args:
        stream: Binary source positioned at offset 0
    
    Returns:
        Parsed Header
    
    Raises:
        FormatError: If the header is truncated or the magic tag is wrong
    """
    data = read_exact(stream, HEADER_SIZE)
    if len(data) < HEADER_SIZE:
        raise FormatError(
            "invalid header",
            details={"reason": "truncated", "expected": HEADER_SIZE, "received": len(data)}
        )
    
    magic, version, declared_count = struct.unpack(HEADER_FORMAT, data)
    if magic != MAGIC:
        raise FormatError(
            "invalid header",
            details={"reason": "bad magic", "magic": magic, "expected": MAGIC}
        )
    
    header = Header(magic=magic, version=version, declared_record_count=declared_count)
    logger.debug(f"Decoded header: version={version}, declared records={declared_count}")
    return header
