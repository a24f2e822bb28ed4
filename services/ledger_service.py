"""
Ledger processing service.
Opens an MPS7 source, decodes it and returns the final summary.
"""
import os
from pathlib import Path
from typing import BinaryIO, Optional, Union

from mps7.aggregate import Aggregate
from mps7.config import get_settings
from mps7.exceptions import ConfigurationError, InputError, MPS7Error
from mps7.header import HEADER_SIZE, decode_header
from mps7.logger import setup_logger
from mps7.records import iter_records
from mps7.schema import MAX_USER_ID, LedgerSummary

logger = setup_logger(__name__)


class LedgerService:
    """Service for decoding MPS7 transaction logs into ledger summaries."""
    
    def __init__(self, tracked_user_id: Optional[int] = None):
        """
        Initialize ledger service.
        
        Args:
            tracked_user_id: Override for the configured tracked user
        
        Raises:
            ConfigurationError: If the override is not a valid user id
        """
        self.settings = get_settings()
        self.tracked_user_id = (
            tracked_user_id if tracked_user_id is not None else self.settings.tracked_user_id
        )
        if not (0 <= self.tracked_user_id <= MAX_USER_ID):
            raise ConfigurationError(
                f"Tracked user id out of range: {self.tracked_user_id}",
                details={"tracked_user_id": self.tracked_user_id, "max": MAX_USER_ID}
            )
    
    def check_source(self, file_path: Union[str, Path]) -> Path:
        """
        Ensure the data file exists and is readable before decoding.
        
        Raises:
            InputError: If the path is missing, not a file or not readable
        """
        path = Path(file_path)
        if not path.exists():
            raise InputError(
                f"File not found: {file_path}",
                details={"file_path": str(file_path)}
            )
        if not path.is_file():
            raise InputError(
                f"Not a regular file: {file_path}",
                details={"file_path": str(file_path)}
            )
        if not os.access(path, os.R_OK):
            raise InputError(
                f"File is not readable: {file_path}",
                details={"file_path": str(file_path)}
            )
        return path
    
    def process_stream(self, stream: BinaryIO) -> LedgerSummary:
        """
        Decode a whole MPS7 stream into a summary.
        
        The stream is read to exhaustion but never closed or written.
        
        Args:
            stream: Binary source positioned at offset 0
        
        Returns:
            Final LedgerSummary
        
        Raises:
            FormatError: On bad header, unknown record type or truncation
            ValidationError: If a record field is out of contract
        """
        header = decode_header(stream)
        aggregate = Aggregate(header, self.tracked_user_id)
        
        for record in iter_records(stream, offset=HEADER_SIZE):
            aggregate.fold(record)
        
        summary = aggregate.finalize()
        logger.info(
            f"Decoded {summary.records_processed} records "
            f"(header declared {summary.header_declared_count}, version {summary.header_version})"
        )
        return summary
    
    def process_file(self, file_path: Union[str, Path]) -> LedgerSummary:
        """
        Decode an MPS7 file from disk.
        
        Args:
            file_path: Path to the data file
        
        Returns:
            Final LedgerSummary
        
        Raises:
            InputError: If the file is missing or unreadable
            FormatError: On malformed content
            ValidationError: If a record field is out of contract
        """
        path = self.check_source(file_path)
        logger.info(f"Processing ledger file: {path}")
        
        try:
            with open(path, "rb") as stream:
                return self.process_stream(stream)
        except MPS7Error as e:
            logger.debug(f"Failed to decode {path.name}: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
            raise
        except OSError as e:
            logger.debug(f"Failed to read {path}: {e}")
            raise InputError(
                f"Unable to read file: {file_path}",
                details={"file_path": str(file_path), "error": str(e)}
            ) from e
