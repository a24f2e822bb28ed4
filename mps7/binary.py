"""
Exact-size reads from a binary byte source.
"""
from typing import BinaryIO


def read_exact(stream: BinaryIO, size: int) -> bytes:
    """
    Read up to `size` bytes, retrying short reads until EOF.
    
    Raw and unbuffered sources may return fewer bytes than requested
    without being exhausted, so a single read() is not enough to tell
    truncation apart from a slow source.
    
    Args:
        stream: Readable binary source (never closed or written here)
        size: Number of bytes wanted
    
    Returns:
        Bytes read; shorter than `size` only if the source ran out
    """
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)
