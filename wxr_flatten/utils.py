"""
Utility functions for hashing, file access and display formatting.
"""

import hashlib
import logging
from pathlib import Path


logger = logging.getLogger(__name__)


def compute_file_hash(file_path: Path, algorithm: str = 'sha256') -> str:
    """
    Compute hash of a file for deterministic file identification.

    Args:
        file_path: Path to file
        algorithm: Hash algorithm ('sha256', 'md5', etc.)

    Returns:
        Hex-encoded hash string
    """
    hash_func = hashlib.new(algorithm)
    chunk_size = 8192

    with open(file_path, 'rb') as f:
        while chunk := f.read(chunk_size):
            hash_func.update(chunk)

    return hash_func.hexdigest()


def safe_read_file(file_path: Path, encoding: str = 'utf-8') -> str:
    """Read a text file, falling back to latin-1 when the encoding does not fit."""
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    try:
        with open(file_path, 'r', encoding=encoding) as f:
            return f.read()
    except UnicodeDecodeError:
        logger.warning(f"Failed to read {file_path} as {encoding}, trying latin-1")
        with open(file_path, 'r', encoding='latin-1') as f:
            return f.read()


def truncate_string(s: str, max_length: int = 100) -> str:
    """Truncate string for logging/display."""
    if len(s) <= max_length:
        return s
    return s[:max_length - 3] + "..."
