# Path: ppo_index/loaders/index_stream.py
"""
Index Stream Loader

Opens an index file as a binary stream for the walker. Gzip files are
detected by their magic bytes and decompressed on the fly, so a
multi-gigabyte .json.gz is never inflated to disk or memory.
"""

import gzip
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Union

from ..core.logger import get_input_logger


GZIP_MAGIC = b'\x1f\x8b'

logger = get_input_logger('index_stream')


def is_gzip_file(file_path: Path) -> bool:
    """Check the first two bytes for the gzip signature."""
    with open(file_path, 'rb') as f:
        return f.read(len(GZIP_MAGIC)) == GZIP_MAGIC


@contextmanager
def open_index_stream(file_path: Union[str, Path]) -> Iterator[BinaryIO]:
    """
    Open an index document for streaming.

    Args:
        file_path: Path to a .json or .json.gz index file

    Yields:
        Binary file object positioned at the start of the JSON text

    Raises:
        FileNotFoundError: If the file doesn't exist
        OSError: If the path can't be opened for reading (a directory, no permission)
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    if is_gzip_file(file_path):
        logger.info(f"Opening gzip index stream: {file_path}")
        stream = gzip.open(file_path, 'rb')
    else:
        logger.info(f"Opening plain index stream: {file_path}")
        stream = open(file_path, 'rb')

    try:
        yield stream
    finally:
        stream.close()


__all__ = ['is_gzip_file', 'open_index_stream']
