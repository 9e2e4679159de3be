# processing/shared/file_utils.py
"""Utilities for opening MediaWiki export files and streams."""

import bz2
import gzip
import logging
from io import TextIOWrapper
from typing import Any, Iterable, Optional, TextIO, Union

import requests

logger = logging.getLogger(__name__)


def is_url(source: Any) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


def get_text_stream(
    stream_or_path: Any,
    file_name: Optional[str] = None,
    encoding: str = "utf-8",
    errors: str = "strict",
) -> Union[TextIO, Iterable[str]]:
    """
    Get a line-iterable text stream for a path, URL or file object.

    Args:
        stream_or_path: File-like object, local path or http(s) URL
        file_name: Name used to detect compression (defaults to the path)
        encoding: Text encoding to use
        errors: Decode error policy passed to the text layer

    Returns:
        Text stream yielding lines
    """
    if hasattr(stream_or_path, 'encoding'):
        logger.debug("Input is already a text stream, returning as is.")
        return stream_or_path

    file_name = str(file_name or getattr(stream_or_path, 'name', stream_or_path))
    lowered = file_name.lower()

    if is_url(stream_or_path):
        logger.debug(f"Input is a URL: {stream_or_path}, streaming content.")
        try:
            response = requests.get(stream_or_path, stream=True)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Error fetching URL {stream_or_path}: {str(e)}")
            raise
        response.raw.decode_content = True
        return TextIOWrapper(_wrap_compression(response.raw, lowered), encoding=encoding, errors=errors)

    if hasattr(stream_or_path, 'read'):
        logger.debug("Input is a binary stream, wrapping it in a text layer.")
        return TextIOWrapper(_wrap_compression(stream_or_path, lowered), encoding=encoding, errors=errors)

    path = str(stream_or_path)
    if lowered.endswith(".bz2"):
        logger.debug("File extension indicates bz2 compression.")
        return bz2.open(path, mode="rt", encoding=encoding, errors=errors)
    if lowered.endswith(".gz"):
        logger.debug("File extension indicates gzip compression.")
        return gzip.open(path, mode="rt", encoding=encoding, errors=errors)

    logger.debug(f"Input is a local file path: {path}, opening in text mode.")
    return open(path, "r", encoding=encoding, errors=errors)


def _wrap_compression(file_obj, lowered_name: str):
    if lowered_name.endswith(".bz2"):
        return bz2.BZ2File(file_obj, "rb")
    if lowered_name.endswith(".gz"):
        return gzip.GzipFile(fileobj=file_obj, mode="rb")
    return file_obj


def safe_close(stream: Optional[Any]) -> None:
    """
    Safely close a stream, catching and logging exceptions.

    Args:
        stream: Stream to close
    """
    if stream is not None and hasattr(stream, 'close'):
        try:
            stream.close()
        except OSError as e:
            logger.warning(f"Error closing stream: {e}")
