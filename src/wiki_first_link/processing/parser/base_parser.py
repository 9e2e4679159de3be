# processing/parser/base_parser.py
from abc import ABC, abstractmethod
import logging
from typing import Any, Iterable, Iterator, Optional

from wiki_first_link.config.settings import PARSER_CONFIG
from wiki_first_link.processing.shared.file_utils import get_text_stream, safe_close


class BaseParser(ABC):
    """Abstract base class for data parsers implementing parse_stream."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """Initialize parser with optional logger."""
        self.logger = logger or logging.getLogger(__name__)
        self.stats = {"processed": 0, "skipped": 0, "errors": 0}

    @abstractmethod
    def parse_stream(
        self,
        stream: Iterable[str],
        file_name: str,
        sample_limit: Optional[int] = None
    ) -> Iterator[Any]:
        """
        Parse a text stream, yielding records.

        Args:
            stream: Line iterable to read from
            file_name: Name of the file being parsed (for log messages)
            sample_limit: Optional maximum number of records to yield

        Returns:
            Iterator of parsed records
        """
        raise NotImplementedError

    def parse_file(
        self,
        file_name: str,
        sample_limit: Optional[int] = None,
        encoding: str = PARSER_CONFIG['encoding'],
        errors: str = PARSER_CONFIG['encoding_errors']
    ) -> Iterator[Any]:
        """
        Open a path or URL and parse it, closing the stream afterwards.

        Opening errors propagate before the first record is produced.
        """
        stream = get_text_stream(file_name, file_name, encoding=encoding, errors=errors)
        return self._parse_and_close(stream, file_name, sample_limit)

    def _parse_and_close(self, stream, file_name: str, sample_limit: Optional[int]) -> Iterator[Any]:
        try:
            yield from self.parse_stream(stream, file_name, sample_limit)
        finally:
            safe_close(stream)
