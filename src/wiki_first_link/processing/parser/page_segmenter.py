"""Line-oriented framing of <page> blocks in a MediaWiki export."""
import logging
from typing import Iterable, Iterator, List, Optional

from wiki_first_link.processing.parser.base_parser import BaseParser
from wiki_first_link.processing.shared.constants import PAGE_CLOSE_TAG, PAGE_OPEN_TAG
from wiki_first_link.processing.shared.error_handling import READ_ERRORS


class PageSegmenter(BaseParser):
    """Streaming splitter yielding the raw text of each <page>...</page> block.

    Only the current block is buffered, so memory use is bounded by the
    largest page rather than the size of the export. Lines are matched after
    stripping whitespace; there is no XML awareness at this stage.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        super().__init__(logger)

    def parse_stream(
        self,
        stream: Iterable[str],
        file_name: str = "<stream>",
        sample_limit: Optional[int] = None
    ) -> Iterator[str]:
        """Yield page fragments from ``stream``.

        A read failure (any of ``READ_ERRORS``, including ``EOFError`` from a
        truncated compressed file) is re-raised and ends the sequence;
        fragments already yielded remain valid. A ``sample_limit`` below 1
        yields nothing.
        """
        if sample_limit is not None and sample_limit < 1:
            return
        for count, fragment in enumerate(self.iter_fragments(stream), 1):
            self.stats["processed"] += 1
            yield fragment
            if sample_limit is not None and count >= sample_limit:
                return

    def iter_fragments(self, stream: Iterable[str]) -> Iterator[str]:
        inside_page = False
        buffer: List[str] = []

        try:
            for line in stream:
                text = line.rstrip("\r\n")
                marker = text.strip()

                if marker == PAGE_OPEN_TAG:
                    inside_page = True
                    buffer.append(text)
                    continue

                # A stray close tag is emitted as its own block and fails decoding later
                if marker == PAGE_CLOSE_TAG:
                    buffer.append(text)
                    yield self._join(buffer)
                    buffer = []
                    inside_page = False
                    continue

                if inside_page:
                    buffer.append(text)
        except READ_ERRORS as e:
            self.stats["errors"] += 1
            self.logger.debug(f"Read failure after {self.stats['processed']} fragments: {e}")
            raise

        if buffer:
            self.logger.debug("Input ended inside a page block, emitting the partial block")
            yield self._join(buffer)

    @staticmethod
    def _join(lines: List[str]) -> str:
        return "".join(f"{line}\n" for line in lines)
