import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, Optional

from tqdm import tqdm

from wiki_first_link.config.settings import PARSER_CONFIG
from wiki_first_link.domain.models import OutputRecord
from wiki_first_link.processing.extract.link_extractor import LinkExtractor
from wiki_first_link.processing.extract.text_filter import TextFilter
from wiki_first_link.processing.parser.page_decoder import PageDecoder
from wiki_first_link.processing.parser.page_segmenter import PageSegmenter
from wiki_first_link.processing.shared.constants import FILTER_REASONS
from wiki_first_link.processing.shared.error_handling import READ_ERRORS, ErrorHandler, StreamReadError


def _check_limit(sample_limit: Optional[int]) -> None:
    if sample_limit is not None and sample_limit < 1:
        raise ValueError(f"sample_limit must be at least 1, got {sample_limit}")


@dataclass
class ProcessingStats:
    fragments: int = 0
    decoded: int = 0
    decode_errors: int = 0
    disambiguation: int = 0
    no_body: int = 0
    no_link: int = 0
    emitted: int = 0
    read_error: Optional[str] = None
    start_time: float = field(default_factory=time.time)
    end_time: Optional[float] = None

    def duration(self) -> float:
        return (self.end_time or time.time()) - self.start_time


class FirstLinkPipeline:
    """
    Single forward pass over an export:
    segment -> decode -> drop disambiguation -> body text -> filter -> extract.

    Records come out in input order, one page in memory at a time. Per-page
    problems only drop that page. A read failure ends the run; it is logged
    and, with ``strict=True``, re-raised as StreamReadError once the records
    read so far have been yielded.
    """

    def __init__(
        self,
        segmenter: Optional[PageSegmenter] = None,
        decoder: Optional[PageDecoder] = None,
        text_filter: Optional[TextFilter] = None,
        extractor: Optional[LinkExtractor] = None,
        logger: Optional[logging.Logger] = None,
        error_handler: Optional[ErrorHandler] = None,
        strict: bool = False,
        progress: bool = False,
        progress_interval: int = PARSER_CONFIG['progress_interval'],
    ):
        self.logger = logger or logging.getLogger(__name__)
        self.segmenter = segmenter or PageSegmenter(logger=self.logger)
        self.decoder = decoder or PageDecoder(logger=self.logger)
        self.text_filter = text_filter or TextFilter()
        self.extractor = extractor or LinkExtractor()
        self.error_handler = error_handler or ErrorHandler(self.logger)
        self.strict = strict
        self.progress = progress
        self.progress_interval = progress_interval
        self.stats = ProcessingStats()

    def process_file(self, file_name: str, sample_limit: Optional[int] = None) -> Iterator[OutputRecord]:
        """Open ``file_name`` (path or URL) and run the pipeline over it.

        The file is opened eagerly so a missing input fails at call time.
        """
        _check_limit(sample_limit)
        fragments = self.segmenter.parse_file(file_name)
        return self._run(fragments, file_name, sample_limit)

    def run(
        self,
        stream: Iterable[str],
        file_name: str = "<stream>",
        sample_limit: Optional[int] = None
    ) -> Iterator[OutputRecord]:
        _check_limit(sample_limit)
        fragments = self.segmenter.parse_stream(stream, file_name)
        return self._run(fragments, file_name, sample_limit)

    def _run(self, fragments: Iterator[str], file_name: str, sample_limit: Optional[int]) -> Iterator[OutputRecord]:
        self.stats = ProcessingStats()
        progress_bar = tqdm(desc=f"Pages in {file_name}", unit="page", disable=not self.progress)
        try:
            for fragment in self._read_fragments(fragments, file_name):
                self.stats.fragments += 1
                progress_bar.update(1)
                if self.progress_interval and self.stats.fragments % self.progress_interval == 0:
                    self.logger.info(
                        f"Progress: {self.stats.fragments} pages read, {self.stats.emitted} links emitted"
                    )

                record = self.process_fragment(fragment)
                if record is None:
                    continue

                self.stats.emitted += 1
                yield record
                if sample_limit is not None and self.stats.emitted >= sample_limit:
                    break
        finally:
            # Releases the input stream when stopping early
            fragments.close()
            progress_bar.close()
            self.stats.end_time = time.time()
            self._log_completion(file_name)

        if self.strict and self.stats.read_error is not None:
            raise StreamReadError(f"Error reading {file_name}: {self.stats.read_error}")

    def _read_fragments(self, fragments: Iterator[str], file_name: str) -> Iterator[str]:
        while True:
            try:
                fragment = next(fragments)
            except StopIteration:
                return
            except READ_ERRORS as e:
                details = self.error_handler.handle(e, ErrorHandler.create_context(
                    component="FirstLinkPipeline._read_fragments",
                    item_id=file_name,
                    metadata={'fragments_read': self.stats.fragments}
                ))
                self.stats.read_error = details['message']
                return
            yield fragment

    def process_fragment(self, fragment: str) -> Optional[OutputRecord]:
        """Run one fragment through decode, filtering and extraction."""
        page = self.decoder.decode(fragment)
        if page is None:
            self.stats.decode_errors += 1
            self.logger.debug(FILTER_REASONS['DECODE_ERROR'])
            return None
        self.stats.decoded += 1

        if page.is_disambiguation():
            self.stats.disambiguation += 1
            self.logger.debug(f"Skipping {page.title!r}: {FILTER_REASONS['DISAMBIGUATION']}")
            return None

        text = page.body_text()
        if text is None:
            self.stats.no_body += 1
            self.logger.debug(f"Skipping {page.title!r}: {FILTER_REASONS['NO_BODY']}")
            return None

        link = self.extractor.extract(self.text_filter.filter(text))
        if link is None:
            self.stats.no_link += 1
            self.logger.debug(f"Skipping {page.title!r}: {FILTER_REASONS['NO_LINK']}")
            return None

        return OutputRecord(title=page.title, link=link)

    def summary(self) -> Dict[str, Any]:
        return {
            'fragments': self.stats.fragments,
            'decoded': self.stats.decoded,
            'decode_errors': self.stats.decode_errors,
            'disambiguation': self.stats.disambiguation,
            'no_body': self.stats.no_body,
            'no_link': self.stats.no_link,
            'emitted': self.stats.emitted,
            'read_error': self.stats.read_error,
            'error_types': dict(self.error_handler.stats['error_types']),
        }

    def _log_completion(self, file_name: str) -> None:
        duration = self.stats.duration()
        self.logger.info(
            f"Completed processing: {file_name}\n"
            f"• Pages: {self.stats.fragments}\n"
            f"• Decode errors: {self.stats.decode_errors}\n"
            f"• Skipped: {self.stats.disambiguation} disambiguation, "
            f"{self.stats.no_body} redirect/empty, {self.stats.no_link} without link\n"
            f"• Links: {self.stats.emitted}\n"
            f"• Duration: {duration:.2f}s\n"
            f"• Throughput: {self.stats.fragments / duration if duration else 0.0:.1f} pages/sec"
        )
