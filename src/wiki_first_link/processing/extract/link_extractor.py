"""First-link selection over normalized article text."""
import re
from typing import Iterable, Iterator, Optional, Tuple


class LinkExtractor:
    """Finds the first [[link]] target on a prose line.

    Only lines starting with an alphanumeric character or an apostrophe are
    considered prose; lists, headings, tables and lines opening with markup
    are skipped even when they hold an earlier link. ``File:`` and other
    namespaced targets are returned like any other unless their prefix is
    listed in ``excluded_prefixes``.
    """

    LINK_RE = re.compile(r"\[\[([^|]+?)(\|.+)?\]\]")

    def __init__(self, excluded_prefixes: Iterable[str] = ()):
        self.excluded_prefixes: Tuple[str, ...] = tuple(excluded_prefixes)

    @staticmethod
    def is_paragraph(line: str) -> bool:
        return line[:1].isalnum() or line.startswith("'")

    def iter_paragraphs(self, text: str) -> Iterator[str]:
        # Only "\n" ends a line; U+2028, U+0085 and friends stay inside it
        lines = (line[:-1] if line.endswith("\r") else line for line in text.split("\n"))
        return (line for line in lines if self.is_paragraph(line))

    def iter_candidates(self, text: str) -> Iterator[str]:
        """Yield link targets from prose lines in document order."""
        for paragraph in self.iter_paragraphs(text):
            for match in self.LINK_RE.finditer(paragraph):
                yield match.group(1)

    def extract(self, text: str) -> Optional[str]:
        for candidate in self.iter_candidates(text):
            if self.excluded_prefixes and candidate.startswith(self.excluded_prefixes):
                continue
            return candidate
        return None
