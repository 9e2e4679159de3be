from dataclasses import dataclass, field
from typing import List, Optional

from wiki_first_link.processing.shared.constants import (
    DISAMBIGUATION_SUFFIX,
    OUTPUT_SEPARATOR,
    REDIRECT_MARKER,
)


@dataclass
class Revision:
    text: str = ""


@dataclass
class Page:
    """A decoded <page> block: its title and revisions in document order."""
    title: str
    revisions: List[Revision] = field(default_factory=list)

    def body_text(self) -> Optional[str]:
        """Return the first revision's text, or None for redirects and pages without revisions."""
        if not self.revisions:
            return None
        candidate = self.revisions[0].text
        if candidate.startswith(REDIRECT_MARKER):
            return None
        return candidate

    def is_disambiguation(self) -> bool:
        return self.title.endswith(DISAMBIGUATION_SUFFIX)

    def __repr__(self) -> str:
        # Revision bodies can be megabytes long
        return f"Page(title={self.title!r}, revisions={len(self.revisions)})"


@dataclass(frozen=True)
class OutputRecord:
    title: str
    link: str

    def format(self) -> str:
        return f"{self.title}{OUTPUT_SEPARATOR}{self.link}"
