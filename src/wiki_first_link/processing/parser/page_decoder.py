import logging
from typing import Optional

from icecream import ic
from lxml import etree

from wiki_first_link.domain.models import Page, Revision


class PageDecodeError(ValueError):
    """Raised when a fragment is well-formed XML but does not match the page schema."""


def _local_name(elem: etree._Element) -> str:
    if not isinstance(elem.tag, str):  # comments, processing instructions
        return ""
    return etree.QName(elem).localname


class PageDecoder:
    """Decodes a single <page> fragment into a Page.

    Required structure: a ``page`` root with a ``title`` child and one or more
    ``revision`` children, each holding a ``text`` child. Anything else in
    the fragment is ignored.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.stats = {'decoded': 0, 'errors': 0}
        self._xml_parser = etree.XMLParser(
            resolve_entities=False,
            no_network=True,
            huge_tree=True,
            remove_comments=True,
        )

    def decode(self, fragment: str) -> Optional[Page]:
        """Return the decoded Page, or None when the fragment is unusable."""
        try:
            page = self.decode_strict(fragment)
        except (etree.XMLSyntaxError, PageDecodeError) as e:
            self.stats['errors'] += 1
            self.logger.debug(f"Skipping undecodable page fragment: {e}")
            return None
        self.stats['decoded'] += 1
        return ic(page)

    def decode_strict(self, fragment: str) -> Page:
        root = etree.fromstring(fragment.encode("utf-8"), parser=self._xml_parser)
        if _local_name(root) != "page":
            raise PageDecodeError(f"unexpected root element <{root.tag}>")

        title = None
        revisions = []
        for child in root:
            name = _local_name(child)
            if name == "title" and title is None:
                title = child.text or ""
            elif name == "revision":
                revisions.append(self._decode_revision(child))

        if title is None:
            raise PageDecodeError("missing <title>")
        if not revisions:
            raise PageDecodeError(f"page {title!r} has no <revision>")
        return Page(title=title, revisions=revisions)

    @staticmethod
    def _decode_revision(rev_elem: etree._Element) -> Revision:
        for child in rev_elem:
            if _local_name(child) == "text":
                return Revision(text=child.text or "")
        raise PageDecodeError("revision without <text>")
