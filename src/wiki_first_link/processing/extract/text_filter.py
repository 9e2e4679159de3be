"""Regex passes that strip non-prose markup from wikitext."""
import re


class TextFilter:
    """Removes parenthetical asides, templates and citations, in that order.

    The order is part of the contract: parentheses go first, so a template or
    citation that only appears inside an aside never reaches the later passes.
    """

    # Non-greedy and single-line; "()" alone does not match
    PARENS_RE = re.compile(r"\(.+?\)")
    # Non-greedy, may cross line boundaries; nested templates leave their tail behind
    BRACES_RE = re.compile(r"\{\{.*?\}\}", re.DOTALL | re.MULTILINE)
    # Non-greedy and single-line
    CITATION_RE = re.compile(r"<ref>.+?</ref>")

    def strip_parentheticals(self, text: str) -> str:
        return self.PARENS_RE.sub("", text)

    def strip_templates(self, text: str) -> str:
        return self.BRACES_RE.sub("", text)

    def strip_citations(self, text: str) -> str:
        return self.CITATION_RE.sub("", text)

    def filter(self, text: str) -> str:
        text = self.strip_parentheticals(text)
        text = self.strip_templates(text)
        return self.strip_citations(text)
