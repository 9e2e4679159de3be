from xml.sax.saxutils import escape

import pytest


def page_xml(title, *texts, indent="  "):
    """Render one <page> block the way MediaWiki exports lay it out."""
    lines = [f"{indent}<page>", f"{indent}  <title>{escape(title)}</title>", f"{indent}  <ns>0</ns>"]
    for text in texts:
        lines.append(f"{indent}  <revision>")
        lines.append(f'{indent}    <text xml:space="preserve">{escape(text)}</text>')
        lines.append(f"{indent}  </revision>")
    lines.append(f"{indent}</page>")
    return "\n".join(lines) + "\n"


def export_xml(*pages):
    header = (
        '<mediawiki xmlns="http://www.mediawiki.org/xml/export-0.11/" xml:lang="en">\n'
        "  <siteinfo>\n"
        "    <sitename>Wikipedia</sitename>\n"
        "  </siteinfo>\n"
    )
    return header + "".join(pages) + "</mediawiki>\n"


@pytest.fixture
def write_export(tmp_path):
    def _write(*pages, name="export.xml"):
        path = tmp_path / name
        path.write_text(export_xml(*pages), encoding="utf-8")
        return path
    return _write
