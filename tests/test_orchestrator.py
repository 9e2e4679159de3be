import io
import logging

import pytest

from wiki_first_link.domain.models import OutputRecord
from wiki_first_link.processing.extract.link_extractor import LinkExtractor
from wiki_first_link.processing.orchestrator import FirstLinkPipeline
from wiki_first_link.processing.shared.error_handling import StreamReadError
from tests.conftest import export_xml, page_xml


def run(*pages, **kwargs):
    pipeline = FirstLinkPipeline(**kwargs)
    return list(pipeline.run(io.StringIO(export_xml(*pages)))), pipeline


def test_parenthetical_is_stripped_before_extraction():
    records, _ = run(page_xml("Dog", "'''Dog''' is a (domesticated) animal. See [[Canine]]."))

    assert records == [OutputRecord("Dog", "Canine")]


def test_disambiguation_pages_are_dropped():
    records, pipeline = run(page_xml("Foo (disambiguation)", "Foo may refer to [[Foo Bar]]."))

    assert records == []
    assert pipeline.stats.disambiguation == 1


def test_redirect_pages_are_dropped():
    records, pipeline = run(page_xml("Foo", "#REDIRECT [[Bar]]"))

    assert records == []
    assert pipeline.stats.no_body == 1


def test_link_at_line_start_disqualifies_the_line():
    records, pipeline = run(page_xml("Baz", "{{Infobox}}\n[[Baz]] is notable."))

    assert records == []
    assert pipeline.stats.no_link == 1


def test_citation_is_stripped_before_extraction():
    records, _ = run(page_xml("City", "The city <ref>cite.com</ref> hosts [[Event]]."))

    assert records == [OutputRecord("City", "Event")]


def test_records_follow_input_order_and_skip_failures():
    pages = [
        page_xml("Alpha", "Alpha is a [[Letter]]."),
        "  <page>\n    <title>Broken</title>\n  </page>\n",
        page_xml("Beta (disambiguation)", "Beta may be [[B]]."),
        page_xml("Gamma", "#REDIRECT [[Alpha]]"),
        page_xml("Delta", "{{Infobox\n| x = [[Hidden]]\n}}\n'''Delta''' (river) is in [[Greece]]."),
        page_xml("Epsilon", "* only a [[List]]"),
        page_xml("Zeta", "Zeta [[Z|zeta]] is last."),
    ]

    records, pipeline = run(*pages)

    assert [r.format() for r in records] == [
        "Alpha -> Letter",
        "Delta -> Greece",
        "Zeta -> Z",
    ]
    assert pipeline.summary() == {
        'fragments': 7,
        'decoded': 6,
        'decode_errors': 1,
        'disambiguation': 1,
        'no_body': 1,
        'no_link': 1,
        'emitted': 3,
        'read_error': None,
        'error_types': {},
    }


def test_only_first_revision_is_consulted():
    records, _ = run(page_xml("Dog", "No link here.", "Later [[Revision]]."))

    assert records == []


def test_file_links_are_emitted_by_default():
    records, _ = run(page_xml("Dog", "Dog [[File:Dog.jpg|thumb]] is a [[Mammal]]."))

    assert records == [OutputRecord("Dog", "File:Dog.jpg")]


def test_excluded_prefixes_are_passed_through():
    records, _ = run(
        page_xml("Dog", "Dog [[File:Dog.jpg]] is a [[Mammal]]."),
        extractor=LinkExtractor(excluded_prefixes=["File:"]),
    )

    assert records == [OutputRecord("Dog", "Mammal")]


def test_sample_limit_stops_after_emitted_records():
    pipeline = FirstLinkPipeline()
    text = export_xml(*(page_xml(f"P{i}", f"P{i} [[L{i}]]") for i in range(5)))

    records = list(pipeline.run(io.StringIO(text), sample_limit=2))

    assert [r.link for r in records] == ["L0", "L1"]
    assert pipeline.stats.fragments == 2


def failing_stream():
    yield from export_xml(page_xml("Alpha", "Alpha is a [[Letter]].")).splitlines(keepends=True)[:-1]
    yield "  <page>\n"
    raise OSError("read failed")


def test_read_error_ends_output_quietly():
    pipeline = FirstLinkPipeline()

    records = list(pipeline.run(failing_stream()))

    assert records == [OutputRecord("Alpha", "Letter")]
    assert pipeline.stats.read_error == "read failed"
    assert pipeline.error_handler.stats['error_types'] == {'OSError': 1}


def test_read_error_is_raised_in_strict_mode_after_earlier_records():
    pipeline = FirstLinkPipeline(strict=True)
    records = pipeline.run(failing_stream())

    assert next(records) == OutputRecord("Alpha", "Letter")
    with pytest.raises(StreamReadError, match="read failed"):
        next(records)


def test_process_file_reads_from_path(write_export):
    path = write_export(page_xml("Dog", "Dog is a [[Mammal]]."))

    records = list(FirstLinkPipeline().process_file(str(path)))

    assert records == [OutputRecord("Dog", "Mammal")]


def test_process_file_fails_early_for_missing_input(tmp_path):
    with pytest.raises(FileNotFoundError):
        FirstLinkPipeline().process_file(str(tmp_path / "missing.xml"))


def truncated_stream():
    yield from export_xml(page_xml("Alpha", "Alpha is a [[Letter]].")).splitlines(keepends=True)[:-1]
    raise EOFError("Compressed file ended before the end-of-stream marker was reached")


def test_truncated_compressed_stream_ends_output():
    pipeline = FirstLinkPipeline()

    records = list(pipeline.run(truncated_stream()))

    assert records == [OutputRecord("Alpha", "Letter")]
    assert pipeline.summary()['error_types'] == {'EOFError': 1}


def test_truncated_compressed_stream_is_fatal_in_strict_mode():
    records = FirstLinkPipeline(strict=True).run(truncated_stream())

    assert next(records) == OutputRecord("Alpha", "Letter")
    with pytest.raises(StreamReadError, match="end-of-stream marker"):
        next(records)


@pytest.mark.parametrize("limit", [0, -3])
def test_sample_limit_below_one_is_rejected(limit):
    with pytest.raises(ValueError, match="at least 1"):
        FirstLinkPipeline().run(io.StringIO(""), sample_limit=limit)


def test_skipped_pages_are_logged_with_reason(caplog):
    logger = logging.getLogger("test_pipeline_reasons")
    caplog.set_level(logging.DEBUG, logger="test_pipeline_reasons")

    run(
        page_xml("Foo (disambiguation)", "Foo [[Bar]]"),
        page_xml("Baz", "#REDIRECT [[Qux]]"),
        page_xml("Quux", "* [[Listed]]"),
        logger=logger,
    )

    assert "Skipping 'Foo (disambiguation)': disambiguation title" in caplog.text
    assert "Skipping 'Baz': redirect or missing revision" in caplog.text
    assert "Skipping 'Quux': no qualifying link in body" in caplog.text
