#!/usr/bin/env python3
import argparse
import sys
from typing import List, Optional

import requests

from wiki_first_link.config.settings import LOGGING_CONFIG, PARSER_CONFIG
from wiki_first_link.logging_utils import ApplicationLogger
from wiki_first_link.processing.extract.link_extractor import LinkExtractor
from wiki_first_link.processing.orchestrator import FirstLinkPipeline
from wiki_first_link.processing.shared.error_handling import ErrorHandler, StreamReadError


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wiki-first-link",
        description="Print the first prose link of every article in a MediaWiki XML export"
    )
    parser.add_argument('path', type=str, help='Export file (.xml, .xml.bz2, .xml.gz) or http(s) URL')
    parser.add_argument('--limit', type=positive_int, default=None, help='Stop after this many output lines')
    parser.add_argument('--strict', action='store_true',
                        help='Exit with status 1 when the input cannot be read to the end')
    parser.add_argument('--skip-prefix', action='append', default=[], metavar='PREFIX',
                        help='Ignore link targets starting with PREFIX (e.g. "File:"); repeatable')
    parser.add_argument('--progress', action='store_true', help='Show a progress bar on stderr')
    parser.add_argument('--log-dir', type=str, default=LOGGING_CONFIG['log_dir'],
                        help='Also write logs to a rotating file in this directory')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log progress and summary')
    parser.add_argument('--debug', action='store_true', help='Log per-page decisions and tracebacks')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    app_logger = ApplicationLogger(
        log_dir=args.log_dir,
        logger_name=LOGGING_CONFIG['logger_name'],
        debug=args.debug,
        verbose=args.verbose,
        level=LOGGING_CONFIG['log_level'],
    )
    logger = app_logger.get_logger()

    pipeline = FirstLinkPipeline(
        extractor=LinkExtractor(excluded_prefixes=args.skip_prefix),
        logger=logger,
        error_handler=ErrorHandler(logger, debug=args.debug),
        strict=args.strict,
        progress=args.progress,
        progress_interval=PARSER_CONFIG['progress_interval'],
    )

    try:
        records = pipeline.process_file(args.path, sample_limit=args.limit)
    except (OSError, requests.RequestException) as e:
        print(e, file=sys.stderr)
        return 1

    try:
        for record in records:
            print(record.format())
    except StreamReadError as e:
        print(e, file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
