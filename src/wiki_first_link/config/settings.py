# Standard library imports
import os

# Parser configuration settings
# encoding_errors='strict' turns undecodable input into a stream read error
PARSER_CONFIG = {
    'encoding': os.environ.get('WIKI_FIRST_LINK_ENCODING', 'utf-8'),
    'encoding_errors': os.environ.get('WIKI_FIRST_LINK_ENCODING_ERRORS', 'strict'),
    'progress_interval': int(os.environ.get('WIKI_FIRST_LINK_PROGRESS_INTERVAL', 100000)),
}

# Logging configuration
# No file handler is attached unless log_dir is set
LOGGING_CONFIG = {
    'log_dir': os.environ.get('WIKI_FIRST_LINK_LOG_DIR'),
    'log_level': os.environ.get('WIKI_FIRST_LINK_LOG_LEVEL', 'WARNING'),
    'logger_name': 'wiki_first_link',
}
