"""
Standardized error handling and reporting utilities
"""

import logging
import traceback
from datetime import datetime, timezone
from typing import Dict, Any, Optional

# Failures that can surface while pulling lines from an input stream.
# EOFError comes from truncated bz2/gzip input.
READ_ERRORS = (OSError, UnicodeDecodeError, EOFError)


class StreamReadError(OSError):
    """Input stream failed mid-way; raised only when read errors are fatal."""


class ErrorHandler:
    """
    Error reporting with per-type counters and context logging
    """

    def __init__(self, logger: Optional[logging.Logger] = None, debug: bool = False):
        """
        Args:
            logger: Configured logger instance
            debug: Log the traceback along with the error details
        """
        self.logger = logger or logging.getLogger(__name__)
        self.debug = debug
        self.stats: Dict[str, Any] = {'error_count': 0, 'error_types': {}, 'last_error': None}

    def handle(self, error: BaseException, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Record and log an exception

        Args:
            error: Exception to handle
            context: Additional context about the error

        Returns:
            The error details that were logged
        """
        error_type = type(error).__name__
        details = {
            'type': error_type,
            'message': str(error),
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'context': context,
            'traceback': traceback.format_exc() if self.debug else None
        }

        self.stats['error_count'] += 1
        self.stats['error_types'][error_type] = self.stats['error_types'].get(error_type, 0) + 1
        self.stats['last_error'] = details

        self.logger.error("Error occurred: %s", details)
        return details

    @classmethod
    def create_context(
        cls,
        component: str,
        item_id: Optional[str] = None,
        metadata: Optional[Dict] = None
    ) -> Dict[str, Any]:
        """
        Create standardized error context

        Args:
            component: Which component failed
            item_id: ID of item being processed
            metadata: Additional context

        Returns:
            Context dictionary
        """
        return {
            'component': component,
            'item_id': item_id,
            'metadata': metadata or {}
        }
