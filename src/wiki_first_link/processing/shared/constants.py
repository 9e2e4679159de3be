"""
Shared constants across the first-link extraction pipeline.
Only for values used across multiple components.
"""

# Page block delimiters, compared against stripped lines
PAGE_OPEN_TAG = "<page>"
PAGE_CLOSE_TAG = "</page>"

# Body text starting with this marker belongs to a redirect stub
REDIRECT_MARKER = "#REDIRECT"

# Titles ending with this suffix list meanings rather than prose
DISAMBIGUATION_SUFFIX = "(disambiguation)"

# Output line layout
OUTPUT_SEPARATOR = " -> "

# Reasons for dropping a page during processing
FILTER_REASONS = {
    'DECODE_ERROR': 'fragment failed to decode as a page',
    'DISAMBIGUATION': 'disambiguation title',
    'NO_BODY': 'redirect or missing revision',
    'NO_LINK': 'no qualifying link in body',
}
