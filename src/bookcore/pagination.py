# ABOUTME: Page-count estimation shared by every format.
# ABOUTME: A fixed characters-per-page convention keeps page numbers stable across formats.

import math

CHARS_PER_PAGE = 2000


def estimate_pages(content_length: int) -> int:
    """Estimate the number of pages for a body of the given length.

    Always returns at least 1, so an empty body still counts as one page.
    """
    return max(math.ceil(content_length / CHARS_PER_PAGE), 1)
