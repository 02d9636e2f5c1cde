"""
Hanzidict: Chinese/English dictionary with word segmentation.
Queries accept characters (traditional or simplified), pinyin or English.
"""

import time
from typing import List, Optional, Tuple

__version__ = "0.1.0"


def warm_up(verbose: bool = False) -> Tuple[float, dict]:
    """
    Load the dictionary ahead of the first query.

    The compiled dictionary is read into memory once per process; calling
    this at application startup moves that cost out of the first query.

    Args:
        verbose: If True, print timing information.

    Returns:
        Tuple of (total_time_seconds, timing_details_dict)

    Example:
        >>> import hanzidict
        >>> elapsed, details = hanzidict.warm_up(verbose=True)
        Warming up hanzidict...
          Dictionary:     812.4ms
          First query:      0.3ms
        Total warm-up:    812.7ms
    """
    from hanzidict.dictionary import get_dictionary

    timings = {}
    total_start = time.perf_counter()

    if verbose:
        print("Warming up hanzidict...")

    # 1. Load store, converter tables and classifier
    t0 = time.perf_counter()
    dictionary = get_dictionary()
    timings['dictionary'] = (time.perf_counter() - t0) * 1000
    if verbose:
        print(f"  Dictionary:     {timings['dictionary']:>7.1f}ms")

    # 2. Exercise the segmenter once
    t0 = time.perf_counter()
    dictionary.segment("你好")
    timings['query'] = (time.perf_counter() - t0) * 1000
    if verbose:
        print(f"  First query:    {timings['query']:>7.1f}ms")

    total_time = time.perf_counter() - total_start
    timings['total'] = total_time * 1000

    if verbose:
        print(f"Total warm-up:    {timings['total']:>7.1f}ms")

    return total_time, timings


def query(text: str) -> Optional[list]:
    """
    Look up characters, pinyin or English in the default dictionary.

    Returns:
        List of WordEntry, or None if the text could not be classified.

    Example:
        >>> import hanzidict
        >>> [e.traditional for e in hanzidict.query("ni3hao3")]
        ['你好']
    """
    from hanzidict.dictionary import get_dictionary
    return get_dictionary().query(text)


def segment(text: str) -> List[str]:
    """Segment Chinese text with the default dictionary."""
    from hanzidict.dictionary import get_dictionary
    return get_dictionary().segment(text)
