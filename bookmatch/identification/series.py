"""
Series extraction from Google Books volume data.

Sources, in order: seriesInfo, a "Book N of X" subtitle, title patterns
("X - Book N", "X #N", "X, חלק N"), a "Book N of X" phrase in the
description.
"""

import re
from typing import Any, Optional

from bookmatch.identification.models import BookCandidate


SUBTITLE_PATTERN = re.compile(r"Book\s+(\d+)\s+of\s+(.+)", re.IGNORECASE)
DESCRIPTION_PATTERN = re.compile(r"Book\s+(\d+)\s+of\s+([^.\n]+)", re.IGNORECASE)
TITLE_PATTERNS = (
    re.compile(r"(.+?)\s+[-–]\s+Book\s+(\d+)", re.IGNORECASE),
    re.compile(r"(.+?)\s+#(\d+)"),
    re.compile(r"(.+?)\s*,?\s*חלק\s+(\d+)"),
)


def parse_series_number(value: Any) -> Optional[int]:
    """First run of digits in value, or value itself if already an int."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    
    match = re.search(r"\d+", str(value))
    return int(match.group(0)) if match else None


def _name(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def extract_series(candidate: BookCandidate) -> tuple[Optional[str], Optional[int]]:
    """
    Extract series name and number.
    
    Args:
        candidate: Parsed volume
        
    Returns:
        (series, series_number), either may be None
    """
    series: Optional[str] = None
    number: Optional[int] = None
    
    info = candidate.series_info
    if info:
        for key in ("bookDisplaySeriesTitle", "series", "seriesTitle"):
            series = _name(info.get(key))
            if series:
                break
        volume_series = info.get("volumeSeries")
        if not series and isinstance(volume_series, list) and volume_series:
            first = volume_series[0] if isinstance(volume_series[0], dict) else {}
            series = _name(first.get("series"))
            number = parse_series_number(first.get("volumeSeriesNumber"))
        if number is None:
            number = parse_series_number(info.get("volumeSeriesNumber"))
    
    if not series and candidate.subtitle:
        match = SUBTITLE_PATTERN.search(candidate.subtitle)
        if match:
            number = parse_series_number(match.group(1))
            series = match.group(2).strip()
    
    if not series and candidate.title:
        for pattern in TITLE_PATTERNS:
            match = pattern.search(candidate.title)
            if match:
                series = match.group(1).strip()
                if number is None:
                    number = parse_series_number(match.group(2))
                break
    
    if not series and candidate.description:
        match = DESCRIPTION_PATTERN.search(candidate.description)
        if match:
            number = parse_series_number(match.group(1))
            series = match.group(2).strip()
    
    return series, number
