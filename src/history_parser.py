import logging
import re
from datetime import datetime

import pandas as pd

from models import (
    UNKNOWN_CHANNEL,
    ExtractionReport,
    InvalidTimestampError,
    NoEntriesError,
    SkippedEntry,
    WatchRecord,
)

logger = logging.getLogger(__name__)

MONTH_NAMES = ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun', 'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec']

TITLED_CONTEXT_WINDOW = 300
URL_CONTEXT_WINDOW = 100

# U+202F (narrow no-break space) after its UTF-8 bytes were decoded as cp1252
GARBLED_NARROW_SPACE = '\u00e2\u20ac\u00af'

_MONTHS = '|'.join(MONTH_NAMES)

# "Watched" is followed by a no-break space, which often arrives as "Â " after the same mojibake
_WATCHED = r'Watched(?:\u00c2|[ \t\u00a0])+'

TITLED_ENTRY = re.compile(_WATCHED + r'\*\*(.*?)\*\* \*\*(.*?)\*\* (.*?),.*?(?:\n|$)')
URL_ENTRY = re.compile(_WATCHED + r'(https://www\.youtube\.com/watch\?v=.*?)\n(.*?),.*?(?:\n|$)')

DATE_PART = re.compile(r'(' + _MONTHS + r')\s+(\d+),\s+(\d+)')
TIME_PART = re.compile(r'(\d+):(\d+):(\d+)')
FULL_DATE = re.compile(r'(' + _MONTHS + r')\s+(\d+),\s+(\d+),\s+(\d+):(\d+):(\d+).*?([AP]M)')
VIDEO_ID = re.compile(r'[?&]v=([^&]+)')


def clean_date_text(text):
    """
    Replaces the garbled narrow no-break space (and the real one) with a plain space.
    """
    return text.replace(GARBLED_NARROW_SPACE, ' ').replace('\u202f', ' ')


def to_24_hour(hour, meridiem):
    """
    Converts a 12-hour clock value to 0-23.
    "12 AM" -> 0, "12 PM" -> 12, "h PM" -> h + 12.
    """
    meridiem = meridiem.strip().upper()
    if meridiem == 'PM' and hour < 12:
        return hour + 12
    if meridiem == 'AM' and hour == 12:
        return 0
    return hour


def month_index(abbrev):
    try:
        return MONTH_NAMES.index(abbrev)
    except ValueError:
        raise InvalidTimestampError(f"Unknown month abbreviation: {abbrev!r}") from None


def normalize_timestamp(month, day, year, hour, minute, second, meridiem):
    """
    Builds a validated datetime from the captured text fields of an export entry.
    Returns (instant, hour_24). Raises InvalidTimestampError when the fields do
    not make a real calendar date.
    """
    index = month_index(month)
    try:
        hour_24 = to_24_hour(int(hour), meridiem)
        instant = datetime(int(year), index + 1, int(day), hour_24, int(minute), int(second))
    except (ValueError, OverflowError) as e:
        raise InvalidTimestampError(
            f"Invalid date {month} {day}, {year} {hour}:{minute}:{second} {meridiem}: {e}"
        ) from e
    return instant, hour_24


def parse_date_string(text):
    """
    Parses a full date line such as "Jan 29, 2025, 8:00:26 AM EST".
    Falls back to pandas' generic parser when the explicit layout does not match.
    """
    clean = clean_date_text(text).strip()

    match = FULL_DATE.search(clean)
    if match:
        return normalize_timestamp(*match.groups())

    try:
        parsed = pd.to_datetime(clean, errors='coerce')
    except (ValueError, TypeError, OverflowError) as e:
        raise InvalidTimestampError(f"Could not parse date: {clean!r}") from e
    if parsed is None or pd.isna(parsed):
        raise InvalidTimestampError(f"Could not parse date: {clean!r}")

    instant = parsed.to_pydatetime()
    if instant.tzinfo is not None:
        # keep the wall-clock time as printed, like the explicit path does
        instant = instant.replace(tzinfo=None)
    return instant, instant.hour


def _context_lines(text, start, window):
    return text[start:start + window].split('\n')


def parse_titled_entry(text, match, window=TITLED_CONTEXT_WINDOW):
    """
    Turns a TITLED_ENTRY match into a WatchRecord.

    The date sits on the first line after the match start that has a colon and
    an AM/PM marker. Usually that is the "Watched" line itself.
    """
    title = match.group(1).strip()
    channel = match.group(2).strip()

    date_line = ''
    for line in _context_lines(text, match.start(), window):
        if ':' in line and ('AM' in line or 'PM' in line):
            date_line = clean_date_text(line)
            break

    if not date_line:
        raise InvalidTimestampError("No date line found near entry")

    date_match = DATE_PART.search(date_line)
    time_match = TIME_PART.search(date_line)
    if not (date_match and time_match):
        raise InvalidTimestampError(f"Incomplete date line: {date_line.strip()!r}")

    month, day, year = date_match.groups()
    hours, minutes, seconds = time_match.groups()
    meridiem = 'PM' if 'PM' in date_line else 'AM'

    instant, hour = normalize_timestamp(month, day, year, hours, minutes, seconds, meridiem)
    return WatchRecord(title=title, channel=channel, instant=instant, hour=hour)


def parse_url_entry(text, match, window=URL_CONTEXT_WINDOW):
    """
    Turns a URL_ENTRY match into a WatchRecord. The channel is not present in
    this layout, so the record gets a placeholder channel and a video-id title.
    """
    url = match.group(1).strip()
    date_str = match.group(2).strip()

    video_id = 'unknown'
    id_match = VIDEO_ID.search(url)
    if id_match:
        video_id = id_match.group(1)

    # The fragment before the comma is normally just "Jan 29"; pick up the whole line.
    # The first line is the "Watched <url>" line, and a video id may contain "AM" or "PM".
    if not FULL_DATE.search(clean_date_text(date_str)):
        for line in _context_lines(text, match.start(), window)[1:]:
            if 'AM' in line or 'PM' in line:
                date_str = line.strip()
                break

    instant, hour = parse_date_string(date_str)
    return WatchRecord(
        title=f"Video ID: {video_id}",
        channel=UNKNOWN_CHANNEL,
        instant=instant,
        hour=hour,
    )


def _scan(kind, pattern, builder, text, window):
    for match in pattern.finditer(text):
        try:
            yield builder(text, match, window)
        except InvalidTimestampError as e:
            logger.debug("Skipping %s entry at %d: %s", kind, match.start(), e)
            yield SkippedEntry(kind=kind, position=match.start(), reason=str(e))
        except Exception as e:
            logger.debug("Error parsing %s entry at %d", kind, match.start(), exc_info=True)
            yield SkippedEntry(kind=kind, position=match.start(), reason=f"{type(e).__name__}: {e}")


def scan_entries(text, titled_window=TITLED_CONTEXT_WINDOW, url_window=URL_CONTEXT_WINDOW):
    """
    Yields one outcome (WatchRecord or SkippedEntry) per candidate entry.
    All titled entries come first, then all URL-only entries, each in order of appearance.
    """
    yield from _scan('titled', TITLED_ENTRY, parse_titled_entry, text, titled_window)
    yield from _scan('url', URL_ENTRY, parse_url_entry, text, url_window)


def extract_report(text, titled_window=TITLED_CONTEXT_WINDOW, url_window=URL_CONTEXT_WINDOW):
    records = []
    skipped = []
    for outcome in scan_entries(text, titled_window, url_window):
        if isinstance(outcome, WatchRecord):
            records.append(outcome)
        else:
            skipped.append(outcome)
    return ExtractionReport(records=tuple(records), skipped=tuple(skipped))


def extract_records(text, titled_window=TITLED_CONTEXT_WINDOW, url_window=URL_CONTEXT_WINDOW):
    """
    Parses pasted watch-history text.
    Returns:
        list of WatchRecord in order of extraction (not sorted by time)
    Raises:
        NoEntriesError if nothing could be extracted.
    """
    report = extract_report(text, titled_window, url_window)
    if not report.records:
        raise NoEntriesError()

    logger.info("Extracted %d records (%d entries skipped)", len(report.records), len(report.skipped))
    return list(report.records)


def parse_file(filepath):
    """
    Parses a saved copy of the watch history page.
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        content = f.read()
    return extract_records(content)


if __name__ == "__main__":
    import sys
    # Direct test
    if len(sys.argv) > 1:
        results = parse_file(sys.argv[1])
        print(f"Found {len(results)} entries")
        for record in results[:5]:
            print(f"-- {record.instant} -- {record.channel}: {record.title}")
        if len(results) > 5:
            print("   ...")
