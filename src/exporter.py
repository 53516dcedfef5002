import json
import logging
from datetime import datetime

from models import WatchRecord

logger = logging.getLogger(__name__)

CSV_HEADER = ["Title", "Channel", "Date", "Time"]

EXPORT_FORMATS = ("csv", "json")


def _quote(value):
    return '"' + value.replace('"', '""') + '"'


def format_date(instant):
    """M/D/YYYY, e.g. 1/29/2025."""
    return f"{instant.month}/{instant.day}/{instant.year}"


def format_time(instant):
    """H:MM:SS AM/PM, e.g. 8:00:26 AM."""
    hour = instant.hour % 12 or 12
    meridiem = "PM" if instant.hour >= 12 else "AM"
    return f"{hour}:{instant.minute:02d}:{instant.second:02d} {meridiem}"


def to_csv(records):
    """
    Title and channel are always quoted (inner quotes doubled); date and time are not.
    """
    lines = [",".join(CSV_HEADER)]
    for record in records:
        lines.append(",".join([
            _quote(record.title),
            _quote(record.channel),
            format_date(record.instant),
            format_time(record.instant),
        ]))
    return "\n".join(lines)


def record_to_dict(record):
    return {
        "title": record.title,
        "channel": record.channel,
        "date": record.instant.isoformat(),
        "timestamp": record.timestamp,
        "year": record.year,
        "month": record.month,
        "day": record.day,
        "hour": record.hour,
    }


def to_json(records):
    return json.dumps([record_to_dict(r) for r in records], indent=2, ensure_ascii=False)


def records_from_json(text):
    """
    Rebuilds WatchRecords from `to_json` output.
    Derived calendar fields are recomputed from `date` rather than trusted.
    """
    records = []
    for item in json.loads(text):
        records.append(WatchRecord(
            title=item["title"],
            channel=item["channel"],
            instant=datetime.fromisoformat(item["date"]),
            hour=item.get("hour"),
        ))
    return records


def export_history(store, fmt):
    """
    Serializes the store's full history, most recent first.
    """
    records = store.sorted_history()
    if fmt == "csv":
        return to_csv(records)
    if fmt == "json":
        return to_json(records)
    raise ValueError(f"Unknown export format: {fmt!r} (expected one of {', '.join(EXPORT_FORMATS)})")


def write_export(store, path, fmt=None):
    """
    Writes the store's history to `path`. The format defaults to the file extension.
    """
    if fmt is None:
        fmt = str(path).rsplit(".", 1)[-1].lower()
    content = export_history(store, fmt)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
    logger.info("Exported %d records to %s", len(store.records), path)
    return path
