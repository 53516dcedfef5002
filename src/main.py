import argparse
import logging
import os
import sys

from exporter import write_export
from history_store import HistoryStore
from settings import load_settings

logger = logging.getLogger("watch_history")


def setup_logging(level="INFO"):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def read_inputs(paths):
    """
    Reads every input file and joins them into one text block.
    """
    chunks = []
    for path in paths:
        if not os.path.isfile(path):
            raise FileNotFoundError(f"Input file not found: {path}")
        print(f"Reading {path}...")
        with open(path, "r", encoding="utf-8") as f:
            chunks.append(f.read())
    return "\n".join(chunks)


def print_report(store, top=5):
    print(store.summary())

    channels = store.channel_stats
    if not channels.empty:
        print("\nTop channels:")
        for name, count in zip(channels["name"].head(top), channels["count"].head(top)):
            print(f"  {count:>5}  {name}")

    hourly = store.hourly_activity
    busiest = hourly[hourly['count'] > 0].sort_values('count', ascending=False, kind='stable').head(3)
    if not busiest.empty:
        print("\nBusiest hours:")
        for hour, count in zip(busiest["hour"], busiest["count"]):
            print(f"  {hour}:00  {count}")

    recurring = store.recurring_content
    if not recurring.empty:
        print("\nWatched more than once:")
        for title, count in zip(recurring["title"].head(top), recurring["count"].head(top)):
            print(f"  {count:>5}  {title}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Analyze a Google Takeout YouTube watch history export")
    parser.add_argument("files", nargs="+", help="Copied watch-history text file(s)")
    parser.add_argument("--csv", metavar="PATH", help="Write the full history as CSV")
    parser.add_argument("--json", metavar="PATH", help="Write the full history as JSON")
    parser.add_argument("-c", "--config", help="Path to settings.yaml")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    args = parser.parse_args(argv)

    settings = load_settings(args.config)
    setup_logging("DEBUG" if args.verbose else settings.log_level)
    logger.debug("Using %s", settings)

    try:
        text = read_inputs(args.files)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}")
        return 1

    store = HistoryStore(settings)
    if not store.parse(text):
        print(f"Error: {store.error}")
        return 1

    print_report(store)

    for path, fmt in ((args.csv, "csv"), (args.json, "json")):
        if path:
            write_export(store, path, fmt)
            print(f"Wrote {fmt.upper()} export to {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
