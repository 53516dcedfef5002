import logging
from dataclasses import dataclass

from aggregation import compute_views
from history_parser import extract_report
from models import ExtractionReport, HistoryParseError, HistoryViews, NoEntriesError
from settings import Settings

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Failed to parse YouTube history data"

SAMPLE_HISTORY = (
    "**YouTube**\n"
    "Watched\u00c2 **Disco Button Funk up any room with MQTT, CircuitPython, and a Raspberry Pi Pico W** "
    "**Prof. John Gallaugher** Jan 29, 2025, 8:00:26\u00e2\u20ac\u00afAM EST\n"
    "**Products:**  YouTube **Why is this here?**  This activity was saved to your Google Account because "
    "the following settings were on: YouTube watch history. You can control these settings  **here**.\n"
    "**YouTube**\n"
    "Watched\u00c2 **Physical Computing - Apple Distinguished Educator Showcase Dallas 2023 - Prof. John Gallaugher** "
    "**Prof. John Gallaugher** Oct 16, 2024, 9:05:40\u00e2\u20ac\u00afAM EST\n"
    "**Products:**  YouTube **Why is this here?**  This activity was saved to your Google Account because "
    "the following settings were on: YouTube watch history. You can control these settings  **here**.\n"
    "**YouTube**\n"
    "Watched\u00c2 **Physical Computing - Apple Distinguished Educator Showcase Dallas 2023 - Prof. John Gallaugher** "
    "**Prof. John Gallaugher** Jan 30, 2024, 5:45:47\u00e2\u20ac\u00afAM EST\n"
    "**Products:**  YouTube **Why is this here?**  This activity was saved to your Google Account because "
    "the following settings were on: YouTube watch history. You can control these settings  **here**.\n"
    "**YouTube**\n"
    "Watched\u00c2 **Fast Fashion Is Hot Garbage | Climate Town** **Climate Town** "
    "Sep 1, 2023, 2:45:20\u00e2\u20ac\u00afPM EST\n"
    "**Products:**  YouTube **Why is this here?**  This activity was saved to your Google Account because "
    "the following settings were on: YouTube watch history. You can control these settings  **here**."
)


@dataclass(frozen=True)
class _Results:
    records: tuple
    views: HistoryViews
    report: ExtractionReport


class HistoryStore:
    """
    Holds the pasted input, the last parsed records and their aggregate views.

    A successful parse swaps records and views in a single assignment.
    A failed parse sets `error` and drops the previous results, so
    `processed` is False until the next successful parse.
    """

    def __init__(self, settings: Settings = None):
        self.settings = settings or Settings()
        self.input_text = ""
        self.error = ""
        self._busy = False
        self._results = None

    # --- Input ---

    def set_input(self, text: str):
        self.input_text = text or ""

    def clear_input(self):
        self.input_text = ""

    def load_sample(self):
        self.input_text = SAMPLE_HISTORY

    @property
    def busy(self) -> bool:
        return self._busy

    def can_parse(self) -> bool:
        return not self._busy and bool(self.input_text.strip())

    # --- Parsing ---

    def parse(self, text: str = None) -> bool:
        """
        Parses the current input (or `text`, which replaces it) and rebuilds every view.
        Returns True on success. On failure `error` holds a message fit for display.
        """
        if text is not None:
            self.set_input(text)

        if self._busy:
            logger.warning("Parse requested while another parse is running, ignoring")
            return False

        self.error = ""
        self._busy = True
        try:
            report = extract_report(
                self.input_text,
                titled_window=self.settings.titled_window,
                url_window=self.settings.url_window,
            )
            if not report.records:
                raise NoEntriesError()
            views = compute_views(report.records, self.settings)
        except HistoryParseError as e:
            logger.info("Parse failed: %s", e)
            self._fail(str(e) or GENERIC_ERROR_MESSAGE)
            return False
        except Exception:
            logger.exception("Error parsing data")
            self._fail(GENERIC_ERROR_MESSAGE)
            return False
        finally:
            self._busy = False

        self._results = _Results(records=report.records, views=views, report=report)
        logger.info(
            "Parsed %d records from %d candidate entries",
            len(report.records), report.total_candidates,
        )
        return True

    def _fail(self, message: str):
        self.error = message
        self._results = None

    # --- Read-only accessors ---

    @property
    def processed(self) -> bool:
        return self._results is not None

    @property
    def records(self) -> tuple:
        return self._results.records if self._results else ()

    @property
    def last_report(self):
        """ExtractionReport of the last successful parse, or None."""
        return self._results.report if self._results else None

    @property
    def skipped(self) -> tuple:
        return self.last_report.skipped if self._results else ()

    @property
    def views(self) -> HistoryViews:
        if self._results is None:
            return compute_views(())
        return self._results.views.copy()

    @property
    def channel_stats(self):
        return self.views.channels

    @property
    def monthly_activity(self):
        return self.views.monthly

    @property
    def hourly_activity(self):
        return self.views.hourly

    @property
    def recurring_content(self):
        return self.views.recurring

    def sorted_history(self) -> list:
        """Records, most recent first. Records with equal instants keep extraction order."""
        return sorted(self.records, key=lambda r: r.instant, reverse=True)

    def recent(self, limit: int = None) -> list:
        if limit is None:
            limit = self.settings.recent_limit
        return self.sorted_history()[:limit]

    def summary(self) -> str:
        count = len(self.records)
        return f"{count} videos analyzed" if count else ""
