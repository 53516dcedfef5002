import pandas as pd

from models import HistoryViews

RECORD_COLUMNS = ['title', 'channel', 'date', 'timestamp', 'year', 'month', 'day', 'hour']

DEFAULT_TOP_CHANNELS = 10
DEFAULT_TOP_RECURRING = 15
DEFAULT_TITLE_LENGTH = 45


def records_to_frame(records):
    """
    Flattens WatchRecords into a DataFrame, one row per record, in record order.
    """
    rows = [
        {
            'title': r.title,
            'channel': r.channel,
            'date': r.instant,
            'timestamp': r.timestamp,
            'year': r.year,
            'month': r.month,
            'day': r.day,
            'hour': r.hour,
        }
        for r in records
    ]
    if not rows:
        return pd.DataFrame(columns=RECORD_COLUMNS)

    df = pd.DataFrame(rows, columns=RECORD_COLUMNS)
    df['date'] = pd.to_datetime(df['date'])
    return df


def _ranked_counts(values, limit=None, min_count=1):
    # groupby(sort=False) keeps first-seen order, the stable sort keeps it for ties
    series = pd.Series(values, dtype=object)
    counts = series.groupby(series, sort=False).size()
    counts = counts[counts >= min_count]
    counts = counts.sort_values(ascending=False, kind='stable')
    if limit is not None:
        counts = counts.head(limit)
    return counts


def channel_counts(records, limit=DEFAULT_TOP_CHANNELS):
    """
    Number of records per channel, most watched first, top `limit` only.
    """
    counts = _ranked_counts([r.channel for r in records], limit=limit)
    return pd.DataFrame({
        'name': [str(name) for name in counts.index],
        'count': counts.to_numpy(dtype=int),
    })


def monthly_counts(records):
    """
    Number of records per "YYYY-MM" month, oldest month first.
    """
    counts = _ranked_counts([r.year_month for r in records]).sort_index()
    return pd.DataFrame({
        'month': [str(key) for key in counts.index],
        'count': counts.to_numpy(dtype=int),
    })


def hourly_counts(records):
    """
    Number of records per hour of day. Always 24 rows; empty hours count 0.
    """
    hours = pd.Series([r.hour for r in records], dtype=int)
    counts = hours.value_counts().reindex(range(24), fill_value=0)
    return pd.DataFrame({
        'hour': [f"{h:02d}" for h in range(24)],
        'count': counts.to_numpy(dtype=int),
    })


def truncate_title(title, length=DEFAULT_TITLE_LENGTH):
    return title[:length] + '...' if len(title) > length else title


def recurring_counts(records, limit=DEFAULT_TOP_RECURRING, title_length=DEFAULT_TITLE_LENGTH):
    """
    Titles watched more than once, most repeated first, top `limit` only.
    `title` is shortened for chart labels, `full_title` keeps the whole title.
    """
    counts = _ranked_counts([r.title for r in records], limit=limit, min_count=2)
    full_titles = [str(title) for title in counts.index]
    return pd.DataFrame({
        'title': [truncate_title(t, title_length) for t in full_titles],
        'full_title': full_titles,
        'count': counts.to_numpy(dtype=int),
    })


def compute_views(records, settings=None):
    """
    Recomputes all four views from scratch.
    """
    records = list(records)
    if settings is None:
        return HistoryViews(
            channels=channel_counts(records),
            monthly=monthly_counts(records),
            hourly=hourly_counts(records),
            recurring=recurring_counts(records),
        )

    return HistoryViews(
        channels=channel_counts(records, limit=settings.top_channels),
        monthly=monthly_counts(records),
        hourly=hourly_counts(records),
        recurring=recurring_counts(records, limit=settings.top_recurring, title_length=settings.title_length),
    )
