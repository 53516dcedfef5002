import pandas as pd

from aggregation import records_to_frame

TABLE_COLUMNS = ['Date', 'Title', 'Channel']


def load_history_frame(store, limit=None):
    """
    Loads the most recent watch records from the store into a display-ready DataFrame.
    """
    records = store.recent(limit)
    if not records:
        return pd.DataFrame(columns=TABLE_COLUMNS)

    df = records_to_frame(records)

    # e.g. "1/29/2025 08:00 AM"
    df['Date'] = df['date'].apply(lambda d: f"{d.month}/{d.day}/{d.year} {d.strftime('%I:%M %p')}")
    df['Title'] = df['title']
    df['Channel'] = df['channel']

    return df[TABLE_COLUMNS].reset_index(drop=True)
