
import logging
from typing import Any, Dict, List, Mapping, Sequence
import pandas as pd
from .errors import SeriesLengthMismatchError

logger = logging.getLogger(__name__)

NET_FLOW = 'netFlow'
CUMULATIVE_FLOW = 'cumulativeFlow'


def build_table(base_rows: Sequence[Mapping[str, Any]], series: Sequence[float]) -> List[Dict[str, Any]]:
    """Copy each base row and overwrite its net and cumulative flow from `series`.

    The cumulative column is summed from scratch, whatever the base rows carry.
    """
    if len(series) < len(base_rows):
        raise SeriesLengthMismatchError(len(series), len(base_rows))
    if len(series) > len(base_rows):
        logger.debug('series longer than table (%d > %d), extra values ignored', len(series), len(base_rows))
    rows = []
    running = 0
    for i, base in enumerate(base_rows):
        row = dict(base)
        running += series[i]
        row[NET_FLOW] = series[i]
        row[CUMULATIVE_FLOW] = running
        rows.append(row)
    return rows


def table_columns(rows: Sequence[Mapping[str, Any]]) -> List[str]:
    if not rows:
        return []
    return list(rows[0].keys())


def to_frame(rows: Sequence[Mapping[str, Any]]) -> pd.DataFrame:
    return pd.DataFrame(list(rows), columns=table_columns(rows))
