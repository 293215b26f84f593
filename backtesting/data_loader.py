"""
Load recorded price tapes from CSV or DataFrame for replay.

A tape is one row per observation: datetime index, security, price.
Single-security files without a security column take it from the caller.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd


TAPE_COLUMNS = ("security", "price")


def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Ensure columns are lowercase; map common aliases to security/price."""
    out = df.copy()
    out.columns = [str(c).lower().strip() for c in out.columns]
    renames = {
        "symbol": "security",
        "ticker": "security",
        "close": "price",
        "last": "price",
        "px": "price",
    }
    # First alias present wins; later aliases for the same target are left unmapped
    claimed = set(out.columns)
    mapping: dict[str, str] = {}
    for alias, target in renames.items():
        if alias in out.columns and target not in claimed:
            mapping[alias] = target
            claimed.add(target)
    return out.rename(columns=mapping)


def _finish(out: pd.DataFrame, security: str | None) -> pd.DataFrame:
    if "price" not in out.columns:
        raise ValueError("price tape has no price column (expected price, close, last or px)")
    if "security" not in out.columns:
        if security is None:
            raise ValueError("price tape has no security column; pass security=")
        out["security"] = security
    out = out[list(TAPE_COLUMNS)].copy()
    out["price"] = out["price"].astype(float)
    out["security"] = out["security"].astype(str)
    out.index.name = "datetime"
    if security is not None:
        out.attrs["security"] = security
    return out


def load_csv(
    path: str | Path,
    *,
    date_column: str | None = None,
    datetime_format: str | None = None,
    security: str | None = None,
) -> pd.DataFrame:
    """
    Load a price tape from a CSV file.

    Parameters
    ----------
    path : str or Path
        Path to the CSV file.
    date_column : str, optional
        Column to use as datetime index. If None, 'datetime', 'date' or the first column is used.
    datetime_format : str, optional
        Format for parsing dates (e.g. '%Y-%m-%d %H:%M:%S').
    security : str, optional
        Security for files without a security column (also stored in df.attrs['security']).

    Returns
    -------
    pd.DataFrame
        DataFrame with DatetimeIndex named 'datetime' and columns security, price.
    """
    df = _normalize_columns(pd.read_csv(path))
    if date_column is not None:
        date_col = date_column.lower().strip()
        if date_col not in df.columns:
            raise ValueError(f"date column {date_column!r} not found")
    elif "datetime" in df.columns:
        date_col = "datetime"
    elif "date" in df.columns:
        date_col = "date"
    else:
        date_col = df.columns[0]
    index = pd.to_datetime(df[date_col], format=datetime_format)
    df = df.drop(columns=[date_col])
    df.index = pd.DatetimeIndex(index)
    df = df.sort_index(kind="stable")
    return _finish(df, security)


def load_dataframe(
    df: pd.DataFrame,
    *,
    datetime_index: str | None = None,
    security: str | None = None,
) -> pd.DataFrame:
    """
    Normalize a DataFrame into a price tape: DatetimeIndex plus security, price.

    Parameters
    ----------
    df : pd.DataFrame
        Raw DataFrame (columns may be mixed case or aliased).
    datetime_index : str, optional
        Column name to use as index. If None, assume the index is already datetime-like.
    security : str, optional
        Security for tapes without a security column.

    Returns
    -------
    pd.DataFrame
        Normalized tape sorted by time (ties keep their original order).
    """
    out = _normalize_columns(df)
    if datetime_index is not None:
        col = datetime_index.lower().strip()
        if col not in out.columns:
            raise ValueError(f"datetime column {datetime_index!r} not found")
        out.index = pd.DatetimeIndex(pd.to_datetime(out[col]))
        out = out.drop(columns=[col])
    elif not isinstance(out.index, pd.DatetimeIndex):
        out.index = pd.to_datetime(out.index)
    out = out.sort_index(kind="stable")
    return _finish(out, security)
