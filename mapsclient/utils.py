"""Tabular rendering of records."""
from __future__ import annotations

import json
from typing import Iterable

import pandas as pd

from .models import Record

OUTPUT_FORMATS = ("table", "csv", "json")


def records_to_frame(records: Iterable[Record]) -> pd.DataFrame:
    return pd.DataFrame([record.to_row() for record in records])


def render(records: Iterable[Record], output: str = "table") -> str:
    """Render records as an aligned table, CSV or a JSON array."""
    records = list(records)
    if output == "json":
        return json.dumps([record.to_row() for record in records], indent=2, ensure_ascii=False)
    if not records:
        return ""
    df = records_to_frame(records)
    if output == "csv":
        return df.to_csv(index=False).rstrip("\n")
    return df.to_string(index=False)
