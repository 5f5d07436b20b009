import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List

import pandas as pd

from .errors import EmptyDataset, UnreadableFile, UnsupportedFileType

logger = logging.getLogger(__name__)

SCORE_COLUMN = "Score"
RANK_COLUMN = "Rank"
RESULT_COLUMNS = (SCORE_COLUMN, RANK_COLUMN)

# pandas reader per extension; .xls goes through the xlrd engine
READERS = {
    ".csv": "read_csv",
    ".xlsx": "read_excel",
    ".xls": "read_excel",
}


@dataclass
class Dataset:
    """Ordered column names plus one dict per row, as handed over by the ingestor."""

    columns: List[str]
    records: List[Dict[str, object]] = field(default_factory=list)

    def __len__(self):
        return len(self.records)

    @property
    def label_column(self):
        return self.columns[0] if self.columns else None

    @classmethod
    def from_records(cls, records, columns=None):
        records = list(records)
        if columns is None:
            columns = list(records[0].keys()) if records else []
        columns = [str(c) for c in columns]
        rows = [{c: record.get(c) for c in columns} for record in records]
        return cls(columns=columns, records=rows)

    @classmethod
    def from_dataframe(cls, frame: pd.DataFrame):
        frame = frame.copy()
        frame.columns = [str(c) for c in frame.columns]
        # to_dict already boxes numpy scalars as Python values; empty cells become None
        records = [
            {column: (None if pd.isna(value) else value) for column, value in row.items()}
            for row in frame.to_dict(orient="records")
        ]
        return cls(columns=list(frame.columns), records=records)

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(self.records, columns=self.columns)


def criterion_columns(columns):
    """Every column after the label column, minus Score/Rank left over from an earlier run."""
    return [c for c in list(columns)[1:] if c not in RESULT_COLUMNS]


def read_dataset(source, filename=None):
    """
    Parse a CSV or Excel file into a Dataset.

    ``source`` is a path or a binary file-like object; for file-like objects
    pass ``filename`` so the format can be picked from its extension.
    """
    if filename is None:
        filename = os.fspath(source) if isinstance(source, (str, os.PathLike)) else getattr(source, "name", "")
    filename = str(filename)

    ext = os.path.splitext(filename)[1].lower()
    if ext not in READERS:
        raise UnsupportedFileType(filename)
    reader = getattr(pd, READERS[ext])

    try:
        frame = reader(source)
    except pd.errors.EmptyDataError:
        raise EmptyDataset()
    except (ValueError, OSError) as exc:
        raise UnreadableFile(filename, exc) from exc

    frame = frame.dropna(how="all")
    if frame.empty:
        raise EmptyDataset()

    logger.debug("Read %d rows x %d columns from %s", frame.shape[0], frame.shape[1], filename)
    return Dataset.from_dataframe(frame.reset_index(drop=True))


def to_csv(dataset):
    return dataset.to_dataframe().to_csv(index=False)


def write_dataset(dataset, path):
    path = str(path)
    frame = dataset.to_dataframe()
    if path.lower().endswith(".xlsx"):
        frame.to_excel(path, index=False)
    else:
        frame.to_csv(path, index=False)
