from .dataset import Dataset, criterion_columns, read_dataset, to_csv, write_dataset
from .errors import (
    CriteriaMismatch,
    EmailDeliveryError,
    EmptyDataset,
    InvalidImpact,
    InvalidWeight,
    MissingParameters,
    NonNumericCell,
    TopsisError,
    UnreadableFile,
    UnsupportedFileType,
)
from .topsis import (
    TopsisSolution,
    build_matrix,
    compute_topsis,
    parse_parameters,
    rank_dataframe,
    rank_dataset,
)

__version__ = "2.0.0"
