import logging
import math
import sys
from dataclasses import dataclass

import numpy as np

from .config import load_config
from .dataset import (
    RANK_COLUMN,
    RESULT_COLUMNS,
    SCORE_COLUMN,
    Dataset,
    criterion_columns,
    read_dataset,
    write_dataset,
)
from .errors import (
    CriteriaMismatch,
    EmptyDataset,
    InvalidImpact,
    InvalidWeight,
    MissingParameters,
    NonNumericCell,
    ReservedLabelColumn,
    TopsisError,
)

logger = logging.getLogger(__name__)

BENEFIT = "+"
COST = "-"
IMPACTS = (BENEFIT, COST)

USAGE = "Usage: topsis <InputFile> <Weights> <Impacts> <ResultFile>"


# -------- PARAMETERS --------

def _tokens(text):
    return [token.strip() for token in text.split(",")]


def _is_blank(text):
    return text is None or not str(text).strip()


def parse_weight(token):
    try:
        value = float(token)
    except (TypeError, ValueError):
        raise InvalidWeight(token)
    if not math.isfinite(value):
        raise InvalidWeight(token)
    return value


def parse_parameters(weights_text, impacts_text, criteria, rows=None):
    """
    Turn the comma-separated weights and impacts into vectors lined up with ``criteria``.

    Checks run in a fixed order: missing text, empty dataset (when ``rows`` is
    given), count mismatch, then the individual weight and impact tokens.
    """
    if _is_blank(weights_text) or _is_blank(impacts_text):
        raise MissingParameters()
    if rows is not None and rows == 0:
        raise EmptyDataset()

    weight_tokens = _tokens(str(weights_text))
    impact_tokens = _tokens(str(impacts_text))
    if not len(criteria) == len(weight_tokens) == len(impact_tokens):
        raise CriteriaMismatch(len(criteria), len(weight_tokens), len(impact_tokens))

    weights = [parse_weight(token) for token in weight_tokens]
    for token in impact_tokens:
        if token not in IMPACTS:
            raise InvalidImpact(token)
    return weights, impact_tokens


# -------- DECISION MATRIX --------

def to_number(value, row, column):
    if isinstance(value, str):
        value = value.strip()
    if value is None or value == "" or isinstance(value, bool):
        raise NonNumericCell(row, column, value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise NonNumericCell(row, column, value)
    if not math.isfinite(number):
        raise NonNumericCell(row, column, value)
    return number


def build_matrix(dataset, criteria):
    matrix = np.empty((len(dataset), len(criteria)), dtype=float)
    for i, record in enumerate(dataset.records):
        for j, column in enumerate(criteria):
            matrix[i, j] = to_number(record.get(column), i, column)
    return matrix


# -------- TOPSIS FUNCTIONS --------

@dataclass
class TopsisSolution:
    norms: np.ndarray
    normalized: np.ndarray
    weighted: np.ndarray
    ideal_best: np.ndarray
    ideal_worst: np.ndarray
    distance_best: np.ndarray
    distance_worst: np.ndarray
    scores: np.ndarray
    ranks: np.ndarray


def normalize_matrix(matrix, weights):
    # divide by the largest magnitude first so squaring cannot overflow
    scale = np.abs(matrix).max(axis=0)
    scale[scale == 0] = 1.0
    scaled = matrix / scale
    scaled_norms = np.sqrt((scaled ** 2).sum(axis=0))
    # an all-zero column normalizes to zeros
    with np.errstate(divide="ignore", invalid="ignore"):
        normalized = np.where(scaled_norms == 0, 0.0, scaled / scaled_norms)
    with np.errstate(over="ignore"):
        norms = scaled_norms * scale
    weighted_matrix = normalized * weights
    return norms, normalized, weighted_matrix


def calculate_ideal_solutions(weighted_matrix, impacts):
    benefit = np.array([impact == BENEFIT for impact in impacts], dtype=bool)
    column_max = weighted_matrix.max(axis=0)
    column_min = weighted_matrix.min(axis=0)
    ideal_best = np.where(benefit, column_max, column_min)
    ideal_worst = np.where(benefit, column_min, column_max)
    return ideal_best, ideal_worst


def calculate_scores(distances_best, distances_worst):
    total = distances_best + distances_worst
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.where(total == 0, 0.0, distances_worst / total)


def rank_scores(scores):
    order = np.argsort(-scores, kind="stable")
    ranks = np.empty(len(scores), dtype=int)
    ranks[order] = np.arange(1, len(scores) + 1)
    return ranks


def compute_topsis(matrix, weights, impacts):
    """
    Score and rank the rows of a numeric decision matrix.

    ``impacts`` holds one symbol per column; ``+`` marks a benefit column and
    any other symbol is treated as a cost column. The matrix is copied, so the
    caller's array is never touched.
    """
    matrix = np.array(matrix, dtype=float)
    weights = np.array(weights, dtype=float)
    if matrix.ndim != 2:
        raise ValueError(f"Decision matrix must be two-dimensional, got shape {matrix.shape}")
    if not matrix.shape[1] == len(weights) == len(impacts):
        raise CriteriaMismatch(matrix.shape[1], len(weights), len(impacts))
    if matrix.shape[0] == 0:
        raise EmptyDataset()
    if not np.isfinite(weights).all():
        raise InvalidWeight(str(weights[~np.isfinite(weights)][0]))
    if not np.isfinite(matrix).all():
        row, column = np.argwhere(~np.isfinite(matrix))[0]
        raise NonNumericCell(int(row), int(column), matrix[row, column])

    logger.debug("Running TOPSIS on a %d x %d matrix", *matrix.shape)
    norms, normalized, weighted = normalize_matrix(matrix, weights)
    ideal_best, ideal_worst = calculate_ideal_solutions(weighted, impacts)
    distances_best = np.sqrt(((weighted - ideal_best) ** 2).sum(axis=1))
    distances_worst = np.sqrt(((weighted - ideal_worst) ** 2).sum(axis=1))
    scores = calculate_scores(distances_best, distances_worst)

    return TopsisSolution(
        norms=norms,
        normalized=normalized,
        weighted=weighted,
        ideal_best=ideal_best,
        ideal_worst=ideal_worst,
        distance_best=distances_best,
        distance_worst=distances_worst,
        scores=scores,
        ranks=rank_scores(scores),
    )


# -------- RESULT --------

def format_score(score):
    return f"{score:.4f}"


def assemble_result(dataset, solution):
    base_columns = [dataset.label_column] + criterion_columns(dataset.columns)
    records = []
    for record, score, rank in zip(dataset.records, solution.scores, solution.ranks):
        row = {c: record.get(c) for c in base_columns}
        row[SCORE_COLUMN] = format_score(score)
        row[RANK_COLUMN] = int(rank)
        records.append(row)
    return Dataset(columns=base_columns + list(RESULT_COLUMNS), records=records)


def rank_dataset(dataset, weights_text, impacts_text):
    """Append Score and Rank to every row of ``dataset`` and return the new Dataset."""
    criteria = criterion_columns(dataset.columns)
    weights, impacts = parse_parameters(weights_text, impacts_text, criteria, rows=len(dataset))
    if dataset.label_column in RESULT_COLUMNS:
        raise ReservedLabelColumn(dataset.label_column)
    matrix = build_matrix(dataset, criteria)
    solution = compute_topsis(matrix, weights, impacts)
    logger.info("Ranked %d rows on %d criteria", len(dataset), len(criteria))
    return assemble_result(dataset, solution)


def rank_dataframe(frame, weights_text, impacts_text):
    result = rank_dataset(Dataset.from_dataframe(frame), weights_text, impacts_text)
    return result.to_dataframe()


# -------- COMMAND LINE --------

def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 4:
        print(USAGE, file=sys.stderr)
        return 1

    logging.basicConfig(level=load_config()["LOG_LEVEL"])
    input_file, weights, impacts, result_file = args

    try:
        result = rank_dataset(read_dataset(input_file), weights, impacts)
        write_dataset(result, result_file)
    except TopsisError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error: could not write {result_file}: {exc}", file=sys.stderr)
        return 1

    print(f"Result written to {result_file}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
