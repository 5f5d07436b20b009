class TopsisError(ValueError):
    """Base class for every failure a ranking request can end with."""


class EmptyDataset(TopsisError):
    def __init__(self, message="The file appears to be empty."):
        super().__init__(message)


class MissingParameters(TopsisError):
    def __init__(self, message="Both Weights and Impacts are required."):
        super().__init__(message)


class InvalidWeight(TopsisError):
    def __init__(self, token):
        self.token = token
        super().__init__(f"Invalid weight detected: {token!r} is not a number.")


class InvalidImpact(TopsisError):
    def __init__(self, token):
        self.token = token
        super().__init__(f"Invalid impact detected: {token!r}. Impacts must be + or - only.")


class CriteriaMismatch(TopsisError):
    def __init__(self, criteria, weights, impacts):
        self.criteria = criteria
        self.weights = weights
        self.impacts = impacts
        super().__init__(
            f"Criteria mismatch. Found {criteria} columns, "
            f"but {weights} weights and {impacts} impacts provided."
        )


class NonNumericCell(TopsisError):
    def __init__(self, row, column, value):
        self.row = row
        self.column = column
        self.value = value
        super().__init__(
            f"Criteria columns must contain only numeric values: "
            f"row {row + 1}, column {column!r} has {value!r}."
        )


class ReservedLabelColumn(TopsisError):
    def __init__(self, column):
        self.column = column
        super().__init__(
            f"The first column is the row label and cannot be named {column!r}; "
            f"rename it so the Score and Rank results do not overwrite it."
        )


class UnsupportedFileType(TopsisError):
    def __init__(self, filename):
        self.filename = filename
        super().__init__(f"Unsupported file type: {filename!r}. Upload a .csv, .xlsx or .xls file.")


class UnreadableFile(TopsisError):
    def __init__(self, filename, reason):
        self.filename = filename
        super().__init__(f"Error parsing {filename!r}: {reason}")


class EmailDeliveryError(Exception):
    """Raised when the result email could not be handed to the SMTP server."""
