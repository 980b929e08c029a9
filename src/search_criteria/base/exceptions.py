# src/search_criteria/base/exceptions.py


class InvalidArgumentError(ValueError):
    """Exception raised when a criteria, query or option is built from malformed input."""

    def __init__(self, message: str = "Invalid argument for criteria construction."):
        super().__init__(message)


class UnsupportedOperationError(NotImplementedError):
    """Exception raised for query features that are declared but not implemented."""

    def __init__(self, message: str = "This operation is not supported."):
        super().__init__(message)


class ChainSealedError(InvalidArgumentError):
    """Exception raised when a criteria chain is extended after it has been emitted."""

    def __init__(
        self, message: str = "Criteria chain has already been emitted and is read-only."
    ):
        super().__init__(message)
