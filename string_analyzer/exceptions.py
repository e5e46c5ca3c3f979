class StringAnalyzerError(Exception):
    """Base class for errors raised by the string analyzer service."""


class ConfigurationError(StringAnalyzerError):
    """Raised when the process environment cannot be used to start the service."""


class InvalidFilterError(StringAnalyzerError):
    """A structured query parameter has a value that cannot be used."""

    def __init__(self, parameter: str, message: str):
        super().__init__(message)
        self.parameter = parameter
        self.message = message


class UnparseableQueryError(StringAnalyzerError):
    """No filter could be derived from a natural language query."""


class DuplicateStringError(StringAnalyzerError):
    """A record with the same content hash is already stored."""

