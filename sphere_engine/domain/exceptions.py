"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class DataSourceError(DomainException):
    """Sphere data source returned an error or is unavailable"""

    pass


class InvalidRecordError(DomainException):
    """Raw record from the data source is malformed or missing fields"""

    pass
