"""Custom exceptions for the templating context."""


class InvalidCVStructureError(ValueError):
    """
    Exception raised when a CV document is not a mapping at the top level.

    Nested values are never rejected: missing, None or malformed fields are
    treated as absent. Only a document that cannot be read as a set of named
    fields at all (a list, a string, a number) raises this error.
    """

    pass
