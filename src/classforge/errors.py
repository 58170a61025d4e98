"""Domain errors raised by classforge.

Low-level exceptions (SQLAlchemy, httpx) never escape the library bare: they are
re-raised as one of the classes below with the original attached as ``__cause__``.
"""


class ClassforgeError(Exception):
    """Base class for all classforge errors."""

    pass


class InvalidIdentifierError(ClassforgeError):
    """Raised when a repository URL cannot be parsed into owner/repo."""

    pass


class NotFoundError(ClassforgeError):
    """Raised when a class, label or project lookup has no matching row."""

    pass


class DuplicateNameError(ClassforgeError):
    """Raised when a class name is already taken."""

    pass


class ProjectExistsError(DuplicateNameError):
    """Raised when a project with the same install path is already tracked."""

    pass


class TransactionFailureError(ClassforgeError):
    """Raised when a commit, rollback or compensating cleanup fails."""

    pass


class StorageFaultError(ClassforgeError):
    """Raised for any other database error."""

    pass


class NetworkFaultError(ClassforgeError):
    """Raised when fetching a remote repository tree fails."""

    pass
