"""
Storage error taxonomy.

``StorageUnavailable`` is raised when the database cannot be opened or
initialised and aborts startup.  ``StorageIOFailure`` is raised when a
query or insert fails while serving a request; the application maps it
to an HTTP 500 response.  An unknown version is not an error at all.
"""


class StoreError(Exception):
    """Base class for highscore store failures."""


class StorageUnavailable(StoreError):
    """The database could not be opened or initialised."""


class StorageIOFailure(StoreError):
    """A read or write against the database failed."""
