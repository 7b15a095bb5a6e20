# utils/errors.py


class PortfolioError(Exception):
    """Base class for errors raised by the storage layer."""


class NotFoundError(PortfolioError):
    def __init__(self, entity: str, entity_id=None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class ConflictError(PortfolioError):
    """A unique field (e.g. username) is already taken."""


class StorageError(PortfolioError):
    """The backing store failed. The message is never shown to clients."""
