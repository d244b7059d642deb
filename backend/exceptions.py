"""Domain exceptions raised by the CRUD layer and translated by the routers."""


class InventoryError(Exception):
    """Base class for all inventory domain errors."""


class NotFoundError(InventoryError):
    entity = "Record"

    def __init__(self, identifier, message=None):
        self.identifier = identifier
        super().__init__(message or f"{self.entity} {identifier} not found")


class ItemNotFound(NotFoundError):
    entity = "Item"


class RequestNotFound(NotFoundError):
    entity = "Request"


class UserNotFound(NotFoundError):
    entity = "User"


class CategoryNotFound(NotFoundError):
    entity = "Category"


class NotificationNotFound(NotFoundError):
    entity = "Notification"


class ValidationError(InventoryError):
    """Input rejected before any state was changed."""


class RequestLocked(ValidationError):
    def __init__(self, request_id, current_status):
        self.request_id = request_id
        self.current_status = current_status
        super().__init__(f"Request {request_id} is {current_status} and can no longer change status")


class TransactionFailure(InventoryError):
    """A step inside a transaction failed and the whole unit was rolled back."""

    def __init__(self, message, cause=None):
        self.cause = cause
        super().__init__(message)
