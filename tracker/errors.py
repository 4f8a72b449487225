"""Error types raised by the warranty tracker core."""

from enum import Enum


class ErrorCode(str, Enum):
    """Stable error codes, safe to return to API clients."""

    VALIDATION = "validation_error"
    STORE = "store_error"
    PARTIAL_CREATION = "partial_creation"


class WarrantelError(Exception):
    """Base error with a code and a user-safe message."""

    def __init__(self, code: ErrorCode, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code.value}


class ValidationError(WarrantelError):
    """A required field is missing or malformed. Nothing was written."""

    def __init__(self, entity: str, field: str, message: str):
        super().__init__(code=ErrorCode.VALIDATION, message=message)
        self.entity = entity
        self.field = field

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["entity"] = self.entity
        data["field"] = self.field
        return data


class StoreError(WarrantelError):
    """A call to the record store failed."""

    def __init__(self, resource: str, step: str, cause: Exception = None):
        detail = f": {cause}" if cause else ""
        super().__init__(
            code=ErrorCode.STORE,
            message=f"Failed to {step} {resource}{detail}",
        )
        self.resource = resource
        self.step = step
        self.cause = cause

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["resource"] = self.resource
        data["step"] = self.step
        return data


class PartialCreationError(WarrantelError):
    """The product was stored but its purchase event was not.

    The product stays persisted; callers can retry the event creation
    with ``TimelineAssembler.add_purchase_event`` or remove the product.
    """

    def __init__(self, product, cause: Exception):
        super().__init__(
            code=ErrorCode.PARTIAL_CREATION,
            message=(
                f"Product '{product.name}' was created but its purchase "
                f"event could not be recorded: {cause}"
            ),
        )
        self.product = product
        self.cause = cause

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["partial"] = True
        data["product"] = self.product.to_dict()
        return data
