class OrderTrackerError(Exception):
    """Base class for errors the API reports back to the caller."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class ValidationError(OrderTrackerError):
    """Request is incomplete; nothing was written."""
    status_code = 400

class NotFoundError(OrderTrackerError):
    status_code = 404

class ConflictError(OrderTrackerError):
    status_code = 409
