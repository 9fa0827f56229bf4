"""Shared exceptions module."""

from typing import Optional

from pydantic import ValidationError

from planwise.core.shared_models import FaultCode


class PlanwiseException(Exception):
    """Base exception for Planwise services."""

    code: FaultCode = FaultCode.INTERNAL_SERVER_ERROR


class PermissionException(PlanwiseException):
    """Exception raised when a user does not have the necessary permissions to perform an action."""

    code = FaultCode.UNAUTHORIZED

    def __init__(
        self,
        message: Optional[str] = "Unauthorized access",
    ):
        """Create a new PermissionException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class NotFoundException(PlanwiseException):
    """Exception raised when an object is not found."""

    code = FaultCode.NOT_FOUND

    def __init__(self, message: Optional[str] = "Object not found"):
        """Create a new NotFoundException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class InvalidStateError(PlanwiseException):
    """Exception raised when an object is in an invalid state.

    Used when a requested transition is not allowed given the current state of
    the subscription, activation or order involved.
    """

    code = FaultCode.BAD_REQUEST

    def __init__(self, message: Optional[str] = "Object is in an invalid state"):
        """Create a new InvalidStateError instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class PlanNotFoundException(NotFoundException):
    """Raised when a plan is not found."""

    pass


class SubscriptionNotFoundException(NotFoundException):
    """Raised when a subscription is not found."""

    pass


class ActivationNotFoundException(NotFoundException):
    """Raised when an activation is not found."""

    pass


class OrderNotFoundException(NotFoundException):
    """Raised when an order is not found."""

    pass


class TeamNotFoundException(NotFoundException):
    """Raised when a team is not found."""

    pass


class UserNotFoundException(NotFoundException):
    """Raised when a user is not found."""

    pass


class InvalidPlanChangeError(InvalidStateError):
    """Raised when moving to a plan cheaper than the current one."""

    def __init__(self, message: Optional[str] = "Can't upgrade to a lower plan"):
        """Create a new InvalidPlanChangeError instance."""
        super().__init__(message)


class SubscriptionNotActiveError(InvalidStateError):
    """Raised when an operation requires a current activation and there is none."""

    def __init__(self, message: Optional[str] = "Only active subscriptions can be upgraded"):
        """Create a new SubscriptionNotActiveError instance."""
        super().__init__(message)


class InvalidOrderTransitionError(InvalidStateError):
    """Raised when an order status change is not allowed (PAID is final)."""

    pass


class ActivationMismatchError(InvalidStateError):
    """Raised when an activation is linked to a subscription it does not belong to."""

    def __init__(self, activation_id=None, subscription_id=None):
        """Create a new ActivationMismatchError instance.

        Args:
        ----
            activation_id: The activation that was being linked.
            subscription_id: The subscription it was being linked to.

        """
        self.activation_id = activation_id
        self.subscription_id = subscription_id
        super().__init__(
            f"Activation {activation_id} does not belong to subscription {subscription_id}"
        )


def unpack_validation_error(exc: ValidationError) -> dict:
    """Unpack a Pydantic validation error into a dictionary.

    Args:
    ----
        exc (ValidationError): The Pydantic validation error.

    Returns:
    -------
        dict: The dictionary representation of the validation error.

    """
    error_messages = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        message = error["msg"]
        error_messages.append({field: message})

    return {"errors": error_messages}
