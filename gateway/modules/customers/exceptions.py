"""Customer domain specific exceptions."""


class CustomerError(Exception):
    """Base class for customer domain errors."""


class CustomerAlreadyExistsError(CustomerError):
    """Raised when provisioning a customer id that is already taken."""


class CustomerNotFoundError(CustomerError):
    """Raised when the requested customer cannot be found."""
