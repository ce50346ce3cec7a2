"""Domain-level exceptions.

Two families:

* ``DomainException`` — the caller can fix the request (bad cart, unknown
  product, not enough stock, bad credential).  Safe to show to the client.
* ``StoreError`` — the backing store failed.  Logged in full, reported to
  the client only generically.

The HTTP and CLI layers map errors to responses by type, never by message.
"""


class DomainException(Exception):
    """Base class for all client-correctable errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidInputError(ValidationError):
    """The request itself is malformed (empty cart, non-positive quantity)."""


class OutOfStockError(ValidationError):
    """A product does not have enough stock for the requested quantity."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(EntityNotFoundError):
    """A cart references a product id the catalog does not know."""


class UnauthorizedError(DomainException):
    """The request carries no valid credential for an existing user."""


class StoreError(Exception):
    """Base class for backing-store failures."""


class LookupFailureError(StoreError):
    """Reading from the store failed."""


class PersistFailureError(StoreError):
    """Writing to the store failed."""


class UpstreamFailureError(StoreError):
    """A collaborator needed to serve the request failed."""
