"""Order and custom request status values."""

import enum


class OrderStatus(str, enum.Enum):
    """Known order states. The column is free text, so other strings are kept as given."""
    PENDING = 'pending'
    SHIPPED = 'shipped'
    CANCELLED = 'cancelled'


class RequestStatus(str, enum.Enum):
    """Known custom order request states."""
    NEW = 'new'


def status_value(status):
    """Return the plain string stored for an enum member or caller-supplied status."""
    if isinstance(status, enum.Enum):
        status = status.value
    if not isinstance(status, str) or not status.strip():
        raise ValueError(f'Invalid status: {status!r}')
    return status
