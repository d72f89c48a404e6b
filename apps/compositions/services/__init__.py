"""
Compositions app services layer.
"""

from .exceptions import (
    CompositionsServiceError,
    CompositionNotFoundError,
    InvalidSlotError,
)
from .slot_management import (
    list_compositions,
    toggle_slot,
)

__all__ = [
    # Exceptions
    'CompositionsServiceError',
    'CompositionNotFoundError',
    'InvalidSlotError',
    # Slot management
    'list_compositions',
    'toggle_slot',
]
