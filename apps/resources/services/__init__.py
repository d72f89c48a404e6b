"""
Resources app services layer.
"""

from .exceptions import (
    ResourcesServiceError,
    ResourceNotFoundError,
)
from .catalog import (
    list_resources,
    get_resource,
)

__all__ = [
    # Exceptions
    'ResourcesServiceError',
    'ResourceNotFoundError',
    # Catalog
    'list_resources',
    'get_resource',
]
