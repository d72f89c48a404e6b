"""Catalog lookups."""

from typing import Optional

from django.db.models import QuerySet

from apps.resources.models import Resource

from .exceptions import ResourceNotFoundError


def list_resources(*, resource_type: Optional[str] = None) -> QuerySet:
    """
    Active resources, optionally restricted to one type.

    Args:
        resource_type: One of ResourceType values, or None for all

    Returns:
        QuerySet of active Resource ordered by name
    """
    queryset = Resource.objects.filter(is_active=True)
    if resource_type:
        queryset = queryset.filter(resource_type=resource_type)
    return queryset.order_by('name')


def get_resource(*, resource_id: int) -> Resource:
    """
    Any resource by id, active or not.

    Raises:
        ResourceNotFoundError: If the resource doesn't exist
    """
    try:
        return Resource.objects.get(id=resource_id)
    except Resource.DoesNotExist:
        raise ResourceNotFoundError("Resource not found")
