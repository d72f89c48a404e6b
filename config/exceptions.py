"""
DRF exception handler.

Authentication, permission, routing and method failures answer
``{"error": "<message>"}`` like the service errors raised in views.
Serializer validation errors keep DRF's field-keyed form.
"""

from rest_framework import exceptions
from rest_framework.views import exception_handler

ERROR_ENVELOPE_EXCEPTIONS = (
    exceptions.NotAuthenticated,
    exceptions.AuthenticationFailed,
    exceptions.PermissionDenied,
    exceptions.NotFound,
    exceptions.MethodNotAllowed,
)


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is not None and isinstance(exc, ERROR_ENVELOPE_EXCEPTIONS):
        response.data = {'error': str(exc.detail)}
    return response
