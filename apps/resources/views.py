from rest_framework import viewsets, status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import ResourceSerializer, ResourceFilterSerializer
from .services import list_resources, get_resource, ResourceNotFoundError


class ResourceViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Public, read-only resource catalog.

    list: Active resources, optionally filtered by ?type=
    retrieve: Any resource by id
    """

    serializer_class = ResourceSerializer
    permission_classes = [AllowAny]
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        filters = ResourceFilterSerializer(data=self.request.query_params)
        filters.is_valid(raise_exception=True)
        return list_resources(resource_type=filters.validated_data.get('type'))

    @extend_schema(
        parameters=[OpenApiParameter('type', str, description='service, equipment or perk')],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def retrieve(self, request, *args, **kwargs):
        try:
            resource = get_resource(resource_id=kwargs['pk'])
        except ResourceNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(self.get_serializer(resource).data)
