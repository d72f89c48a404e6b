from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsAdministrator

from .serializers import TeamCompositionSerializer, ToggleSlotSerializer
from .services import (
    list_compositions,
    toggle_slot,
    CompositionNotFoundError,
    InvalidSlotError,
)


class TeamCompositionViewSet(viewsets.GenericViewSet):
    """
    Team staffing (admin only).

    list: All team compositions
    toggle: Fill or free one seat of a department
    """

    serializer_class = TeamCompositionSerializer
    permission_classes = [IsAuthenticated, IsAdministrator]
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        return list_compositions()

    def list(self, request):
        """List all team compositions."""
        return Response(TeamCompositionSerializer(self.get_queryset(), many=True).data)

    @extend_schema(request=ToggleSlotSerializer, responses={200: TeamCompositionSerializer})
    @action(detail=True, methods=['post'])
    def toggle(self, request, pk=None):
        """Fill or free one seat."""
        serializer = ToggleSlotSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            composition = toggle_slot(composition_id=int(pk), **serializer.validated_data)
        except CompositionNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidSlotError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(TeamCompositionSerializer(composition).data)
