from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.permissions import IsTeam, IsAdministrator
from apps.resources.services import get_resource, ResourceNotFoundError

from .serializers import (
    TeamPurchaseFilterSerializer,
    AdminPurchaseFilterSerializer,
    CreatePurchaseSerializer,
    CreateBatchPurchaseSerializer,
    ReviewActionSerializer,
    BatchReviewSerializer,
    PurchaseSerializer,
    BatchSerializer,
    BatchListSerializer,
    PurchaseSummarySerializer,
    BatchReviewResponseSerializer,
    ResourceQuotaSerializer,
)
from .services import (
    create_purchase,
    create_batch_purchase,
    review_purchase,
    review_batch,
    return_purchase,
    mark_returned,
    unmark_returned,
    list_team_purchases,
    list_purchases,
    get_purchase,
    group_into_batches,
    get_batch,
    purchase_summary,
    max_quantity_allowed,
    purchase_stats,
    # Exceptions
    PurchasesServiceError,
    PurchaseNotFoundError,
    BatchNotFoundError,
    NotPurchaseOwnerError,
)


class PurchasePagination(PageNumberPagination):
    """Custom pagination for purchases."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _service_error(error):
    """Translate a service exception into an error response."""
    if isinstance(error, (PurchaseNotFoundError, BatchNotFoundError, ResourceNotFoundError)):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, NotPurchaseOwnerError):
        code = status.HTTP_403_FORBIDDEN
    else:
        code = status.HTTP_400_BAD_REQUEST
    return Response({'error': str(error)}, status=code)


def _batches_payload(purchases):
    batches, singles = group_into_batches(purchases)
    return BatchListSerializer({'batches': batches, 'purchases': singles}).data


class TeamPurchaseViewSet(viewsets.GenericViewSet):
    """
    A team's own purchases.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: The team's purchases (?needs_return=true for open returns)
    create: Request a single resource
    batch: Submit several lines under one batch id
    return_item: Hand back a confirmed, returnable purchase
    batches: Purchases grouped by batch
    summary: Counts by status
    """

    serializer_class = PurchaseSerializer
    permission_classes = [IsAuthenticated, IsTeam]
    pagination_class = PurchasePagination
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        filters = TeamPurchaseFilterSerializer(data=self.request.query_params)
        filters.is_valid(raise_exception=True)
        return list_team_purchases(
            team=self.request.user,
            needs_return=filters.validated_data['needs_return'],
        )

    @extend_schema(
        parameters=[OpenApiParameter('needs_return', bool)],
        responses={200: PurchaseSerializer(many=True)},
    )
    def list(self, request):
        """List the team's purchases."""
        queryset = self.get_queryset()
        page = self.paginate_queryset(queryset)
        if page is not None:
            return self.get_paginated_response(PurchaseSerializer(page, many=True).data)
        return Response(PurchaseSerializer(queryset, many=True).data)

    @extend_schema(request=CreatePurchaseSerializer, responses={201: PurchaseSerializer})
    def create(self, request):
        """Request a single resource."""
        serializer = CreatePurchaseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            purchase = create_purchase(team=request.user, **serializer.validated_data)
        except (PurchasesServiceError, ResourceNotFoundError) as e:
            return _service_error(e)

        return Response(PurchaseSerializer(purchase).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=CreateBatchPurchaseSerializer, responses={201: BatchSerializer})
    @action(detail=False, methods=['post'])
    def batch(self, request):
        """Submit a batch purchase."""
        serializer = CreateBatchPurchaseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            purchases = create_batch_purchase(
                team=request.user,
                items=serializer.validated_data['items'],
                comment=serializer.validated_data['comment'],
            )
        except (PurchasesServiceError, ResourceNotFoundError) as e:
            return _service_error(e)

        batch = get_batch(batch_id=purchases[0].batch_id)
        return Response(BatchSerializer(batch).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: PurchaseSerializer})
    @action(detail=True, methods=['post'], url_path='return', url_name='return')
    def return_item(self, request, pk=None):
        """Return a confirmed purchase."""
        try:
            purchase = return_purchase(team=request.user, purchase_id=int(pk))
        except PurchasesServiceError as e:
            return _service_error(e)

        return Response(PurchaseSerializer(purchase).data)

    @extend_schema(responses={200: BatchListSerializer})
    @action(detail=False, methods=['get'])
    def batches(self, request):
        """The team's purchases grouped by batch."""
        return Response(_batches_payload(list_team_purchases(team=request.user)))

    @extend_schema(responses={200: PurchaseSummarySerializer})
    @action(detail=False, methods=['get'])
    def summary(self, request):
        """Counts of the team's purchases by status."""
        summary = purchase_summary(list_team_purchases(team=request.user))
        return Response(PurchaseSummarySerializer(summary).data)


class AdminPurchaseViewSet(viewsets.GenericViewSet):
    """
    Purchase administration.

    list: All purchases (?status=, ?team_id=, ?needs_return=true)
    retrieve: One purchase
    review: Confirm or cancel a pending purchase
    review_batch: Confirm (optionally partially) or cancel several purchases
    mark_returned / unmark_returned: Physical return reconciliation
    batches / batch_detail: Batch views
    summary: Counts by status
    """

    serializer_class = PurchaseSerializer
    permission_classes = [IsAuthenticated, IsAdministrator]
    pagination_class = PurchasePagination
    lookup_value_regex = r'\d+'

    def _filtered_purchases(self):
        filters = AdminPurchaseFilterSerializer(data=self.request.query_params)
        filters.is_valid(raise_exception=True)
        return list_purchases(**filters.validated_data)

    @extend_schema(
        parameters=[
            OpenApiParameter('status', str),
            OpenApiParameter('team_id', int),
            OpenApiParameter('needs_return', bool),
        ],
        responses={200: PurchaseSerializer(many=True)},
    )
    def list(self, request):
        """List all purchases."""
        queryset = self._filtered_purchases()
        page = self.paginate_queryset(queryset)
        if page is not None:
            return self.get_paginated_response(PurchaseSerializer(page, many=True).data)
        return Response(PurchaseSerializer(queryset, many=True).data)

    def retrieve(self, request, pk=None):
        """Get one purchase."""
        try:
            purchase = get_purchase(purchase_id=int(pk))
        except PurchaseNotFoundError as e:
            return _service_error(e)

        return Response(PurchaseSerializer(purchase).data)

    @extend_schema(request=ReviewActionSerializer, responses={200: PurchaseSerializer})
    @action(detail=True, methods=['post'], url_path='action', url_name='action')
    def review(self, request, pk=None):
        """Confirm or cancel a pending purchase."""
        serializer = ReviewActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            purchase = review_purchase(
                purchase_id=int(pk),
                action=serializer.validated_data['action'],
            )
        except PurchasesServiceError as e:
            return _service_error(e)

        return Response(PurchaseSerializer(purchase).data)

    @extend_schema(request=BatchReviewSerializer, responses={200: BatchReviewResponseSerializer})
    @action(detail=False, methods=['post'], url_path='batch/action', url_name='batch-action')
    def review_batch(self, request):
        """Review several purchases; each line succeeds or fails on its own."""
        serializer = BatchReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = review_batch(items=serializer.validated_data['items'])
        return Response(BatchReviewResponseSerializer(result).data)

    @extend_schema(request=None, responses={200: PurchaseSerializer})
    @action(detail=True, methods=['post'], url_path='mark-returned', url_name='mark-returned')
    def mark_returned(self, request, pk=None):
        """Record the physical return of a confirmed purchase."""
        try:
            purchase = mark_returned(purchase_id=int(pk))
        except PurchasesServiceError as e:
            return _service_error(e)

        return Response(PurchaseSerializer(purchase).data)

    @extend_schema(request=None, responses={200: PurchaseSerializer})
    @action(detail=True, methods=['post'], url_path='unmark-returned', url_name='unmark-returned')
    def unmark_returned(self, request, pk=None):
        """Revert a return recorded by mistake."""
        try:
            purchase = unmark_returned(purchase_id=int(pk))
        except PurchasesServiceError as e:
            return _service_error(e)

        return Response(PurchaseSerializer(purchase).data)

    @extend_schema(responses={200: BatchListSerializer})
    @action(detail=False, methods=['get'])
    def batches(self, request):
        """All purchases grouped by batch (same filters as list)."""
        return Response(_batches_payload(self._filtered_purchases()))

    @extend_schema(responses={200: BatchSerializer})
    @action(detail=False, methods=['get'], url_path=r'batches/(?P<batch_id>[^/]+)', url_name='batch-detail')
    def batch_detail(self, request, batch_id=None):
        """One batch with all its lines."""
        try:
            batch = get_batch(batch_id=batch_id)
        except BatchNotFoundError as e:
            return _service_error(e)

        return Response(BatchSerializer(batch).data)

    @extend_schema(responses={200: PurchaseSummarySerializer})
    @action(detail=False, methods=['get'])
    def summary(self, request):
        """Counts of all purchases by status."""
        summary = purchase_summary(self._filtered_purchases())
        return Response(PurchaseSummarySerializer(summary).data)


@extend_schema(
    responses={200: ResourceQuotaSerializer},
    description="How many more units of a resource the team may add to its cart.",
    tags=['team'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsTeam])
def team_resource_quota(request, resource_id):
    """Remaining quota for one resource."""
    try:
        resource = get_resource(resource_id=resource_id)
    except ResourceNotFoundError as e:
        return _service_error(e)

    stats = purchase_stats(team=request.user, resource=resource)
    data = {
        'resource_id': resource.id,
        'max_quantity_allowed': max_quantity_allowed(team=request.user, resource=resource),
        **stats,
    }
    return Response(ResourceQuotaSerializer(data).data)
