from rest_framework import serializers
from .models import Purchase, PurchaseStatus, ReviewAction
from apps.accounts.serializers import TeamMinimalSerializer
from apps.resources.serializers import ResourceMinimalSerializer


# =============================================================================
# Input Serializers
# =============================================================================

class TeamPurchaseFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for a team's purchase list.

    Query Parameters:
        needs_return (bool): Only confirmed items still to be handed back
    """

    needs_return = serializers.BooleanField(required=False, default=False)


class AdminPurchaseFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for the admin purchase list.

    Query Parameters:
        status (str): pending, confirmed or cancelled
        team_id (int): Filter by team
        needs_return (bool): Only confirmed items still to be handed back
    """

    status = serializers.ChoiceField(choices=PurchaseStatus.choices, required=False)
    team_id = serializers.IntegerField(required=False, min_value=1)
    needs_return = serializers.BooleanField(required=False, default=False)


class CreatePurchaseSerializer(serializers.Serializer):
    resource_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1)
    comment = serializers.CharField(required=False, allow_blank=True, default='', max_length=3000)


class BatchItemSerializer(serializers.Serializer):
    resource_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1)


class CreateBatchPurchaseSerializer(serializers.Serializer):
    """Comment length is checked by the service against the configured bounds."""

    items = BatchItemSerializer(many=True, allow_empty=False)
    comment = serializers.CharField(allow_blank=True, trim_whitespace=False)


class ReviewActionSerializer(serializers.Serializer):
    action = serializers.ChoiceField(choices=ReviewAction.choices)


class BatchReviewItemSerializer(serializers.Serializer):
    purchase_id = serializers.IntegerField()
    action = serializers.ChoiceField(choices=ReviewAction.choices)
    approved_quantity = serializers.IntegerField(required=False, allow_null=True)


class BatchReviewSerializer(serializers.Serializer):
    items = BatchReviewItemSerializer(many=True, allow_empty=False)


# =============================================================================
# Output Serializers
# =============================================================================

class PurchaseSerializer(serializers.ModelSerializer):
    """Purchase with nested team and resource."""

    team = TeamMinimalSerializer(read_only=True)
    resource = ResourceMinimalSerializer(read_only=True)
    total_cost = serializers.IntegerField(read_only=True)

    class Meta:
        model = Purchase
        fields = [
            'id',
            'batch_id',
            'team_id',
            'team',
            'resource_id',
            'resource',
            'quantity',
            'requested_quantity',
            'total_cost',
            'comment',
            'purchase_date',
            'status',
            'needs_return',
            'is_returned',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class BatchSerializer(serializers.Serializer):
    """A group of purchases submitted together."""

    batch_id = serializers.CharField()
    purchases = PurchaseSerializer(many=True)
    total_items = serializers.IntegerField()
    total_cost = serializers.IntegerField()
    status = serializers.CharField()
    comment = serializers.CharField()
    team = TeamMinimalSerializer()
    date = serializers.DateTimeField()
    has_pending_returns = serializers.BooleanField()


class BatchListSerializer(serializers.Serializer):
    batches = BatchSerializer(many=True)
    purchases = PurchaseSerializer(many=True, help_text='Purchases made outside any batch')


class PurchaseSummarySerializer(serializers.Serializer):
    total = serializers.IntegerField()
    pending = serializers.IntegerField()
    confirmed = serializers.IntegerField()
    cancelled = serializers.IntegerField()
    needs_return = serializers.IntegerField()
    credits_spent = serializers.IntegerField()


class BatchReviewResultSerializer(serializers.Serializer):
    purchase_id = serializers.IntegerField()
    success = serializers.BooleanField()
    error = serializers.CharField(required=False)
    status = serializers.CharField(required=False)
    quantity = serializers.IntegerField(required=False)


class BatchReviewResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    total = serializers.IntegerField()
    success_count = serializers.IntegerField()
    failure_count = serializers.IntegerField()
    results = BatchReviewResultSerializer(many=True)


class ResourceQuotaSerializer(serializers.Serializer):
    resource_id = serializers.IntegerField()
    max_quantity_allowed = serializers.IntegerField()
    purchased = serializers.IntegerField()
    pending = serializers.IntegerField()
    in_cart = serializers.IntegerField()
    remaining_quota = serializers.IntegerField()
