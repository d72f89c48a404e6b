from rest_framework import serializers
from .models import CartItem
from apps.resources.serializers import ResourceSerializer


# =============================================================================
# Input Serializers
# =============================================================================

class AddCartItemSerializer(serializers.Serializer):
    resource_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1)


class UpdateCartItemSerializer(serializers.Serializer):
    """A quantity of zero or less removes the line."""

    quantity = serializers.IntegerField()


class ValidateCartItemSerializer(serializers.Serializer):
    resource_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField()


class CheckoutSerializer(serializers.Serializer):
    comment = serializers.CharField(allow_blank=True, trim_whitespace=False)


# =============================================================================
# Output Serializers
# =============================================================================

class CartItemSerializer(serializers.ModelSerializer):
    resource = ResourceSerializer(read_only=True)
    line_cost = serializers.IntegerField(read_only=True)

    class Meta:
        model = CartItem
        fields = ['resource', 'quantity', 'line_cost', 'added_at', 'updated_at']
        read_only_fields = fields


class CartSerializer(serializers.Serializer):
    items = CartItemSerializer(many=True)
    total_cost = serializers.IntegerField()
    items_count = serializers.IntegerField()


class CartValidationResultSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    error = serializers.CharField(required=False)
    max_quantity_allowed = serializers.IntegerField(required=False)
