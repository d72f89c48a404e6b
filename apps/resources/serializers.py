from rest_framework import serializers
from .models import Resource, ResourceType


class ResourceSerializer(serializers.ModelSerializer):
    """Catalog entry."""

    type = serializers.CharField(source='resource_type', read_only=True)

    class Meta:
        model = Resource
        fields = [
            'id',
            'name',
            'description',
            'cost',
            'quantity',
            'max_per_team',
            'type',
            'image_url',
            'is_active',
            'is_non_returnable',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ResourceMinimalSerializer(serializers.ModelSerializer):
    """Minimal resource info for nested serialization."""

    type = serializers.CharField(source='resource_type', read_only=True)

    class Meta:
        model = Resource
        fields = ['id', 'name', 'cost', 'type', 'image_url', 'is_non_returnable']
        read_only_fields = fields


class ResourceFilterSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=ResourceType.choices, required=False)
