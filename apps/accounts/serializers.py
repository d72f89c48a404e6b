from rest_framework import serializers
from .models import Account


class TeamSerializer(serializers.ModelSerializer):
    """Team profile as seen by the team itself and by admins."""

    class Meta:
        model = Account
        fields = ['id', 'name', 'email', 'credit', 'last_activity']
        read_only_fields = fields


class TeamMinimalSerializer(serializers.ModelSerializer):
    """Minimal team info for nested serialization."""

    class Meta:
        model = Account
        fields = ['id', 'name', 'email']
        read_only_fields = fields


class AdminSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source='name', read_only=True)

    class Meta:
        model = Account
        fields = ['id', 'username', 'email']
        read_only_fields = fields


class TeamLoginSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=254)
    password = serializers.CharField(style={'input_type': 'password'}, trim_whitespace=False)


class AdminLoginSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    password = serializers.CharField(style={'input_type': 'password'}, trim_whitespace=False)


class UpdateTeamProfileSerializer(serializers.Serializer):
    """Format checks live in the profile service so the error text is uniform."""

    email = serializers.CharField(max_length=320)


class LogoutRequestSerializer(serializers.Serializer):
    refresh = serializers.CharField(required=False, help_text="Refresh token to discard")
