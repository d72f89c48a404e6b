from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .permissions import IsTeam, IsAdministrator
from .serializers import (
    TeamSerializer,
    AdminSerializer,
    TeamLoginSerializer,
    AdminLoginSerializer,
    UpdateTeamProfileSerializer,
    LogoutRequestSerializer,
)
from .services import (
    authenticate_team,
    authenticate_admin,
    issue_tokens,
    revoke_refresh_token,
    update_team_profile,
    list_teams,
    # Exceptions
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidTokenError,
    InvalidEmailError,
    EmailTakenError,
)


# Response serializers for API documentation
class TeamAuthResponseSerializer(serializers.Serializer):
    token = serializers.CharField()
    refresh = serializers.CharField()
    team = TeamSerializer()


class AdminAuthResponseSerializer(serializers.Serializer):
    token = serializers.CharField()
    refresh = serializers.CharField()
    admin = AdminSerializer()


class VerifyResponseSerializer(serializers.Serializer):
    valid = serializers.BooleanField()
    type = serializers.CharField()
    user = serializers.DictField()


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


def _login_failed(error):
    if isinstance(error, InactiveAccountError):
        return Response({'error': str(error)}, status=status.HTTP_403_FORBIDDEN)
    return Response({'error': str(error)}, status=status.HTTP_401_UNAUTHORIZED)


@extend_schema(
    request=TeamLoginSerializer,
    responses={
        200: TeamAuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate a team with its name (or email) and password.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def team_login(request):
    """Login as a team."""
    serializer = TeamLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        team = authenticate_team(
            name=serializer.validated_data['name'],
            password=serializer.validated_data['password'],
        )
    except (InvalidCredentialsError, InactiveAccountError) as e:
        return _login_failed(e)

    tokens = issue_tokens(team)
    return Response({
        'token': tokens['access'],
        'refresh': tokens['refresh'],
        'team': TeamSerializer(team).data,
    })


@extend_schema(
    request=AdminLoginSerializer,
    responses={
        200: AdminAuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate an administrator with username and password.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def admin_login(request):
    """Login as an administrator."""
    serializer = AdminLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        admin = authenticate_admin(
            username=serializer.validated_data['username'],
            password=serializer.validated_data['password'],
        )
    except (InvalidCredentialsError, InactiveAccountError) as e:
        return _login_failed(e)

    tokens = issue_tokens(admin)
    return Response({
        'token': tokens['access'],
        'refresh': tokens['refresh'],
        'admin': AdminSerializer(admin).data,
    })


@extend_schema(
    responses={200: VerifyResponseSerializer},
    description="Check that the bearer token is valid and return its principal.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def verify_token(request):
    """Return the principal behind the current token."""
    account = request.user
    if account.is_team:
        user = TeamSerializer(account).data
    else:
        user = AdminSerializer(account).data

    return Response({
        'valid': True,
        'type': account.account_type,
        'user': user,
    })


@extend_schema(
    request=LogoutRequestSerializer,
    responses={
        200: MessageResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Logout. The refresh token, when supplied, must be valid.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout(request):
    """Logout the current principal."""
    serializer = LogoutRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    refresh_token = serializer.validated_data.get('refresh')
    if refresh_token:
        try:
            revoke_refresh_token(refresh_token)
        except InvalidTokenError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({'message': 'Logout successful'})


@extend_schema(
    methods=['GET'],
    responses={200: TeamSerializer},
    description="Get the authenticated team's profile.",
    tags=['team'],
)
@extend_schema(
    methods=['PUT'],
    request=UpdateTeamProfileSerializer,
    responses={200: TeamSerializer, 400: ErrorResponseSerializer},
    description="Update the authenticated team's contact email.",
    tags=['team'],
)
@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated, IsTeam])
def team_profile(request):
    """Get or update the current team's profile."""
    if request.method == 'GET':
        return Response(TeamSerializer(request.user).data)

    serializer = UpdateTeamProfileSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        team = update_team_profile(
            team=request.user,
            email=serializer.validated_data['email'],
        )
    except (InvalidEmailError, EmailTakenError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(TeamSerializer(team).data)


@extend_schema(
    responses={200: TeamSerializer(many=True)},
    description="List every team with its credit balance.",
    tags=['admin'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdministrator])
def admin_teams(request):
    """List all teams (admin only)."""
    return Response(TeamSerializer(list_teams(), many=True).data)
