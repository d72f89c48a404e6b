from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.permissions import IsTeam

from .serializers import (
    PollSerializer,
    PollFilterSerializer,
    PollResultsSerializer,
    VoteSerializer,
    CastVoteSerializer,
)
from .services import (
    list_polls,
    get_poll,
    poll_results,
    team_votes,
    team_vote_for_poll,
    cast_vote,
    # Exceptions
    PollsServiceError,
    PollNotFoundError,
    VoteNotFoundError,
)


def _service_error(error):
    if isinstance(error, (PollNotFoundError, VoteNotFoundError)):
        code = status.HTTP_404_NOT_FOUND
    else:
        code = status.HTTP_400_BAD_REQUEST
    return Response({'error': str(error)}, status=code)


class PollViewSet(viewsets.GenericViewSet):
    """
    Public poll listing.

    list: Polls, newest first (?status=open|closed)
    retrieve: One poll
    results: Vote count and staked credit per option
    """

    serializer_class = PollSerializer
    permission_classes = [AllowAny]
    lookup_value_regex = r'\d+'

    @extend_schema(
        parameters=[OpenApiParameter('status', str, enum=['open', 'closed'])],
        responses={200: PollSerializer(many=True)},
    )
    def list(self, request):
        filters = PollFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        polls = list_polls(status=filters.validated_data.get('status'))
        return Response(PollSerializer(polls, many=True).data)

    def retrieve(self, request, pk=None):
        try:
            poll = get_poll(poll_id=int(pk))
        except PollNotFoundError as e:
            return _service_error(e)
        return Response(PollSerializer(poll).data)

    @extend_schema(responses={200: PollResultsSerializer})
    @action(detail=True, methods=['get'])
    def results(self, request, pk=None):
        try:
            results = poll_results(poll_id=int(pk))
        except PollNotFoundError as e:
            return _service_error(e)
        return Response(PollResultsSerializer(results).data)


@extend_schema(
    methods=['GET'],
    responses={200: VoteSerializer(many=True)},
    description="The authenticated team's votes.",
    tags=['team'],
)
@extend_schema(
    methods=['POST'],
    request=CastVoteSerializer,
    responses={201: VoteSerializer},
    description="Vote on an open poll by staking credit.",
    tags=['team'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsTeam])
def team_votes_view(request):
    """List or cast the team's votes."""
    if request.method == 'GET':
        return Response(VoteSerializer(team_votes(team=request.user), many=True).data)

    serializer = CastVoteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        vote = cast_vote(team=request.user, **serializer.validated_data)
    except PollsServiceError as e:
        return _service_error(e)

    return Response(VoteSerializer(vote).data, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={200: VoteSerializer},
    description="The team's vote on one poll.",
    tags=['team'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsTeam])
def team_vote_for_poll_view(request, poll_id):
    try:
        vote = team_vote_for_poll(team=request.user, poll_id=poll_id)
    except VoteNotFoundError as e:
        return _service_error(e)
    return Response(VoteSerializer(vote).data)
