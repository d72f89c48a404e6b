from rest_framework import serializers
from .models import Poll, Vote, PollStatus


class PollSerializer(serializers.ModelSerializer):

    class Meta:
        model = Poll
        fields = [
            'id',
            'question',
            'options',
            'start_date',
            'end_date',
            'status',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class PollFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=PollStatus.choices, required=False)


class OptionResultSerializer(serializers.Serializer):
    count = serializers.IntegerField()
    total_credits = serializers.IntegerField()


class PollResultsSerializer(serializers.Serializer):
    poll = PollSerializer()
    results = serializers.DictField(child=OptionResultSerializer())


class VoteSerializer(serializers.ModelSerializer):
    """Vote with its poll nested for the team's history."""

    poll = PollSerializer(read_only=True)

    class Meta:
        model = Vote
        fields = [
            'id',
            'team_id',
            'poll_id',
            'poll',
            'chosen_option',
            'credit_staked',
            'vote_date',
        ]
        read_only_fields = fields


class CastVoteSerializer(serializers.Serializer):
    poll_id = serializers.IntegerField(min_value=1)
    chosen_option = serializers.CharField(max_length=255)
    credit_staked = serializers.IntegerField(min_value=1)
