from datetime import timedelta

import pytest
from django.utils import timezone
from apps.polls.models import Poll, PollStatus


@pytest.fixture
def make_poll(db):
    def _make(*, question='Which sponsor challenge next?', options=None, status=PollStatus.OPEN,
              start_offset=timedelta(days=-1), end_offset=timedelta(days=1)):
        now = timezone.now()
        return Poll.objects.create(
            question=question,
            options=options if options is not None else ['IoT', 'Data', 'Infra'],
            start_date=now + start_offset,
            end_date=now + end_offset,
            status=status,
        )
    return _make


@pytest.fixture
def poll(make_poll):
    """An open poll running from yesterday to tomorrow."""
    return make_poll()
