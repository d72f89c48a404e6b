import pytest
from apps.compositions.models import TeamComposition


@pytest.fixture
def composition(db):
    """Two dev seats (one taken), no infra seats."""
    return TeamComposition.objects.create(name='Team Alpha', dev_total=2, dev_filled=1)
