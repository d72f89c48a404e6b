from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'polls'

router = DefaultRouter()
router.register(r'polls', views.PollViewSet, basename='poll')

urlpatterns = [
    # GET  /api/polls/                       - List polls
    # GET  /api/polls/{id}/                  - Poll detail
    # GET  /api/polls/{id}/results/          - Tallies per option
    path('', include(router.urls)),

    # Team votes
    path('team/votes/', views.team_votes_view, name='team-votes'),
    path('team/votes/poll/<int:poll_id>/', views.team_vote_for_poll_view, name='team-vote-for-poll'),
]
