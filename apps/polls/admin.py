from django.contrib import admin
from apps.polls.models import Poll, Vote


class VoteInline(admin.TabularInline):
    model = Vote
    extra = 0
    fields = ['team', 'chosen_option', 'credit_staked', 'vote_date']
    readonly_fields = fields
    can_delete = False


@admin.register(Poll)
class PollAdmin(admin.ModelAdmin):
    list_display = ['question', 'status', 'start_date', 'end_date', 'vote_count']
    list_filter = ['status']
    search_fields = ['question']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [VoteInline]

    def vote_count(self, obj):
        return obj.votes.count()
    vote_count.short_description = 'Votes'


@admin.register(Vote)
class VoteAdmin(admin.ModelAdmin):
    """Votes are spent credit; they are not edited by hand."""

    list_display = ['team', 'poll', 'chosen_option', 'credit_staked', 'vote_date']
    list_filter = ['poll']
    search_fields = ['team__name', 'chosen_option']
    readonly_fields = ['team', 'poll', 'chosen_option', 'credit_staked', 'vote_date', 'created_at', 'updated_at']

    def has_add_permission(self, request):
        return False
