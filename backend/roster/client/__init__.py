"""Client-side counterpart of the roster web frontend: HTTP client, state containers and realtime handle."""
from roster.client.api import ApiError, RosterApiClient
from roster.client.realtime import PlayersSubscription, subscribe_players
from roster.client.state import PlayersStore, VsContext, VsStats, merge_by_id

__all__ = [
    'ApiError',
    'RosterApiClient',
    'PlayersSubscription',
    'subscribe_players',
    'PlayersStore',
    'VsContext',
    'VsStats',
    'merge_by_id',
]
