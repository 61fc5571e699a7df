from .history import (
    HistoryStore,
    InMemoryHistoryStore,
    JsonFileHistoryStore,
    RedisHistoryStore,
    create_history_store,
)
from .session import AutocompleteSession, CommitResult, SuggestionState

__all__ = [
    "HistoryStore",
    "InMemoryHistoryStore",
    "JsonFileHistoryStore",
    "RedisHistoryStore",
    "create_history_store",
    "AutocompleteSession",
    "CommitResult",
    "SuggestionState",
]
