from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class SearchSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SHELFSEARCH_SEARCH_")

    min_score: float = 0.1

    # Field weights; a record's relevance is the best weighted field.
    title_weight: float = 1.0
    author_weight: float = 0.7
    description_weight: float = 0.4
    department_weight: float = 0.5
    type_weight: float = 0.3

    # boost = min(downloads / divisor, max_boost)
    popularity_divisor: float = 100.0
    popularity_max_boost: float = 0.1

    autocomplete_min_score: float = 0.15
    autocomplete_limit: int = 6
    autocomplete_min_query_length: int = 2
    autocomplete_candidate_limit: int = 100

    history_max_entries: int = 5
    history_key: str = "dti-recent-searches"


class HistorySettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SHELFSEARCH_")

    # memory | file | redis
    history_backend: str = "memory"
    history_path: str = "./recent_searches.json"

    # Redis
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: Optional[str] = None
    redis_key_prefix: str = "shelfsearch"


search_settings = SearchSettings()
history_settings = HistorySettings()
