import json

import pytest
import redis


class FakeRedis:
    def __init__(self):
        self.data = {}
        self.closed = False

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value

    def delete(self, key):
        self.data.pop(key, None)

    def close(self):
        self.closed = True


class BrokenRedis:
    def get(self, key):
        raise redis.ConnectionError("down")

    def set(self, key, value):
        raise redis.ConnectionError("down")

    def delete(self, key):
        raise redis.ConnectionError("down")


class TestInMemoryHistoryStore:
    def test_roundtrip(self):
        from shelfsearch.autocomplete.history import InMemoryHistoryStore

        store = InMemoryHistoryStore()
        store.set("k", "v")

        assert store.get("k") == "v"
        store.delete("k")
        assert store.get("k") is None
        store.delete("k")


class TestJsonFileHistoryStore:
    def test_persists_across_instances(self, tmp_path):
        from shelfsearch.autocomplete.history import JsonFileHistoryStore

        path = tmp_path / "nested" / "history.json"
        JsonFileHistoryStore(path).set("recent", json.dumps(["algebra"]))

        store = JsonFileHistoryStore(path)
        assert json.loads(store.get("recent")) == ["algebra"]
        assert store.get("other") is None

    def test_delete(self, tmp_path):
        from shelfsearch.autocomplete.history import JsonFileHistoryStore

        store = JsonFileHistoryStore(tmp_path / "history.json")
        store.set("a", "1")
        store.set("b", "2")
        store.delete("a")

        assert store.get("a") is None
        assert store.get("b") == "2"

    def test_missing_file(self, tmp_path):
        from shelfsearch.autocomplete.history import JsonFileHistoryStore

        assert JsonFileHistoryStore(tmp_path / "absent.json").get("recent") is None

    def test_corrupt_file_reads_empty(self, tmp_path, caplog):
        from shelfsearch.autocomplete.history import JsonFileHistoryStore

        path = tmp_path / "history.json"
        path.write_text("[1, 2", encoding="utf-8")

        with caplog.at_level("WARNING"):
            assert JsonFileHistoryStore(path).get("recent") is None
        assert "unreadable" in caplog.text


class TestRedisHistoryStore:
    def test_prefixed_keys(self):
        from shelfsearch.autocomplete.history import RedisHistoryStore
        from shelfsearch.config import HistorySettings

        client = FakeRedis()
        store = RedisHistoryStore(HistorySettings(redis_key_prefix="portal"), client=client)
        store.set("recent", "[]")

        assert client.data == {"portal:history:recent": "[]"}
        assert store.get("recent") == "[]"
        store.delete("recent")
        assert client.data == {}

    def test_close(self):
        from shelfsearch.autocomplete.history import RedisHistoryStore

        client = FakeRedis()
        store = RedisHistoryStore(client=client)
        store.close()

        assert client.closed

    def test_unavailable_redis_degrades(self, caplog):
        from shelfsearch.autocomplete.history import RedisHistoryStore

        store = RedisHistoryStore(client=BrokenRedis())

        with caplog.at_level("WARNING"):
            assert store.get("recent") is None
            store.set("recent", "[]")
            store.delete("recent")
        assert "unavailable" in caplog.text

    def test_session_uses_redis_store(self, materials):
        from shelfsearch.autocomplete import AutocompleteSession, RedisHistoryStore

        client = FakeRedis()
        session = AutocompleteSession(materials, RedisHistoryStore(client=client))
        session.commit("organic chemistry")

        again = AutocompleteSession(materials, RedisHistoryStore(client=client))
        assert again.recent_searches == ["organic chemistry"]


class TestCreateHistoryStore:
    def test_backends(self, tmp_path):
        from shelfsearch.autocomplete.history import (
            InMemoryHistoryStore,
            JsonFileHistoryStore,
            RedisHistoryStore,
            create_history_store,
        )
        from shelfsearch.config import HistorySettings

        assert isinstance(create_history_store(HistorySettings()), InMemoryHistoryStore)
        file_store = create_history_store(
            HistorySettings(history_backend="file", history_path=str(tmp_path / "h.json"))
        )
        assert isinstance(file_store, JsonFileHistoryStore)
        assert isinstance(create_history_store(HistorySettings(history_backend="redis")), RedisHistoryStore)

    def test_unknown_backend(self):
        from shelfsearch.autocomplete.history import create_history_store
        from shelfsearch.config import HistorySettings

        with pytest.raises(ValueError):
            create_history_store(HistorySettings(history_backend="s3"))
