from foodbank_dashboard.application.ports.key_value_store import KeyValueStorePort


class MemoryKeyValueStore(KeyValueStorePort):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value
