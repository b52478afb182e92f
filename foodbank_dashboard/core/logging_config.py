import logging

# Keys passed through ``extra=`` by the pipeline's loggers; the formatter appends these.
LOG_CONTEXT_KEYS = (
    "data_version",
    "previous_version",
    "outcome",
    "status_code",
    "record_count",
    "unresolved",
    "reason",
)


class ContextFormatter(logging.Formatter):
    def __init__(self, fmt: str | None = None, keys: tuple[str, ...] = LOG_CONTEXT_KEYS) -> None:
        super().__init__(fmt)
        self._keys = keys

    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in self._keys:
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


def configure_logging(level: str) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)
