import json
import logging
from datetime import datetime, timezone

from warehouse.config import get_settings

# Passed through ``extra=`` by the movement recorder and the request middleware.
CONTEXT_FIELDS = (
    "movement_id",
    "product_id",
    "location_id",
    "movement_type",
    "quantity",
    "attempt",
    "error",
    "method",
    "path",
    "status_code",
    "duration_ms",
)


def movement_context(product_id, location_id, movement_type, quantity, **fields) -> dict:
    context = {
        "product_id": product_id,
        "location_id": location_id,
        "movement_type": movement_type,
        "quantity": quantity,
    }
    context.update(fields)
    return context


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def build_formatter(json_output: bool) -> logging.Formatter:
    if json_output:
        return JsonFormatter()
    return logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s - %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


def setup_logging() -> None:
    settings = get_settings()
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(settings.LOG_JSON))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)
