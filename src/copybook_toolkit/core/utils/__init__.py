"""Core utilities: content serialization and logging helpers."""

from .logging_utils import (
    QueueLogHandler,
    ThreadFilter,
    attach_queue_handler,
    configure_logging,
    detach_queue_handler,
    forward_logs,
)
from .serialization import (
    deserialize_content,
    generate_plain_text,
    load_content,
    parse_content_json,
    serialize_content,
)

__all__ = [
    "QueueLogHandler",
    "ThreadFilter",
    "attach_queue_handler",
    "configure_logging",
    "detach_queue_handler",
    "forward_logs",
    "deserialize_content",
    "generate_plain_text",
    "load_content",
    "parse_content_json",
    "serialize_content",
]
