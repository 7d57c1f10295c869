"""Event encoder — maps one LogEvent to one line of logstash-style JSON.

Output shape::

    {"@source_host": ..., "@timestamp": ..., "@message": ..., "@fields": {...}}

``@message`` holds the parsed object when the message text is a JSON object,
and the raw text otherwise. ``@fields`` carries everything else; keys whose
value is missing are left out instead of being written as ``null``.

The encoder keeps no per-event state, so one instance can be shared by any
number of threads.
"""

import dataclasses
import json
import logging
from typing import Any

from logstash_layout.config import EncoderConfig
from logstash_layout.host import resolve_hostname
from logstash_layout.models import LogEvent
from logstash_layout.timefmt import format_timestamp

logger = logging.getLogger(__name__)


def _to_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def _message_value(message):
    """Return the message as a dict if it is a JSON object, else the raw text."""
    if not isinstance(message, str):
        message = str(message)
    try:
        parsed = json.loads(message)
        _to_json(parsed)
    except (ValueError, RecursionError):
        return message
    if isinstance(parsed, dict):
        return parsed
    return message


def _add_if_non_null(target: dict, key: str, value: Any) -> None:
    """Set ``target[key]`` unless value is None or cannot be written as JSON."""
    if value is None:
        return
    try:
        _to_json(value)
    except (TypeError, ValueError, RecursionError) as e:
        logger.debug("Dropping field %r: %s", key, e)
        return
    target[key] = value


class EventEncoder:
    def __init__(self, config: EncoderConfig | None = None):
        if config is None:
            config = EncoderConfig()
        if config.hostname is None:
            config = dataclasses.replace(config, hostname=resolve_hostname())
        self._config = config

    @property
    def config(self) -> EncoderConfig:
        return self._config

    @property
    def location_info(self) -> bool:
        return self._config.location_info

    def _exception_fields(self, event: LogEvent) -> dict:
        info: dict[str, Any] = {}
        thrown = event.thrown
        if thrown.class_name:
            info["exception_class"] = thrown.class_name
        if thrown.message:
            info["exception_message"] = thrown.message
        if thrown.stacktrace:
            info["stacktrace"] = thrown.stacktrace
        return info

    def build_document(self, event: LogEvent) -> dict:
        """Assemble the output document for one event without serializing it."""
        thread_name = event.thread_name
        timestamp = event.timestamp_millis
        fields: dict[str, Any] = {}

        document: dict[str, Any] = {}
        document["@source_host"] = self._config.hostname
        document["@timestamp"] = format_timestamp(timestamp)
        document["@message"] = _message_value(event.message)

        if event.thrown is not None:
            # added even when empty
            _add_if_non_null(fields, "exception", self._exception_fields(event))

        if self._config.location_info and event.source is not None:
            source = event.source
            _add_if_non_null(fields, "file", source.file)
            _add_if_non_null(fields, "line_number", source.line)
            _add_if_non_null(fields, "class", source.class_name)
            _add_if_non_null(fields, "method", source.method)

        _add_if_non_null(fields, "loggerName", event.logger_name)
        _add_if_non_null(fields, "mdc", dict(event.context_map) if event.context_map else None)
        _add_if_non_null(fields, "ndc", list(event.context_stack) if event.context_stack else None)
        _add_if_non_null(fields, "level", str(event.level))
        _add_if_non_null(fields, "threadName", thread_name)

        document["@fields"] = fields
        return document

    def encode(self, event: LogEvent) -> str:
        """Return the event as one JSON object followed by a newline."""
        return _to_json(self.build_document(event)) + "\n"

    def to_bytes(self, event: LogEvent) -> bytes:
        return self.encode(event).encode(self._config.charset, errors="replace")
