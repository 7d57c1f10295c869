"""logging.Formatter adapter — turns a LogRecord into a logstash JSON line."""

import logging

from logstash_layout import context
from logstash_layout.config import EncoderConfig
from logstash_layout.encoder import EventEncoder
from logstash_layout.models import Level, LogEvent, SourceLocation, ThrownInfo


class ContextFilter(logging.Filter):
    """Copy the current MDC/NDC onto each record as it is created.

    Needed when records are formatted on another thread than the one that
    logged them (e.g. behind a ``QueueHandler``).
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "mdc"):
            record.mdc = context.get_context_map()
        if not hasattr(record, "ndc"):
            record.ndc = context.get_context_stack()
        return True


def _record_message(record: logging.LogRecord) -> str:
    try:
        return record.getMessage()
    except (TypeError, ValueError):
        # bad %-args; keep the template rather than losing the line
        return str(record.msg)


def _record_thrown(record: logging.LogRecord) -> ThrownInfo | None:
    if not record.exc_info:
        return None
    exc = record.exc_info[1]
    if exc is None:
        return None
    return ThrownInfo.from_exception(exc)


def _record_millis(record: logging.LogRecord) -> int:
    created_ns = getattr(record, "created_ns", None)  # Python 3.13+
    if created_ns is not None:
        return created_ns // 1_000_000
    return int(record.created * 1000)


class JSONEventFormatter(logging.Formatter):
    """Formatter producing one logstash JSON document per record.

    Usable directly or from ``logging.config.dictConfig`` via the ``()`` key::

        formatters:
          logstash:
            (): logstash_layout.JSONEventFormatter
            location_info: true
    """

    def __init__(self, location_info: bool = False, charset: str = "UTF-8",
                 properties: bool = False, complete: bool = False,
                 compact: bool = False, event_eol: bool = False,
                 hostname: str | None = None, config: EncoderConfig | None = None):
        super().__init__()
        if config is None:
            config = EncoderConfig(
                location_info=location_info,
                charset=charset,
                properties=properties,
                complete=complete,
                compact=compact,
                event_eol=event_eol,
                hostname=hostname,
            )
        self.encoder = EventEncoder(config)

    def to_event(self, record: logging.LogRecord) -> LogEvent:
        mdc = getattr(record, "mdc", None)
        if mdc is None:
            mdc = context.get_context_map()
        ndc = getattr(record, "ndc", None)
        if ndc is None:
            ndc = context.get_context_stack()

        source = None
        if self.encoder.location_info:
            source = SourceLocation(
                file=record.filename,
                line=record.lineno,
                class_name=record.module,
                method=record.funcName,
            )

        return LogEvent(
            message=_record_message(record),
            timestamp_millis=_record_millis(record),
            level=Level.from_levelno(record.levelno),
            logger_name=record.name,
            thread_name=record.threadName,
            thrown=_record_thrown(record),
            context_map=mdc,
            context_stack=ndc,
            source=source,
        )

    def format(self, record: logging.LogRecord) -> str:
        # handlers append their own terminator
        return self.encoder.encode(self.to_event(record))[:-1]
