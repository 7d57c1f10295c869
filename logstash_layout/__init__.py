"""Logstash JSON event layout for Python logging."""

from logstash_layout.config import EncoderConfig, load_config
from logstash_layout.encoder import EventEncoder
from logstash_layout.formatter import JSONEventFormatter
from logstash_layout.models import Level, LogEvent, SourceLocation, ThrownInfo

__all__ = [
    "EncoderConfig",
    "EventEncoder",
    "JSONEventFormatter",
    "Level",
    "LogEvent",
    "SourceLocation",
    "ThrownInfo",
    "load_config",
]
