import pytest

from logstash_layout import context
from logstash_layout.config import EncoderConfig
from logstash_layout.encoder import EventEncoder
from logstash_layout.models import Level, LogEvent, SourceLocation, ThrownInfo
from logstash_layout.validator import EventValidator


@pytest.fixture(autouse=True)
def clean_context():
    context.clear_all()
    yield
    context.clear_all()


@pytest.fixture
def encoder():
    return EventEncoder(EncoderConfig(hostname="testhost"))


@pytest.fixture
def location_encoder():
    return EventEncoder(EncoderConfig(hostname="testhost", location_info=True))


@pytest.fixture
def sample_event():
    return LogEvent(
        message="User logged in",
        timestamp_millis=1_700_000_000_123,
        level=Level.INFO,
        logger_name="auth.service",
        thread_name="main",
    )


@pytest.fixture
def full_event():
    return LogEvent(
        message='{"user": "alice", "attempts": 3}',
        timestamp_millis=0,
        level=Level.ERROR,
        logger_name="auth.service",
        thread_name="worker-1",
        thrown=ThrownInfo(
            class_name="java.lang.RuntimeException",
            message="boom",
            stacktrace="java.lang.RuntimeException: boom\n\tat Foo.bar(Foo.java:10)\n",
        ),
        context_map={"request_id": "req-001", "user_id": 42},
        context_stack=["outer", "inner"],
        source=SourceLocation(file="Foo.java", line=10, class_name="com.example.Foo", method="bar"),
    )


@pytest.fixture
def validator():
    return EventValidator()
