"""Tests for the demo entry point."""

import json
import logging
import sys

import pytest

import main
from logstash_layout.validator import EventValidator


@pytest.fixture(autouse=True)
def detach_demo_handlers():
    yield
    demo = logging.getLogger("layout.demo")
    for handler in list(demo.handlers):
        demo.removeHandler(handler)


def _run(monkeypatch, capsys, *argv):
    monkeypatch.setattr(sys, "argv", ["main.py", *argv])
    for key in ("LAYOUT_LOCATION_INFO", "LAYOUT_CHARSET", "LAYOUT_HOSTNAME"):
        monkeypatch.delenv(key, raising=False)
    main.main()
    return capsys.readouterr().out.splitlines()


class TestDemo:
    def test_emits_valid_lines(self, monkeypatch, capsys):
        lines = _run(monkeypatch, capsys, "--threads", "3")
        # one plain line, then three per worker
        assert len(lines) == 1 + 3 * 3
        validator = EventValidator()
        for line in lines:
            assert validator.validate_line(line + "\n") == (True, [])

    def test_worker_context_attached(self, monkeypatch, capsys):
        docs = [json.loads(line) for line in _run(monkeypatch, capsys, "--threads", "1")]
        worker_docs = [d for d in docs if d["@fields"].get("ndc") == ["worker-0"]]
        assert len(worker_docs) == 3
        assert all(d["@fields"]["mdc"] == {"worker": 0} for d in worker_docs)
        assert worker_docs[1]["@message"] == {"event": "order.created", "order_id": 1000}
        assert worker_docs[2]["@fields"]["exception"]["exception_class"] == "ValueError"

    def test_location_flag(self, monkeypatch, capsys):
        docs = [json.loads(line) for line in _run(monkeypatch, capsys, "--location-info",
                                                  "--threads", "1")]
        assert all("line_number" in d["@fields"] for d in docs)

    def test_bad_config_exits(self, monkeypatch, tmp_path):
        config = tmp_path / "layout.yml"
        config.write_text("layout:\n  charset: klingon\n")
        monkeypatch.setattr(sys, "argv", ["main.py", "--config", str(config)])
        monkeypatch.delenv("LAYOUT_CHARSET", raising=False)
        with pytest.raises(SystemExit) as exc:
            main.main()
        assert exc.value.code == 2
