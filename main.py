#!/usr/bin/env python3
"""Demo — emits sample log events as logstash JSON lines on stdout."""

import argparse
import dataclasses
import json
import logging
import sys
import threading

from logstash_layout import context
from logstash_layout.config import load_config, load_yaml_config
from logstash_layout.errors import ConfigError
from logstash_layout.formatter import ContextFilter, JSONEventFormatter

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [layout] %(levelname)s %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


def build_cli_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Logstash JSON layout demo")
    parser.add_argument(
        "--config", default=None,
        help="Path to YAML config file with a 'layout' section",
    )
    parser.add_argument(
        "--location-info", action="store_true",
        help="Include file/line/class/method fields",
    )
    parser.add_argument(
        "--threads", type=int, default=2,
        help="Number of worker threads logging concurrently (default: 2)",
    )
    return parser


def build_demo_logger(formatter: JSONEventFormatter) -> logging.Logger:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.addFilter(ContextFilter())

    demo = logging.getLogger("layout.demo")
    demo.setLevel(logging.DEBUG)
    demo.propagate = False
    demo.addHandler(handler)
    return demo


def _worker(demo: logging.Logger, worker_id: int) -> None:
    with context.mdc(worker=worker_id), context.ndc(f"worker-{worker_id}"):
        demo.info("Worker %d started", worker_id)
        demo.info(json.dumps({"event": "order.created", "order_id": 1000 + worker_id}))
        try:
            raise ValueError(f"bad quantity in order {1000 + worker_id}")
        except ValueError:
            demo.exception("Order rejected")


def main():
    parser = build_cli_parser()
    args = parser.parse_args()

    try:
        config = load_config(load_yaml_config(args.config))
    except ConfigError as e:
        logger.error("Invalid layout configuration: %s", e)
        sys.exit(2)
    if args.location_info:
        config = dataclasses.replace(config, location_info=True)
    formatter = JSONEventFormatter(config=config)
    logger.info("Layout: location_info=%s, charset=%s, host=%s",
                formatter.encoder.location_info, formatter.encoder.config.charset,
                formatter.encoder.config.hostname)

    demo = build_demo_logger(formatter)
    demo.debug("plain text message")

    threads = [
        threading.Thread(target=_worker, args=(demo, i), name=f"worker-{i}")
        for i in range(args.threads)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    logger.info("Emitted events from %d worker thread(s)", len(threads))


if __name__ == "__main__":
    main()
