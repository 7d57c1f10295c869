"""Checks emitted lines against the JSON schema of the event layout."""

import json
import os
from collections import defaultdict

import jsonschema

DEFAULT_SCHEMA_PATH = os.path.join(os.path.dirname(__file__), "schemas", "event_v2.json")


class EventValidator:
    """Validates encoded events (lines or parsed documents) against a JSON schema."""

    def __init__(self, schema_path: str = DEFAULT_SCHEMA_PATH):
        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        self._validator = jsonschema.Draft202012Validator(schema)
        self._stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> dict:
        return {
            "total": 0,
            "valid": 0,
            "invalid": 0,
            "error_types": defaultdict(int),
        }

    def validate_line(self, line: str) -> tuple[bool, list[str]]:
        """Validate one encoded line, including its single trailing newline."""
        if not line.endswith("\n") or "\n" in line[:-1]:
            self._record_failure("framing")
            return False, ["line must hold exactly one newline, at the end"]
        try:
            document = json.loads(line)
        except json.JSONDecodeError as e:
            self._record_failure("json")
            return False, [f"invalid JSON: {e}"]
        return self.validate(document)

    def validate(self, document) -> tuple[bool, list[str]]:
        """Validate a parsed document.

        Returns:
            tuple: (is_valid: bool, errors: list[str])
        """
        self._stats["total"] += 1
        errors = list(self._validator.iter_errors(document))
        if not errors:
            self._stats["valid"] += 1
            return True, []

        self._stats["invalid"] += 1
        for error in errors:
            self._stats["error_types"][error.validator] += 1
        return False, [error.message for error in errors]

    def _record_failure(self, error_type: str) -> None:
        self._stats["total"] += 1
        self._stats["invalid"] += 1
        self._stats["error_types"][error_type] += 1

    def get_stats(self) -> dict:
        """Return a copy of the stats dict."""
        stats = dict(self._stats)
        stats["error_types"] = dict(stats["error_types"])
        return stats

    def reset_stats(self) -> None:
        self._stats = self._empty_stats()
