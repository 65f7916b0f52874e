"""Check run annotations read from a JSON file.

The file holds a JSON array of objects in the shape the GitHub checks API
accepts for ``output.annotations``:

    [{"path": "src/app.py", "annotation_level": "warning", "message": "...",
      "start_line": 3, "end_line": 3, "start_column": 1, "end_column": 8}]
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

ANNOTATION_LEVELS = ("notice", "warning", "failure")


class AnnotationError(ValueError):
    """Raised when an annotation file is missing or not a valid annotation list."""


@dataclass(frozen=True)
class Annotation:
    path: str
    annotation_level: str  # "notice" | "warning" | "failure"
    message: str
    start_line: int
    end_line: int
    title: str | None = None
    raw_details: str | None = None
    start_column: int | None = None
    end_column: int | None = None

    @classmethod
    def from_dict(cls, d: dict) -> Annotation:
        if not isinstance(d, dict):
            raise AnnotationError(f"Annotation must be an object, got {type(d).__name__}.")
        missing = [key for key in ("path", "annotation_level", "message", "start_line", "end_line") if key not in d]
        if missing:
            raise AnnotationError(f"Annotation is missing required field(s): {', '.join(missing)}.")
        if d["annotation_level"] not in ANNOTATION_LEVELS:
            raise AnnotationError(
                f"Annotation level '{d['annotation_level']}' is not a valid value of 'notice', 'warning' or 'failure'."
            )
        for key in ("path", "message", "title", "raw_details"):
            value = d.get(key)
            if value is not None and not isinstance(value, str):
                raise AnnotationError(f"Annotation field '{key}' must be a string, got {value!r}.")
        for key in ("start_line", "end_line", "start_column", "end_column"):
            value = d.get(key)
            if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
                raise AnnotationError(f"Annotation field '{key}' must be an integer, got {value!r}.")
        return cls(
            path=d["path"],
            annotation_level=d["annotation_level"],
            message=d["message"],
            start_line=d["start_line"],
            end_line=d["end_line"],
            title=d.get("title"),
            raw_details=d.get("raw_details"),
            start_column=d.get("start_column"),
            end_column=d.get("end_column"),
        )

    def to_api(self) -> dict:
        """Return the annotation as a checks API payload, omitting unset fields.

        Columns are only accepted by GitHub on single-line annotations, so they
        are dropped when start_line and end_line differ.
        """
        payload = {
            "path": self.path,
            "annotation_level": self.annotation_level,
            "message": self.message,
            "start_line": self.start_line,
            "end_line": self.end_line,
        }
        if self.title is not None:
            payload["title"] = self.title
        if self.raw_details is not None:
            payload["raw_details"] = self.raw_details
        if self.start_line == self.end_line:
            if self.start_column is not None:
                payload["start_column"] = self.start_column
            if self.end_column is not None:
                payload["end_column"] = self.end_column
        elif self.start_column is not None or self.end_column is not None:
            logger.debug("Dropping columns of multi-line annotation on %s:%d", self.path, self.start_line)
        return payload


def parse_annotations(data) -> list[Annotation]:
    if not isinstance(data, list):
        raise AnnotationError(f"Annotations must be a JSON array, got {type(data).__name__}.")
    return [Annotation.from_dict(item) for item in data]


def read_annotations(path: str) -> list[Annotation]:
    """Load and validate the annotation list stored at path."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Failed to read file at path '%s'.", path)
        raise AnnotationError(f"Failed to read annotations from '{path}': {e}") from e

    try:
        return parse_annotations(data)
    except AnnotationError:
        logger.error("Invalid annotations in file at path '%s'.", path)
        raise
