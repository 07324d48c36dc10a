"""Load analysis input documents.

An input document is a JSON object with ``transactions``, ``targets`` and
``budgets`` arrays. Keys may be camelCase or snake_case.
"""

import json
from pathlib import Path
from typing import Any, Union

import structlog
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError
from .models import AnalysisInput

logger = structlog.get_logger()


def parse_analysis_input(data: Any) -> AnalysisInput:
    """Validate a decoded document into an AnalysisInput."""
    if not isinstance(data, dict):
        raise ValidationError(
            "Input document must be a JSON object",
            details={"actual_type": type(data).__name__},
        )

    try:
        parsed = AnalysisInput.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise ValidationError(
            f"Invalid input document: {first['msg']} at {location}",
            location=location,
            details={"error_count": e.error_count()},
        ) from e

    logger.info(
        "analysis_input_loaded",
        transactions=len(parsed.transactions),
        targets=len(parsed.targets),
        budgets=len(parsed.budgets),
    )
    return parsed


def load_analysis_input(path: Union[str, Path]) -> AnalysisInput:
    """Read and validate an input document from disk."""
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ValidationError(
            f"Cannot read input file: {path}",
            location="path",
            details={"path": str(path)},
            recoverable=False,
        ) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationError(
            f"Input file is not valid JSON: {e.msg} (line {e.lineno})",
            location="path",
            details={"path": str(path)},
        ) from e

    return parse_analysis_input(data)
