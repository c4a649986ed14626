"""Loading of quote configuration and stone catalog files.

Every failure while reading a file, parsing its JSON or validating it against
the schema surfaces as a single ConfigError whose ``error_type`` says which
stage failed and whose ``details`` point at the offending location.
"""

import json
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from stonequote.application.config.schema import CatalogFile, QuoteConfiguration

ModelT = TypeVar("ModelT", bound=BaseModel)


class ConfigError(Exception):
    """A configuration or catalog file could not be used.

    Attributes:
        message: Human-readable summary.
        error_type: One of file_not_found, permission_denied, file_read_error,
            json_parse or validation.
        path: File the error came from, None for in-memory data.
        details: Per-problem entries. JSON errors carry line, column and
            message; validation errors carry path, message, value and
            error_type.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _json_path(loc: tuple[str | int, ...]) -> str:
    """Render a pydantic error location as a JSON path.

    Examples:
        >>> _json_path(("settings", "kerf_width"))
        'settings.kerf_width'
        >>> _json_path(("products", 2, "width"))
        'products[2].width'
    """
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        else:
            path += f".{segment}" if path else str(segment)
    return path


def _validation_details(error: PydanticValidationError) -> list[dict[str, Any]]:
    return [
        {
            "path": _json_path(err["loc"]),
            "message": err["msg"],
            "value": err.get("input"),
            "error_type": err["type"],
        }
        for err in error.errors()
    ]


def _validation_message(details: list[dict[str, Any]]) -> str:
    lines = ["Configuration validation failed:"]
    for detail in details:
        line = f"  - {detail['path']}: {detail['message']}"
        if detail.get("value") is not None:
            line += f" (got: {detail['value']!r})"
        lines.append(line)
    return "\n".join(lines)


def _validate(model: type[ModelT], data: Any, path: Path | None = None) -> ModelT:
    """Validate ``data`` against ``model``, raising ConfigError on failure."""
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        details = _validation_details(e)
        raise ConfigError(
            message=_validation_message(details),
            error_type="validation",
            path=path,
            details=details,
        ) from e


def _read_json(path: Path, kind: str) -> Any:
    """Read and parse a JSON file.

    Args:
        path: File to read.
        kind: "Config" or "Catalog", used in error messages.

    Raises:
        ConfigError: If the file is missing, unreadable or not valid JSON.
    """
    if not path.exists():
        raise ConfigError(
            message=f"{kind} file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigError(
            message=f"Permission denied reading {kind.lower()} file: {path}",
            error_type="permission_denied",
            path=path,
        ) from e
    except OSError as e:
        raise ConfigError(
            message=f"Error reading {kind.lower()} file {path}: {e}",
            error_type="file_read_error",
            path=path,
        ) from e

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=(
                f"Invalid JSON in {kind.lower()} file {path} "
                f"at line {e.lineno}, column {e.colno}: {e.msg}"
            ),
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e


def load_config(path: Path) -> QuoteConfiguration:
    """Load a quote configuration file.

    Args:
        path: Path to the JSON configuration.

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.

    Example:
        >>> try:
        ...     config = load_config(Path("kitchen.json"))
        ... except ConfigError as e:
        ...     for detail in e.details:
        ...         print(f"  {detail['path']}: {detail['message']}")
    """
    return _validate(QuoteConfiguration, _read_json(path, "Config"), path)


def load_config_from_dict(data: dict[str, Any]) -> QuoteConfiguration:
    """Validate an in-memory quote configuration, e.g. a request body."""
    return _validate(QuoteConfiguration, data)


def load_catalog(path: Path) -> CatalogFile:
    """Load a stone catalog file.

    The file holds either a bare list of catalog rows or an object with a
    ``catalog`` list.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.
    """
    data = _read_json(path, "Catalog")
    if isinstance(data, list):
        data = {"catalog": data}
    return _validate(CatalogFile, data, path)
