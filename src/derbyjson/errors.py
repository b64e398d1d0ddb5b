"""Error taxonomy for DerbyJSON decoding and encoding.

Every failure is raised as a subclass of :class:`DerbyJSONError`. Schema
failures carry the dotted path of the offending field (``team.name``,
``periods[0].jams[2].events[1].skater``) so callers can report them
without inspecting pydantic internals.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, Union

from pydantic import ValidationError

Loc = Tuple[Union[str, int], ...]

# Sequences whose items are tagged unions. Pydantic puts the variant tag in
# the error location right after the item index; it is not part of the
# document's shape and is dropped from paths.
_TAGGED_SEQUENCES = frozenset({"events", "jams"})


def format_path(loc: Sequence[Union[str, int]]) -> str:
    """Render a pydantic error location as a dotted field path."""
    parts: List[str] = []
    for i, seg in enumerate(loc):
        if isinstance(seg, int):
            parts.append(f"[{seg}]")
            continue
        if i >= 2 and isinstance(loc[i - 1], int) and loc[i - 2] in _TAGGED_SEQUENCES:
            continue
        parts.append(f".{seg}" if parts else str(seg))
    return "".join(parts)


def join_path(path: str, key: str) -> str:
    """Append a key to a dotted path."""
    return f"{path}.{key}" if path else key


class DerbyJSONError(Exception):
    """Base class for all derbyjson errors."""


class DecodeError(DerbyJSONError):
    """Input could not be turned into a DerbyJSON document."""


class EncodeError(DerbyJSONError):
    """A document value could not be serialized."""


class DerbyJSONSyntaxError(DecodeError):
    """Input is not well-formed JSON."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.line = line
        self.column = column
        where = f" (line {line}, column {column})" if line is not None else ""
        super().__init__(f"malformed JSON: {message}{where}")


class SchemaViolation(DecodeError):
    """Well-formed JSON that does not match the DerbyJSON object shapes."""

    kind = "schema_violation"

    def __init__(self, path: str, message: str, issues: Optional[List[Dict[str, Any]]] = None):
        self.path = path
        self.message = message
        self.issues = issues if issues is not None else [
            {"kind": self.kind, "path": path, "message": message}
        ]
        super().__init__(f"{path or '<root>'}: {message}")


class MissingFieldError(SchemaViolation):
    kind = "missing_field"


class WrongTypeError(SchemaViolation):
    kind = "wrong_type"


class InvalidValueError(SchemaViolation):
    """Right JSON type, but a value the schema does not allow."""
    kind = "invalid_value"


class UnknownVariantError(SchemaViolation):
    """A discriminant (document ``type``, event ``event``) outside the closed tag table."""

    kind = "unknown_variant"

    def __init__(self, path: str, message: str, tag: Any = None,
                 issues: Optional[List[Dict[str, Any]]] = None):
        self.tag = tag
        super().__init__(path, message, issues)


class UnknownFieldError(SchemaViolation):
    """Raised only when unknown fields are forbidden."""
    kind = "unknown_field"


class UnsupportedVersionError(SchemaViolation):
    kind = "unsupported_version"

    def __init__(self, path: str, message: str, version: Optional[str] = None,
                 issues: Optional[List[Dict[str, Any]]] = None):
        self.version = version
        super().__init__(path, message, issues)


class UnexpectedDocumentError(DecodeError):
    """The document decoded fine but is not the kind the caller asked for."""

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected a {expected!r} document, got {actual!r}")


class InvariantViolation(EncodeError):
    """A value tree breaks an invariant and cannot be encoded."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path or '<root>'}: {message}")


def _classify(error: Dict[str, Any]) -> Tuple[Type[SchemaViolation], str, str, Any]:
    """Map one pydantic error dict to (error class, path, message, tag)."""
    err_type = error["type"]
    path = format_path(error["loc"])
    ctx = error.get("ctx") or {}

    if err_type == "missing":
        return MissingFieldError, path, "required field is missing", None

    if err_type == "union_tag_not_found":
        key = str(ctx.get("discriminator", "event")).strip("'")
        return MissingFieldError, join_path(path, key), "required discriminant is missing", None

    if err_type == "union_tag_invalid":
        key = str(ctx.get("discriminator", "event")).strip("'")
        tag = ctx.get("tag")
        expected = ctx.get("expected_tags", "")
        return (UnknownVariantError, join_path(path, key),
                f"unrecognized variant {tag!r}; expected one of {expected}", tag)

    if err_type == "unknown_clock_event":
        return UnknownVariantError, path, error["msg"], None

    if err_type.endswith("_type") or err_type in ("is_instance_of", "model_attributes_type"):
        return WrongTypeError, path, error["msg"], None

    return InvalidValueError, path, error["msg"], None


def schema_violation_from(exc: ValidationError, base_loc: Loc = ()) -> SchemaViolation:
    """Translate a pydantic ``ValidationError`` into the first named schema error.

    All issues are attached as ``.issues`` in pydantic's order, which follows
    field declaration order.
    """
    errors = exc.errors(include_url=False)
    issues = []
    first = None
    for error in errors:
        error = dict(error, loc=tuple(base_loc) + tuple(error["loc"]))
        cls, path, message, tag = _classify(error)
        issues.append({"kind": cls.kind, "path": path, "message": message})
        if first is None:
            first = (cls, path, message, tag)

    cls, path, message, tag = first
    if cls is UnknownVariantError:
        return UnknownVariantError(path, message, tag=tag, issues=issues)
    return cls(path, message, issues=issues)


def invariant_violation_from(exc: ValidationError) -> InvariantViolation:
    """Translate a re-validation failure at encode time."""
    error = exc.errors(include_url=False)[0]
    _, path, message, _ = _classify(error)
    return InvariantViolation(path, message)
