"""Schema mapper: DerbyJSON text to typed documents and back.

``decode`` and ``encode`` are the whole public contract. They are pure and
share no mutable state, so they are safe to call from any thread.
"""

import io
import json
from typing import IO, Any, Iterator, Optional, Type, Union

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from .config import UnknownFieldPolicy, get_settings
from .derby_logging import get_logger
from .errors import (
    DerbyJSONSyntaxError,
    InvariantViolation,
    MissingFieldError,
    SchemaViolation,
    UnexpectedDocumentError,
    UnknownFieldError,
    UnknownVariantError,
    UnsupportedVersionError,
    WrongTypeError,
    invariant_violation_from,
    join_path,
    schema_violation_from,
)
from .models import DOCUMENT_KINDS, DerbyModel, Document, RostersDocument, document_kind
from .version import SUPPORTED_SPEC_VERSIONS

logger = get_logger(__name__)

_DOCUMENT_TYPES = tuple(DOCUMENT_KINDS.values())


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard constant {name}")


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _parse(data: Union[bytes, bytearray, str]) -> Any:
    """Parse UTF-8 JSON text with the standard library parser."""
    if isinstance(data, (bytes, bytearray)):
        try:
            data = bytes(data).decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise DerbyJSONSyntaxError(f"input is not valid UTF-8 ({exc.reason})") from exc
    elif not isinstance(data, str):
        raise TypeError(f"decode() expects bytes or str, not {type(data).__name__}")

    try:
        obj = json.loads(data, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise DerbyJSONSyntaxError(exc.msg, line=exc.lineno, column=exc.colno) from exc
    except ValueError as exc:
        raise DerbyJSONSyntaxError(str(exc)) from exc
    except RecursionError as exc:
        raise DerbyJSONSyntaxError("nesting too deep") from exc

    # Lone surrogate escapes such as "\ud800" parse, but are not UTF-8 text
    try:
        json.dumps(obj, ensure_ascii=False).encode("utf-8")
    except UnicodeEncodeError as exc:
        raise DerbyJSONSyntaxError(f"string is not valid Unicode ({exc.reason})") from exc
    except RecursionError as exc:
        raise DerbyJSONSyntaxError("nesting too deep") from exc
    return obj


def _to_document(obj: Any, check_version: bool) -> Document:
    """Select the document shape from the closed tag table, then validate."""
    if not isinstance(obj, dict):
        raise WrongTypeError("", f"document must be a JSON object, got {_json_type(obj)}")
    if "type" not in obj:
        raise MissingFieldError("type", "required field is missing")

    tag = obj["type"]
    if not isinstance(tag, str):
        raise WrongTypeError("type", f"document type must be a string, got {_json_type(tag)}")
    cls = DOCUMENT_KINDS.get(tag)
    if cls is None:
        expected = ", ".join(repr(t) for t in DOCUMENT_KINDS)
        raise UnknownVariantError(
            "type", f"unrecognized document type {tag!r}; expected one of {expected}", tag=tag
        )

    version = obj.get("version")
    if check_version and isinstance(version, str) and version not in SUPPORTED_SPEC_VERSIONS:
        raise UnsupportedVersionError(
            "version",
            f"unsupported DerbyJSON version {version!r}; supported: {', '.join(SUPPORTED_SPEC_VERSIONS)}",
            version=version,
        )

    try:
        return cls.model_validate(obj, by_alias=True, by_name=False)
    except ValidationError as exc:
        raise schema_violation_from(exc) from exc


def iter_unknown_fields(value: Any, path: str = "") -> Iterator[str]:
    """Yield the path of every key the schema does not declare, in document order."""
    if isinstance(value, DerbyModel):
        for key in value.model_extra or {}:
            yield join_path(path, key)
        for name, field in type(value).model_fields.items():
            key = field.serialization_alias or field.alias or name
            yield from iter_unknown_fields(getattr(value, name, None), join_path(path, key))
    elif isinstance(value, tuple):
        for i, item in enumerate(value):
            yield from iter_unknown_fields(item, f"{path}[{i}]")
    elif isinstance(value, dict):
        for key, item in value.items():
            yield from iter_unknown_fields(item, join_path(path, key))


def _expected_tag(expect: Union[str, Type[DerbyModel]]) -> str:
    if isinstance(expect, str):
        if expect not in DOCUMENT_KINDS:
            raise ValueError(f"unknown document type {expect!r}")
        return expect
    for tag, cls in DOCUMENT_KINDS.items():
        if cls is expect:
            return tag
    raise ValueError(f"not a DerbyJSON document class: {expect!r}")


def decode(
    data: Union[bytes, bytearray, str],
    *,
    expect: Optional[Union[str, Type[DerbyModel]]] = None,
    unknown_fields: Optional[Union[str, UnknownFieldPolicy]] = None,
    check_version: Optional[bool] = None,
) -> Document:
    """Decode DerbyJSON text into a typed document.

    Args:
        data: UTF-8 JSON text, as bytes or str
        expect: Document class or ``"type"`` tag the caller requires
        unknown_fields: ``preserve`` or ``forbid``; defaults to settings
        check_version: Reject unsupported ``"version"`` values; defaults to settings

    Returns:
        The decoded document

    Raises:
        DerbyJSONSyntaxError: Input is not well-formed JSON
        SchemaViolation: Input does not match the DerbyJSON shapes; the
            subclass names the kind of failure and ``.path`` the field
        UnexpectedDocumentError: Input is a different kind than ``expect``
    """
    settings = get_settings()
    if unknown_fields is None:
        forbid = settings.is_strict()
    else:
        forbid = UnknownFieldPolicy(unknown_fields) == UnknownFieldPolicy.FORBID
    if check_version is None:
        check_version = settings.CHECK_VERSION

    obj = _parse(data)
    try:
        doc = _to_document(obj, check_version)
        if forbid:
            unknown = next(iter_unknown_fields(doc), None)
            if unknown is not None:
                raise UnknownFieldError(unknown, "field is not part of the DerbyJSON schema")
    except SchemaViolation as exc:
        logger.debug("DerbyJSON decode failed", error=exc.kind, path=exc.path)
        raise

    kind = document_kind(doc)
    if expect is not None:
        wanted = _expected_tag(expect)
        if kind != wanted:
            raise UnexpectedDocumentError(wanted, kind)

    logger.debug("DerbyJSON document decoded", kind=kind, size=len(data))
    return doc


def _check_invariants(doc: Document, check_version: bool) -> None:
    """Re-validate a value tree that may have bypassed validation (``model_construct``)."""
    if check_version and doc.version is not None and doc.version not in SUPPORTED_SPEC_VERSIONS:
        raise InvariantViolation("version", f"unsupported DerbyJSON version {doc.version!r}")
    try:
        type(doc).model_validate(
            doc.model_dump(by_alias=True, warnings=False), by_alias=True, by_name=False
        )
    except ValidationError as exc:
        raise invariant_violation_from(exc) from exc
    except PydanticSerializationError as exc:
        raise InvariantViolation("", f"value cannot be serialized: {exc}") from exc


def encode(doc: Document, *, indent: Optional[int] = None, validate: Optional[bool] = None) -> bytes:
    """Encode a document as UTF-8 DerbyJSON text.

    Absent optional fields are omitted; unknown fields kept from decoding
    are written back. ``decode(encode(doc)) == doc`` for every valid doc.

    Raises:
        TypeError: ``doc`` is not a DerbyJSON document
        InvariantViolation: ``doc`` breaks a schema invariant
    """
    if not isinstance(doc, _DOCUMENT_TYPES):
        raise TypeError(f"encode() expects a DerbyJSON document, not {type(doc).__name__}")

    settings = get_settings()
    if validate is None:
        validate = settings.VALIDATE_ON_ENCODE
    if indent is None:
        indent = settings.ENCODE_INDENT

    if validate:
        _check_invariants(doc, settings.CHECK_VERSION)

    try:
        data = doc.model_dump(mode="json", by_alias=True, warnings=False)
    except PydanticSerializationError as exc:
        raise InvariantViolation("", f"value cannot be serialized: {exc}") from exc

    separators = (",", ":") if indent is None else None
    try:
        out = json.dumps(
            data, ensure_ascii=False, allow_nan=False, indent=indent, separators=separators
        ).encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvariantViolation("", f"text is not encodable as UTF-8 ({exc.reason})") from exc
    except ValueError as exc:
        raise InvariantViolation("", f"value cannot be written as JSON: {exc}") from exc

    logger.debug("DerbyJSON document encoded", kind=document_kind(doc), size=len(out))
    return out


def load(fp: IO[Any], **kwargs: Any) -> Document:
    """Decode a document read from a binary or text file object."""
    return decode(fp.read(), **kwargs)


def dump(doc: Document, fp: IO[Any], **kwargs: Any) -> None:
    """Encode a document and write it to a binary or text file object."""
    data = encode(doc, **kwargs)
    if isinstance(fp, io.TextIOBase):
        fp.write(data.decode("utf-8"))
    else:
        fp.write(data)


def load_roster(fp: IO[Any], **kwargs: Any) -> RostersDocument:
    """Load a multi-team rosters document, rejecting any other kind."""
    return load(fp, expect=RostersDocument, **kwargs)
