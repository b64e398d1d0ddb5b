"""Base model and shared value types for DerbyJSON objects."""

from typing import Any, ClassVar, Dict, Optional, Tuple, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainValidator,
    SerializerFunctionWrapHandler,
    StrictStr,
    model_serializer,
    model_validator,
)
from pydantic_core import PydanticCustomError
from typing_extensions import Annotated


def _json_number(v: Any) -> Union[int, float]:
    # bool is an int subclass, but JSON true/false are not numbers
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise PydanticCustomError("number_type", "Input should be a JSON number")
    return v


# Any JSON number; ints stay ints and floats stay floats.
Number = Annotated[Union[int, float], PlainValidator(_json_number)]

UInt8 = Annotated[int, Field(strict=True, ge=0, le=255)]
UInt16 = Annotated[int, Field(strict=True, ge=0, le=65535)]
UInt32 = Annotated[int, Field(strict=True, ge=0, le=4294967295)]


class DerbyModel(BaseModel):
    """Immutable base for every DerbyJSON object.

    Unknown keys are kept in ``model_extra`` and written back on encode.
    Optional fields left as ``None`` are omitted from the output.

    Immutability is shallow. Fields cannot be reassigned and sequences are
    tuples, but mapping fields (``teams``, ``metadata``) and ``model_extra``
    are plain dicts, so values holding them are not hashable and should be
    treated as read-only.
    """

    model_config = ConfigDict(
        frozen=True,
        extra='allow',
        populate_by_name=True,
    )

    @model_serializer(mode='wrap')
    def _omit_absent_fields(self, handler: SerializerFunctionWrapHandler) -> Dict[str, Any]:
        data = handler(self)
        for name, field in type(self).model_fields.items():
            if getattr(self, name, None) is None:
                data.pop(field.serialization_alias or field.alias or name, None)
                data.pop(name, None)
        return data


class Note(DerbyModel):
    """A note about something that happened.

    Notes may be attached to many objects in a document, and may also stand
    on their own between jams in a period.
    """

    note: StrictStr = Field(..., description="Note text")
    author: Optional[StrictStr] = Field(None, description="Who wrote the note")


class Timestamp(DerbyModel):
    """When something happened, in exactly one of five clocks.

    Encoded as a one-key object: ``{"wall": "2015-06-13T19:04:00"}``,
    ``{"epoch": 1434222240}``, ``{"period": "12:31"}``, ``{"seconds": 451}``
    or ``{"jam": 35}``.
    """

    wall: Optional[StrictStr] = Field(None, description="Wall-clock date/time")
    epoch: Optional[Number] = Field(None, description="Unix epoch seconds")
    period: Optional[StrictStr] = Field(None, description="Period clock reading")
    seconds: Optional[Number] = Field(None, description="Seconds into the period")
    jam: Optional[Number] = Field(None, description="Seconds into the jam")

    CLOCKS: ClassVar[Tuple[str, ...]] = ('wall', 'epoch', 'period', 'seconds', 'jam')

    @model_validator(mode='after')
    def exactly_one_clock(self) -> 'Timestamp':
        """Require exactly one clock to be set."""
        present = [name for name in self.CLOCKS if getattr(self, name) is not None]
        if len(present) != 1:
            raise ValueError(
                f"timestamp must carry exactly one of {', '.join(self.CLOCKS)} (got {len(present)})"
            )
        return self

    @property
    def kind(self) -> str:
        """Name of the clock this timestamp uses."""
        return next(name for name in self.CLOCKS if getattr(self, name) is not None)

    @property
    def value(self) -> Union[str, int, float]:
        return getattr(self, self.kind)
