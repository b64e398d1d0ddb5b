"""Game-play models: jam events, jams, timeouts and periods.

Everything that happens during a jam is a jam event. Each event carries an
``"event"`` discriminant that selects its shape from a closed table
(:data:`JAM_EVENT_KINDS`); an unknown tag is a decode error.
"""

from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple, Type, Union

from pydantic import Discriminator, Field, StrictBool, StrictStr, Tag
from typing_extensions import Annotated, Literal

from .base import DerbyModel, Note, Number, Timestamp, UInt8, UInt16, UInt32
from .enums import (
    GhostPointType,
    LeaveTrackReason,
    PenaltySeverity,
    Position,
    PrematureExitReason,
    TeamType,
)


class GhostPoint(DerbyModel):
    """A point scored by means other than passing an opponent's hips."""

    skater: Optional[StrictStr] = Field(None, description="Opposing skater the point was scored on")
    ghost_point: GhostPointType = Field(..., description="Why the point was awarded")


class Involved(DerbyModel):
    """Another skater involved in a penalty."""

    skater: StrictStr = Field(..., description="Skater number")
    notes: Tuple[Note, ...] = ()


class Substitute(DerbyModel):
    """A skater serving a penalty in place of the penalized skater."""

    skater: StrictStr = Field(..., description="Substitute skater number")
    reason: StrictStr = Field(..., description="Why a substitute served")


class LineupEvent(DerbyModel):
    """One skater on the track for a jam. A typical jam has ten."""

    event: Literal["line up"] = "line up"
    skater: StrictStr = Field(..., description="Skater number")
    start_in_box: StrictBool = Field(..., description="Skater started the jam in the box")
    position: Position = Field(..., description="Position skated")


class PackLapEvent(DerbyModel):
    event: Literal["pack lap"] = "pack lap"
    timestamp: Optional[Timestamp] = None
    count: Optional[UInt8] = None


class PenaltyEvent(DerbyModel):
    """A penalty called on a skater."""

    event: Literal["penalty"] = "penalty"
    timestamp: Optional[Timestamp] = None
    skater: StrictStr = Field(..., description="Penalized skater number")
    penalty: StrictStr = Field(..., description="Penalty code")
    severity: Optional[PenaltySeverity] = None
    rescinded: Optional[StrictBool] = None
    involved: Optional[Tuple[Involved, ...]] = None
    cue: Optional[StrictStr] = None


class PassEvent(DerbyModel):
    """A scoring pass by a jammer."""

    event: Literal["pass"] = "pass"
    timestamp: Optional[Timestamp] = None
    completed: Optional[StrictBool] = None
    number: UInt8 = Field(..., description="Pass number, the initial pass being 1")
    points: Optional[UInt8] = None
    skater: Optional[StrictStr] = None
    ghost_points: Optional[Tuple[GhostPoint, ...]] = None


class StarPassEvent(DerbyModel):
    event: Literal["star pass"] = "star pass"
    timestamp: Optional[Timestamp] = None
    skater: Optional[StrictStr] = None
    team: Optional[StrictStr] = None
    completed: Optional[StrictBool] = None
    failure: Optional[StrictStr] = None


class LeadEvent(DerbyModel):
    event: Literal["lead"] = "lead"
    timestamp: Optional[Timestamp] = None
    skater: StrictStr = Field(..., description="Jammer awarded lead")


class LostLeadEvent(DerbyModel):
    event: Literal["lost lead"] = "lost lead"
    timestamp: Optional[Timestamp] = None
    skater: StrictStr = Field(..., description="Jammer who lost lead")


class CallEvent(DerbyModel):
    """The jam was called off."""

    event: Literal["call"] = "call"
    timestamp: Optional[Timestamp] = None
    skater: Optional[StrictStr] = None
    team: Optional[StrictStr] = None
    official: Optional[StrictStr] = None


class EnterBoxEvent(DerbyModel):
    event: Literal["enter box"] = "enter box"
    timestamp: Optional[Timestamp] = None
    skater: StrictStr = Field(..., description="Skater entering the box")
    duration: Optional[Number] = None
    substitute: Optional[Substitute] = None
    notes: Optional[Tuple[Note, ...]] = None


class ExitBoxEvent(DerbyModel):
    event: Literal["exit box"] = "exit box"
    timestamp: Optional[Timestamp] = None
    skater: StrictStr = Field(..., description="Skater leaving the box")
    duration: Optional[Number] = None
    premature: Optional[PrematureExitReason] = None
    no_skater: Optional[StrictBool] = Field(None, alias="no-skater")


class BoxTimeEvent(DerbyModel):
    """Box time marker. DerbyJSON v0.2 names this event but gives it no fields."""

    event: Literal["box time"] = "box time"


class InjuryEvent(DerbyModel):
    event: Literal["injury"] = "injury"
    timestamp: Optional[Timestamp] = None
    skater: StrictStr = Field(..., description="Injured skater")


class NoteEvent(DerbyModel):
    event: Literal["note"] = "note"
    note: StrictStr = Field(..., description="Note text")
    author: Optional[StrictStr] = None
    date: Optional[StrictStr] = None
    notes: Note = Field(..., description="Attached note")


class LeaveTrackEvent(DerbyModel):
    event: Literal["leave track"] = "leave track"
    timestamp: Optional[Timestamp] = None
    skater: StrictStr = Field(..., description="Skater leaving the track")
    reason: Optional[LeaveTrackReason] = None
    opposing_pass: UInt8 = Field(..., alias="opposing-pass")


class ReturnTrackEvent(DerbyModel):
    event: Literal["return track"] = "return track"
    timestamp: Optional[Timestamp] = None
    skater: StrictStr = Field(..., description="Skater returning to the track")
    opposing_pass: UInt8 = Field(..., alias="opposing-pass")


_JAM_EVENT_TYPES = (
    LineupEvent,
    PackLapEvent,
    PenaltyEvent,
    PassEvent,
    StarPassEvent,
    LeadEvent,
    LostLeadEvent,
    CallEvent,
    EnterBoxEvent,
    ExitBoxEvent,
    BoxTimeEvent,
    InjuryEvent,
    NoteEvent,
    LeaveTrackEvent,
    ReturnTrackEvent,
)

# Closed tag -> shape table for the "event" discriminant.
JAM_EVENT_KINDS: Mapping[str, Type[DerbyModel]] = MappingProxyType(
    {cls.model_fields["event"].default: cls for cls in _JAM_EVENT_TYPES}
)

JamEvent = Annotated[Union[_JAM_EVENT_TYPES], Field(discriminator="event")]


class Jam(DerbyModel):
    """The basic unit of play. Events are kept in the order recorded."""

    number: UInt16 = Field(..., description="Jam number within the period")
    timestamp: Optional[Timestamp] = None
    duration: Optional[UInt16] = Field(None, description="Jam length in seconds")
    events: Tuple[JamEvent, ...] = Field(..., description="Jam events in order")
    notes: Tuple[Note, ...] = Field(..., description="Notes on the jam")


class Timeout(DerbyModel):
    """A stoppage of the game clock: team timeout, official review or official timeout."""

    timeout: TeamType = Field(..., description="Who called the timeout")
    notes: Tuple[Note, ...] = ()
    injury: Optional[StrictStr] = Field(None, description="Injured skater, for injury timeouts")
    duration: UInt32 = Field(..., description="Length in seconds, including lineup time")
    timestamp: Optional[Timestamp] = None
    review: Optional[StrictStr] = Field(None, description="What was reviewed")
    resolution: Optional[StrictStr] = Field(None, description="Review outcome")
    retained: Optional[StrictBool] = Field(None, description="Whether the review was retained")


def _clock_event_kind(value: Any) -> Optional[str]:
    """Tell jams, timeouts and free-standing notes apart by their keys."""
    if isinstance(value, dict):
        if "timeout" in value:
            return "timeout"
        if "events" in value:
            return "jam"
        # Jams have no "note" key, so any extra "number" on a note is kept as unknown
        if "note" in value:
            return "note"
        if "number" in value:
            return "jam"
        return None
    if isinstance(value, Jam):
        return "jam"
    if isinstance(value, Timeout):
        return "timeout"
    if isinstance(value, Note):
        return "note"
    return None


# Something that happens on the period clock.
ClockEvent = Annotated[
    Union[
        Annotated[Jam, Tag("jam")],
        Annotated[Timeout, Tag("timeout")],
        Annotated[Note, Tag("note")],
    ],
    Discriminator(
        _clock_event_kind,
        custom_error_type="unknown_clock_event",
        custom_error_message="period entry is not a jam, a timeout or a note",
    ),
]


class Period(DerbyModel):
    """A period of play: jams, timeouts and notes in clock order."""

    timestamp: Optional[Timestamp] = Field(None, description="Period start")
    end: Optional[Timestamp] = Field(None, description="Period end")
    jams: Tuple[ClockEvent, ...] = Field(..., description="Jams, timeouts and notes in order")
