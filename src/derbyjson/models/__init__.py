"""Pydantic models mirroring the DerbyJSON v0.2 object graph."""

from .enums import *
from .base import DerbyModel, Note, Number, Timestamp, UInt8, UInt16, UInt32
from .team import Certification, League, Logo, Skater, Team, Venue
from .jam import (
    JAM_EVENT_KINDS,
    BoxTimeEvent,
    CallEvent,
    ClockEvent,
    EnterBoxEvent,
    ExitBoxEvent,
    GhostPoint,
    InjuryEvent,
    Involved,
    Jam,
    JamEvent,
    LeadEvent,
    LeaveTrackEvent,
    LineupEvent,
    LostLeadEvent,
    NoteEvent,
    PackLapEvent,
    PassEvent,
    Period,
    PenaltyEvent,
    ReturnTrackEvent,
    StarPassEvent,
    Substitute,
    Timeout,
)
from .documents import (
    DOCUMENT_KINDS,
    Document,
    Expulsion,
    GameDocument,
    LeagueDocument,
    RosterDocument,
    RostersDocument,
    Ruleset,
    Timer,
    Timers,
    document_kind,
)

__all__ = [
    # Enums
    "Position",
    "PenaltySeverity",
    "PrematureExitReason",
    "LeaveTrackReason",
    "GhostPointType",
    "TeamType",
    "TeamLevel",
    "Association",
    # Shared
    "DerbyModel",
    "Note",
    "Number",
    "Timestamp",
    "UInt8",
    "UInt16",
    "UInt32",
    # Teams
    "Certification",
    "League",
    "Logo",
    "Skater",
    "Team",
    "Venue",
    # Game play
    "JAM_EVENT_KINDS",
    "JamEvent",
    "LineupEvent",
    "PackLapEvent",
    "PenaltyEvent",
    "PassEvent",
    "StarPassEvent",
    "LeadEvent",
    "LostLeadEvent",
    "CallEvent",
    "EnterBoxEvent",
    "ExitBoxEvent",
    "BoxTimeEvent",
    "InjuryEvent",
    "NoteEvent",
    "LeaveTrackEvent",
    "ReturnTrackEvent",
    "GhostPoint",
    "Involved",
    "Substitute",
    "Jam",
    "Timeout",
    "ClockEvent",
    "Period",
    # Documents
    "DOCUMENT_KINDS",
    "Document",
    "document_kind",
    "RosterDocument",
    "RostersDocument",
    "GameDocument",
    "LeagueDocument",
    "Ruleset",
    "Timer",
    "Timers",
    "Expulsion",
]
