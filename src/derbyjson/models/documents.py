"""Top-level DerbyJSON documents and game-level records.

A document's ``"type"`` selects one of a closed set of shapes, listed in
:data:`DOCUMENT_KINDS`. The mapper dispatches on that table before any
field validation happens.
"""

from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Type, Union

from pydantic import AliasChoices, Field, StrictBool, StrictStr
from typing_extensions import Literal

from ..version import SUPPORTED_SPEC_VERSIONS
from .base import DerbyModel, Note, UInt8, UInt16
from .enums import Association
from .jam import Period
from .team import League, Team, Venue


class Ruleset(DerbyModel):
    """Rules a game was played under. Durations are clock strings such as ``"30:00"``."""

    version: StrictStr = Field(..., description="Ruleset version")
    period_count: UInt8 = Field(..., alias="period-count")
    period: StrictStr = Field(..., description="Period length")
    jam: StrictStr = Field(..., description="Jam length")
    lineup: StrictStr = Field(..., description="Lineup length")
    timeout: StrictStr = Field(..., description="Team timeout length")
    timeout_count: UInt8 = Field(..., alias="timeout-count")
    official_review_count: UInt8 = Field(..., alias="official-review-count")
    official_review_retained: StrictBool = Field(..., alias="official-review-retained")
    official_review_maximum: UInt8 = Field(..., alias="official-review-maximum")
    penalty: StrictStr = Field(..., description="Penalty length")
    minors: StrictBool = Field(..., description="Whether minor penalties are in use")
    minors_per_major: UInt8 = Field(..., alias="minors-per-major")
    foulout: UInt8 = Field(..., description="Majors before a foul-out")


class Timer(DerbyModel):
    duration: UInt16 = Field(..., description="Timer length in seconds")
    counts_down: StrictBool = Field(..., description="Whether the timer counts down")
    running: StrictBool = Field(..., description="Whether the timer is running")


class Timers(DerbyModel):
    """Clock state for a game in progress."""

    countdown: Optional[Timer] = None
    period: Timer = Field(..., description="Period clock")
    halftime: Optional[Timer] = Field(
        None,
        validation_alias=AliasChoices("halftime", "haltime"),
        serialization_alias="halftime",
    )
    jam: Optional[Timer] = None


class Expulsion(DerbyModel):
    skater: StrictStr = Field(..., description="Expelled skater")
    suspension: StrictBool = Field(..., description="Whether a suspension follows")
    notes: Tuple[Note, ...] = Field(..., description="Notes on the expulsion")


class RosterDocument(DerbyModel):
    """A single team's roster."""

    object_type: Literal["roster"] = Field("roster", alias="type")
    version: Optional[StrictStr] = Field(None, description="DerbyJSON format version")
    metadata: Optional[Dict[str, Any]] = Field(None, description="Producer metadata")
    team: Team = Field(..., description="The rostered team")
    uuid: Tuple[StrictStr, ...] = ()
    notes: Tuple[Note, ...] = ()


class RostersDocument(DerbyModel):
    """Rosters for several teams, keyed by role (``home``, ``away``, ...) or name."""

    object_type: Literal["rosters"] = Field("rosters", alias="type")
    version: Optional[StrictStr] = Field(None, description="DerbyJSON format version")
    metadata: Optional[Dict[str, Any]] = Field(None, description="Producer metadata")
    teams: Dict[str, Team] = Field(..., description="Teams by key, in document order")
    uuid: Tuple[StrictStr, ...] = ()
    notes: Tuple[Note, ...] = ()
    leagues: Tuple[League, ...] = ()

    @classmethod
    def new(cls, teams: Dict[str, Team]) -> "RostersDocument":
        """Build a rosters document stamped with the current format version."""
        return cls(version=SUPPORTED_SPEC_VERSIONS[-1], teams=teams)


class GameDocument(DerbyModel):
    """A complete game: teams, the periods played, and game-level records."""

    object_type: Literal["game"] = Field("game", alias="type")
    version: Optional[StrictStr] = Field(None, description="DerbyJSON format version")
    metadata: Dict[str, Any] = Field(..., description="Producer metadata")
    teams: Dict[str, Team] = Field(..., description="Teams by key, usually home and away")
    periods: Tuple[Period, ...] = Field(..., description="Periods in order")
    ruleset: Optional[Ruleset] = None
    venue: Optional[Venue] = None
    uuid: Tuple[StrictStr, ...] = ()
    notes: Tuple[Note, ...] = Field(..., description="Game notes")
    date: StrictStr = Field(..., description="Game date")
    time: StrictStr = Field(..., description="Scheduled start time")
    end_time: StrictStr = Field(..., description="End time")
    leagues: Optional[Tuple[League, ...]] = None
    timers: Timers = Field(..., description="Clock state")
    tournament: Optional[StrictStr] = None
    host_league: Optional[StrictStr] = Field(None, alias="host-league")
    expulsions: Tuple[Expulsion, ...] = Field(..., description="Expulsions during the game")
    suspensions: Tuple[StrictStr, ...] = Field(..., description="Skaters suspended as a result")
    signatures: Tuple[Any, ...] = Field(..., description="Signature objects, kept as raw JSON")
    sanctioned: StrictBool = Field(..., description="Whether the game is sanctioned")
    association: Association = Field(..., description="Sanctioning body")


class LeagueDocument(DerbyModel):
    """League information: leagues and their teams."""

    object_type: Literal["league"] = Field("league", alias="type")
    version: Optional[StrictStr] = Field(None, description="DerbyJSON format version")
    metadata: Optional[Dict[str, Any]] = Field(None, description="Producer metadata")
    leagues: Tuple[League, ...] = Field(..., description="Leagues described")
    uuid: Tuple[StrictStr, ...] = ()
    notes: Tuple[Note, ...] = ()


Document = Union[RosterDocument, RostersDocument, GameDocument, LeagueDocument]

# Closed tag -> shape table for the top-level "type" discriminant.
DOCUMENT_KINDS: Mapping[str, Type[DerbyModel]] = MappingProxyType({
    "roster": RosterDocument,
    "rosters": RostersDocument,
    "game": GameDocument,
    "league": LeagueDocument,
})


def document_kind(doc: DerbyModel) -> str:
    """Return the ``"type"`` tag of a document value."""
    for tag, cls in DOCUMENT_KINDS.items():
        if type(doc) is cls:
            return tag
    raise TypeError(f"not a DerbyJSON document: {type(doc).__name__}")
