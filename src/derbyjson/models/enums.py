"""Enumerations for DerbyJSON values."""

from enum import Enum
from typing import Any, Optional


class Position(str, Enum):
    """A skater's position in a jam."""

    JAMMER = "jammer"
    PIVOT = "pivot"
    BLOCKER = "blocker"


class PenaltySeverity(str, Enum):
    """Penalty severity."""

    NO = "no"
    MINOR = "minor"
    MAJOR = "major"
    EXPULSION = "expulsion"


class PrematureExitReason(str, Enum):
    """Why a skater left the penalty box early.

    Officiating error, the skater leaving early, a rescinded penalty, or a
    skater who reported to the box by mistake.
    """

    OFFICIAL = "official"
    SKATER = "skater"
    RESCINDED = "rescinded"
    MISTAKE = "mistake"


class LeaveTrackReason(str, Enum):
    """Why a skater left the track mid-jam."""

    PENALTY = "penalty"
    INJURY = "injury"
    MALFUNCTION = "malfunction"
    OTHER = "other"

    @classmethod
    def _missing_(cls, value: Any) -> Optional["LeaveTrackReason"]:
        """Accept the misspelling written by early DerbyJSON producers."""
        if isinstance(value, str) and value.strip().lower() == "malfuction":
            return cls.MALFUNCTION
        return None


class GhostPointType(str, Enum):
    """Type of ghost point.

    L: lap of the jammer, J: jammer in box, B: blocker in box, P: pivot in
    box, N: not on the track, O: out of play, G: unknown cause.
    """

    L = "L"
    J = "J"
    B = "B"
    P = "P"
    N = "N"
    O = "O"
    G = "G"


class TeamType(str, Enum):
    """Who called a timeout."""

    HOME = "Home"
    AWAY = "Away"
    OFFICIALS = "Officials"

    @classmethod
    def _missing_(cls, value: Any) -> Optional["TeamType"]:
        """Handle lower-case and singular spellings."""
        if isinstance(value, str):
            team_map = {
                "home": cls.HOME,
                "away": cls.AWAY,
                "officials": cls.OFFICIALS,
                "official": cls.OFFICIALS,
            }
            return team_map.get(value.strip().lower())
        return None


class TeamLevel(str, Enum):
    """Team level within its league."""

    ALL_STAR = "All Star"
    B = "B"
    C = "C"
    REC = "Rec"
    OFFICIALS = "Officials"
    HOME = "Home"
    ADHOC = "Adhoc"


class Association(str, Enum):
    """Governing body."""

    WFTDA = "WFTDA"
    MRDA = "MRDA"
    JRDA = "JRDA"
    OTHER = "Other"
