"""Team, roster, league and venue models."""

from typing import Optional, Tuple

from pydantic import AliasChoices, Field, StrictBool, StrictStr

from .base import DerbyModel, Note, UInt8
from .enums import Association, TeamLevel


class Logo(DerbyModel):
    """A team, league or venue logo.

    Each field holds the URL of one size/style. If there is only one
    variant it goes in ``url``.
    """

    url: Optional[StrictStr] = None
    small: Optional[StrictStr] = None
    medium: Optional[StrictStr] = None
    large: Optional[StrictStr] = None
    small_dark: Optional[StrictStr] = None
    medium_dark: Optional[StrictStr] = None
    large_dark: Optional[StrictStr] = None
    small_light: Optional[StrictStr] = None
    medium_light: Optional[StrictStr] = None
    large_light: Optional[StrictStr] = None
    small_greyscale: Optional[StrictStr] = None
    medium_greyscale: Optional[StrictStr] = None
    large_greyscale: Optional[StrictStr] = None


class Certification(DerbyModel):
    """An official's or skater's certification."""

    association: Association = Field(..., description="Certifying body")
    certification: StrictStr = Field(..., description="Certification name")
    level: Optional[UInt8] = Field(None, description="Certification level")
    endorsement: Optional[StrictStr] = Field(None, description="Endorsement")


class Skater(DerbyModel):
    """A person on a roster, skater or official."""

    name: StrictStr = Field(..., min_length=1, description="Derby name")
    # Derby numbers are strings: "00", "3.14", "R2D2" are all valid
    number: Optional[StrictStr] = Field(None, description="Skater (or official) number")
    league: Optional[StrictStr] = Field(None, description="League name")
    certifications: Optional[Tuple[Certification, ...]] = Field(None, description="Certifications held")
    legal: Optional[StrictStr] = Field(None, description="Legal name")
    roles: Tuple[StrictStr, ...] = Field(default=(), description="Roles/positions on the team")
    skated: Optional[StrictBool] = Field(None, description="Whether the skater skated in the game")
    uuid: Optional[Tuple[StrictStr, ...]] = Field(None, description="Identifiers")
    insurance: Optional[Tuple[StrictStr, ...]] = Field(None, description="Insurance numbers")


class Team(DerbyModel):
    """A team: a named, ordered roster of skaters or officials."""

    # May be empty for a team that is the only member of its league.
    name: StrictStr = Field(..., description="Team name, unique within the league")
    league: Optional[StrictStr] = Field(None, description="League name")
    abbreviation: Optional[StrictStr] = Field(None, description="Short team name")
    uuid: Tuple[StrictStr, ...] = Field(default=(), description="Team identifiers")
    skaters: Tuple[Skater, ...] = Field(
        ...,
        validation_alias=AliasChoices("skaters", "persons"),
        serialization_alias="skaters",
        description="Roster in roster order",
    )
    level: Optional[TeamLevel] = Field(None, description="Team level")
    date: Optional[StrictStr] = Field(None, description="Date as of which this roster is current")
    color: Optional[StrictStr] = Field(None, description="Team color")
    logo: Optional[Logo] = Field(None, description="Team logo")


class Venue(DerbyModel):
    """Where a game is played."""

    name: StrictStr = Field(..., description="Venue name")
    city: StrictStr = Field(..., description="City")
    state: StrictStr = Field(..., description="State or province")
    url: Optional[StrictStr] = None
    country: Optional[StrictStr] = None
    email: Optional[StrictStr] = None
    fax: Optional[StrictStr] = None
    otheraddr: Optional[StrictStr] = None
    phone: Optional[StrictStr] = None
    pob: Optional[StrictStr] = None
    postcode: Optional[StrictStr] = None
    street: Optional[StrictStr] = None
    notes: Tuple[Note, ...] = ()
    uuid: Tuple[StrictStr, ...] = ()
    logo: Tuple[Logo, ...] = ()


class League(DerbyModel):
    """A league: a collection of teams."""

    name: StrictStr = Field(..., description="League name")
    abbreviation: Optional[StrictStr] = Field(None, description="Short league name")
    uuid: Optional[Tuple[StrictStr, ...]] = Field(None, description="League identifiers")
    venue: Optional[Venue] = Field(None, description="Home venue")
    teams: Tuple[Team, ...] = Field(..., description="Teams in the league")
    logo: Optional[Logo] = Field(None, description="League logo")
