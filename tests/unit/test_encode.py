"""Tests for encoding documents and the round-trip law."""

import io
import json

import pytest

from derbyjson import (
    EncodeError,
    InvariantViolation,
    decode,
    dump,
    encode,
    load,
    load_roster,
)
from derbyjson.models import (
    GameDocument,
    Jam,
    LeadEvent,
    LineupEvent,
    NoteEvent,
    Note,
    PassEvent,
    Period,
    Position,
    RosterDocument,
    RostersDocument,
    Skater,
    Team,
    TeamType,
    Timeout,
    Timer,
    Timers,
    Timestamp,
)


def _roster(*skaters, **team_fields):
    team_fields.setdefault("name", "Gotham Girls")
    return RosterDocument(team=Team(skaters=list(skaters), **team_fields))


class TestRoundTrip:
    """decode(encode(doc)) == doc."""

    def test_gotham_roster(self, gotham_roster):
        """Test the reference roster round-trips."""
        doc = decode(gotham_roster)
        assert decode(encode(doc)) == doc

    def test_rosters_file(self, rosters_bytes):
        """Test the sample rosters document round-trips."""
        doc = decode(rosters_bytes)
        assert decode(encode(doc)) == doc

    def test_game_file(self, game_bytes):
        """Test the full game document round-trips."""
        doc = decode(game_bytes)
        again = decode(encode(doc))

        assert again == doc
        assert isinstance(again.periods[0].jams[0].events[7].duration, int)
        assert isinstance(again.periods[0].jams[0].events[8].duration, float)

    def test_constructed_roster(self):
        """Test a roster built in code round-trips."""
        doc = _roster(
            Skater(name="Bonnie Thunders", number="340", roles=["jammer"]),
            Skater(name="Fisti Cuffs", number="1919"),
            uuid=["urn:uuid:1"],
        )
        assert decode(encode(doc)) == doc

    def test_constructed_game(self):
        """Test a game built in code round-trips."""
        team = Team(name="Home", skaters=[Skater(name="A", number="1")])
        jam = Jam(
            number=1,
            timestamp=Timestamp(period="30:00"),
            events=[
                LineupEvent(skater="1", start_in_box=False, position=Position.JAMMER),
                LeadEvent(skater="1"),
                PassEvent(number=2, points=4),
                NoteEvent(note="checked", notes=Note(note="ok")),
            ],
            notes=[],
        )
        doc = GameDocument(
            version="0.2",
            metadata={},
            teams={"home": team, "away": team},
            periods=[Period(jams=[jam, Timeout(timeout=TeamType.AWAY, duration=60), Note(note="x")])],
            notes=[],
            date="2015-06-13",
            time="19:00",
            end_time="21:00",
            timers=Timers(period=Timer(duration=1800, counts_down=True, running=False)),
            expulsions=[],
            suspensions=[],
            signatures=[],
            sanctioned=False,
            association="MRDA",
        )
        assert decode(encode(doc)) == doc

    def test_unknown_fields_round_trip(self, gotham_roster):
        """Test preserved unknown fields are written back."""
        data = json.loads(gotham_roster)
        data["producer_build"] = 7
        data["team"]["mascot"] = None
        doc = decode(json.dumps(data))

        out = json.loads(encode(doc))
        assert out["producer_build"] == 7
        assert out["team"]["mascot"] is None
        assert decode(encode(doc)) == doc


class TestEncodedShape:
    """What the emitted JSON looks like."""

    def test_skater_order_in_output(self):
        """Test roster order is reproduced in the JSON array."""
        doc = _roster(Skater(name="A"), Skater(name="B"), Skater(name="C"))
        out = json.loads(encode(doc))
        assert [s["name"] for s in out["team"]["skaters"]] == ["A", "B", "C"]

    def test_absent_optionals_omitted(self, gotham_roster):
        """Test None-valued optional fields are left out."""
        out = json.loads(encode(decode(gotham_roster)))

        assert "version" not in out
        assert "metadata" not in out
        assert "league" not in out["team"]
        assert out["team"]["skaters"][0] == {"name": "Bonnie Thunders", "number": "39", "roles": []}

    def test_compact_by_default(self, gotham_roster):
        """Test the default output is compact and starts with the type tag."""
        out = encode(decode(gotham_roster))
        assert out.startswith(b'{"type":"roster","team":{"name":"Gotham Girls"')

    def test_indent(self, gotham_roster):
        """Test indented output."""
        out = encode(decode(gotham_roster), indent=2)
        assert b'\n  "type": "roster"' in out

    def test_indent_from_environment(self, gotham_roster, monkeypatch):
        """Test the indent default comes from settings."""
        monkeypatch.setenv("DERBYJSON_ENCODE_INDENT", "4")
        out = encode(decode(gotham_roster))
        assert b'\n    "type": "roster"' in out

    def test_json_keys(self, game_bytes):
        """Test hyphenated keys, the skaters key and legacy aliases on output."""
        data = json.loads(game_bytes)
        data["timers"]["haltime"] = {"duration": 900, "counts_down": True, "running": False}
        out = json.loads(encode(decode(json.dumps(data))))

        assert out["host-league"] == "Gotham Girls Roller Derby"
        assert out["ruleset"]["period-count"] == 2
        assert "halftime" in out["timers"] and "haltime" not in out["timers"]
        assert "countdown" not in out["timers"]
        assert out["periods"][0]["jams"][0]["events"][8]["no-skater"] is False
        assert out["periods"][0]["jams"][3]["events"][2]["opposing-pass"] == 1

    def test_persons_written_as_skaters(self, rosters_bytes):
        """Test input using "persons" is written with "skaters"."""
        out = json.loads(encode(decode(rosters_bytes)))
        assert "persons" not in out["teams"]["home"]
        assert len(out["teams"]["home"]["skaters"]) == 4

    def test_timestamp_shape(self):
        """Test timestamps are one-key objects."""
        doc = _roster()
        jam = Jam(number=3, timestamp=Timestamp(epoch=1434222240), events=[], notes=[])
        assert json.loads(jam.model_dump_json(by_alias=True))["timestamp"] == {"epoch": 1434222240}
        assert json.loads(encode(doc))["team"]["skaters"] == []

    def test_legacy_spelling_normalized(self, game_bytes):
        """Test the "malfuction" spelling is written back correctly."""
        data = json.loads(game_bytes)
        data["periods"][0]["jams"][3]["events"][2]["reason"] = "malfuction"
        out = json.loads(encode(decode(json.dumps(data))))
        assert out["periods"][0]["jams"][3]["events"][2]["reason"] == "malfunction"

    def test_new_rosters_document(self):
        """Test RostersDocument.new stamps the current format version."""
        doc = RostersDocument.new({"home": Team(name="", skaters=[Skater(name="A", number="1")])})
        out = json.loads(encode(doc))

        assert out["version"] == "0.2"
        assert out["type"] == "rosters"
        assert out["teams"]["home"]["name"] == ""


class TestInvariants:
    """Values that bypassed validation are caught before encoding."""

    def test_empty_skater_name(self):
        """Test a constructed skater with an empty name."""
        bad = Skater.model_construct(name="", number="7")
        doc = _roster(bad)

        with pytest.raises(InvariantViolation) as exc_info:
            encode(doc)
        assert exc_info.value.path == "team.skaters[0].name"
        assert isinstance(exc_info.value, EncodeError)

    def test_validation_can_be_skipped(self):
        """Test re-validation can be switched off."""
        doc = _roster(Skater.model_construct(name="", number="7"))
        out = json.loads(encode(doc, validate=False))
        assert out["team"]["skaters"][0]["name"] == ""

    def test_missing_required_field(self):
        """Test a constructed team without a roster."""
        doc = RosterDocument.model_construct(team=Team.model_construct(name="T"))

        with pytest.raises(InvariantViolation) as exc_info:
            encode(doc)
        assert exc_info.value.path == "team.skaters"

    def test_unsupported_version(self):
        """Test encoding refuses a version this package does not write."""
        doc = RosterDocument(version="9.9", team=Team(name="T", skaters=[]))

        with pytest.raises(InvariantViolation) as exc_info:
            encode(doc)
        assert exc_info.value.path == "version"

    def test_not_a_document(self):
        """Test encode only accepts documents."""
        with pytest.raises(TypeError):
            encode(Team(name="T", skaters=[]))
        with pytest.raises(TypeError):
            encode({"type": "roster"})


class TestFileHelpers:
    """load, dump and load_roster."""

    def test_dump_and_load_binary(self, gotham_roster):
        """Test a binary stream round trip."""
        doc = decode(gotham_roster)
        buf = io.BytesIO()
        dump(doc, buf)
        buf.seek(0)
        assert load(buf) == doc

    def test_dump_and_load_text(self, gotham_roster):
        """Test a text stream round trip."""
        doc = decode(gotham_roster)
        buf = io.StringIO()
        dump(doc, buf)
        buf.seek(0)
        assert load(buf) == doc

    def test_load_roster_file(self, data_dir):
        """Test loading the rosters sample from disk."""
        with open(data_dir / "rosters.json", "rb") as fp:
            doc = load_roster(fp)
        assert isinstance(doc, RostersDocument)
        assert len(doc.teams) == 2

    def test_load_roster_rejects_games(self, data_dir):
        """Test load_roster refuses other document kinds."""
        from derbyjson import UnexpectedDocumentError

        with open(data_dir / "game.json", "rb") as fp:
            with pytest.raises(UnexpectedDocumentError):
                load_roster(fp)
