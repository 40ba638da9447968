"""
Oracle payload validation: preference analysis repair and build generation clamping.
"""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from buildlab.creator.schemas import AnalysisPayload, BuildPayload, parse_position
from buildlab.vocabulary import ATTRIBUTE_KEYS

from conftest import make_attributes


class TestParsePosition:
    @pytest.mark.parametrize(
        "raw,expected",
        [("PG", "PG"), ("c", "C"), (" sf ", "SF"), ("Point Guard", "PG"), ("centre", "C")],
    )
    def test_known(self, raw, expected):
        assert parse_position(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "wing", 3, "G"])
    def test_unknown(self, raw):
        assert parse_position(raw) is None


class TestAnalysisPayload:
    def test_full_payload(self):
        record = AnalysisPayload.model_validate({
            "position": "point guard",
            "playStyle": "sharpshooter",
            "keyAttributes": ["threePoint", "ballHandle"],
            "physicalPreferences": {"height": "6'2\"", "weight": None, "wingspan": ""},
            "badges": ["Deadeye"],
            "gameMode": "Rec",
        }).to_record()
        assert record.position == "PG"
        assert record.play_style == "sharpshooter"
        assert record.key_attributes == ("threePoint", "ballHandle")
        assert record.physical_preferences.height == "6'2\""
        assert record.physical_preferences.weight is None
        assert record.physical_preferences.wingspan is None
        assert record.badges == ("Deadeye",)
        assert record.game_mode == "Rec"

    def test_empty_object_gives_empty_record(self):
        record = AnalysisPayload.model_validate({}).to_record()
        assert record.position is None
        assert record.play_style is None
        assert record.key_attributes == ()
        assert record.badges == ()
        assert record.physical_preferences.height is None

    def test_repairs_loose_shapes(self):
        record = AnalysisPayload.model_validate({
            "position": "wing",
            "playStyle": "  ",
            "keyAttributes": "shooting",
            "physicalPreferences": "tall",
            "badges": None,
        }).to_record()
        assert record.position is None
        assert record.play_style is None
        assert record.key_attributes == ("shooting",)
        assert record.physical_preferences.height is None
        assert record.badges == ()

    def test_to_dict_uses_camel_case(self):
        d = AnalysisPayload.model_validate({"playStyle": "slasher"}).to_record().to_dict()
        assert d["playStyle"] == "slasher"
        assert set(d) == {"position", "playStyle", "keyAttributes", "physicalPreferences", "badges", "gameMode"}


class TestBuildPayload:
    def _payload(self, **extra):
        data = make_attributes(80)
        data.update({"position": "SG", "height": 77, "weight": 200, "wingspan": 82})
        data.update(extra)
        return data

    def test_valid_payload(self):
        caps = BuildPayload.model_validate(self._payload(buildName="Two-Way Sniper")).to_caps("PG", 74)
        assert caps.position == "SG"
        assert caps.height == 77
        assert caps.weight == 200
        assert caps.build_name_guess == "Two-Way Sniper"
        assert set(caps.attributes) == set(ATTRIBUTE_KEYS)
        assert all(v == 80 for v in caps.attributes.values())

    def test_out_of_range_ratings_are_clamped(self):
        caps = BuildPayload.model_validate(self._payload(threePoint=120, block=3)).to_caps(None, None)
        assert caps.attributes["threePoint"] == 99
        assert caps.attributes["block"] == 25

    def test_numeric_strings_and_floats_accepted(self):
        caps = BuildPayload.model_validate(self._payload(threePoint="88", steal=71.6)).to_caps(None, None)
        assert caps.attributes["threePoint"] == 88
        assert caps.attributes["steal"] == 72

    def test_missing_attribute_rejected(self):
        data = self._payload()
        del data["stamina"]
        with pytest.raises(ValidationError):
            BuildPayload.model_validate(data)

    @pytest.mark.parametrize("bad", ["high", None, True, [90]])
    def test_non_numeric_rating_rejected(self, bad):
        with pytest.raises(ValidationError):
            BuildPayload.model_validate(self._payload(threePoint=bad))

    def test_height_string_parsed(self):
        caps = BuildPayload.model_validate(self._payload(height="6'2\"", weight="190 lbs")).to_caps(None, None)
        assert caps.height == 74
        assert caps.weight == 190

    def test_fallbacks_when_position_and_height_missing(self):
        data = self._payload()
        del data["position"]
        del data["height"]
        caps = BuildPayload.model_validate(data).to_caps("PF", 82)
        assert caps.position == "PF"
        assert caps.height == 82

    def test_badge_suggestions_ignored(self):
        payload = BuildPayload.model_validate(self._payload(badges={"Deadeye": "Gold"}))
        assert "badges" not in payload.model_dump()

    def test_caps_attributes_are_read_only(self):
        caps = BuildPayload.model_validate(self._payload()).to_caps(None, None)
        with pytest.raises(TypeError):
            caps.attributes["threePoint"] = 99
        assert caps.attributes["threePoint"] == 80
