"""
Build naming test suite: catalog matching, archetype rules, playstyle override, precedence.
"""
from __future__ import annotations

import pytest

from buildlab.models import PreferenceRecord
from buildlab.naming import (
    find_official_build_name,
    generate_build_name,
    resolve_build_name,
    similarity_score,
)
from buildlab.vocabulary import OFFICIAL_BUILD_ATTRIBUTE_MAPPING

from conftest import make_caps


def _entry(name: str, position: str, attributes: dict[str, int], delta: int = 0) -> dict:
    entry = {"name": name, "position": position}
    for key, catalog_key in OFFICIAL_BUILD_ATTRIBUTE_MAPPING.items():
        entry[catalog_key] = attributes[key] + delta
    return entry


def _prefs(play_style: str | None) -> PreferenceRecord:
    return PreferenceRecord(position="PG", play_style=play_style)


# ---------- Catalog matching ----------


class TestCatalogMatch:
    def test_identical_build_matches(self):
        caps = make_caps(75)
        catalog = [_entry("Glass Cleaner", "pg", caps.attributes)]
        assert similarity_score(caps, catalog[0]) == 10
        assert find_official_build_name(caps, catalog) == "Glass Cleaner"

    @pytest.mark.parametrize("delta,expected", [(5, 5), (-7, 5), (10, 2), (16, 0), (3, 10)])
    def test_score_bands(self, delta, expected):
        caps = make_caps(75)
        assert similarity_score(caps, _entry("X", "pg", caps.attributes, delta)) == expected

    def test_below_threshold_rejected(self):
        caps = make_caps(75)
        catalog = [_entry("Far Away", "pg", caps.attributes, delta=10)]
        assert find_official_build_name(caps, catalog) is None

    def test_only_same_position_considered(self):
        caps = make_caps(75, position="SF")
        catalog = [_entry("Point Twin", "pg", caps.attributes), _entry("Wing", "sf", caps.attributes, delta=5)]
        assert find_official_build_name(caps, catalog) == "Wing"

    def test_unset_position_matches_point_guards(self):
        caps = make_caps(75, position=None)
        catalog = [_entry("Center", "c", caps.attributes), _entry("Guard", "pg", caps.attributes)]
        assert find_official_build_name(caps, catalog) == "Guard"

    def test_best_score_wins_and_ties_keep_first(self):
        caps = make_caps(75)
        catalog = [
            _entry("Close", "pg", caps.attributes, delta=5),
            _entry("First Exact", "pg", caps.attributes),
            _entry("Second Exact", "pg", caps.attributes),
        ]
        assert find_official_build_name(caps, catalog) == "First Exact"

    def test_entry_without_comparable_attributes_scores_zero(self):
        caps = make_caps(75)
        assert similarity_score(caps, {"name": "Empty", "position": "pg"}) == 0

    @pytest.mark.parametrize("catalog", [None, [], {"buildNames": []}, "pg"])
    def test_bad_catalog(self, catalog):
        assert find_official_build_name(make_caps(75), catalog) is None


# ---------- Rule-based names ----------


class TestArchetypes:
    @pytest.mark.parametrize(
        "overrides,expected",
        [
            ({"threePoint": 85, "ballHandle": 85}, "Offensive Threat"),
            ({"threePoint": 85, "perimeterDefense": 85}, "3&D Wing"),
            ({"drivingDunk": 88, "perimeterDefense": 82}, "Two-Way Finisher"),
            ({"perimeterDefense": 88, "steal": 88}, "Lockdown Defender"),
            ({"threePoint": 92}, "Sharpshooter"),
            ({"ballHandle": 92, "passAccuracy": 88}, "Playmaker"),
            ({"drivingDunk": 95}, "Slasher"),
            ({"interiorDefense": 90, "block": 90, "defensiveRebound": 90}, "Paint Beast"),
            ({"postControl": 90}, "Post Scorer"),
            ({"drivingDunk": 82, "threePoint": 82}, "Scoring Machine"),
            ({}, "All-Around Player"),
        ],
    )
    def test_rules_in_priority_order(self, overrides, expected):
        caps = make_caps(50, **overrides)
        assert generate_build_name(caps, _prefs(None)) == expected

    def test_first_rule_wins(self):
        # Matches Offensive Threat and Sharpshooter; Offensive Threat comes first.
        caps = make_caps(50, threePoint=95, ballHandle=85)
        assert generate_build_name(caps, None) == "Offensive Threat"


class TestPlaystyleOverride:
    @pytest.mark.parametrize(
        "style,overrides,expected",
        [
            ("sharpshooter", {"perimeterDefense": 60}, "Sharpshooter"),
            ("catch and shoot", {"perimeterDefense": 85}, "3&D Wing"),
            ("slasher", {"perimeterDefense": 60}, "Slasher"),
            ("rim finisher", {"perimeterDefense": 80}, "Two-Way Finisher"),
            ("playmaker", {}, "Playmaker"),
            ("pass-first guard", {}, "Playmaker"),
            ("lockdown", {}, "Lockdown Defender"),
            ("defensive anchor", {}, "Lockdown Defender"),
            ("post scorer", {}, "Paint Beast"),
            ("stretch center", {}, "Paint Beast"),
        ],
    )
    def test_override(self, style, overrides, expected):
        caps = make_caps(50, **overrides)
        assert generate_build_name(caps, _prefs(style)) == expected

    def test_override_beats_rules(self):
        caps = make_caps(50, postControl=95)
        assert generate_build_name(caps, _prefs("lockdown defender")) == "Lockdown Defender"

    def test_unrecognised_style_falls_back_to_rules(self):
        caps = make_caps(50, postControl=95)
        assert generate_build_name(caps, _prefs("two-way wing")) == "Post Scorer"


# ---------- Precedence ----------


class TestPrecedence:
    def test_catalog_beats_rules_and_override(self):
        caps = make_caps(75, threePoint=95)
        catalog = [_entry("Shot Creator", "pg", caps.attributes)]
        assert resolve_build_name(caps, _prefs("sharpshooter"), catalog) == "Shot Creator"

    def test_oracle_name_used_without_catalog_match(self):
        caps = make_caps(75, build_name_guess="Microwave Scorer")
        assert resolve_build_name(caps, _prefs("sharpshooter"), []) == "Microwave Scorer"

    def test_generated_name_last(self):
        caps = make_caps(75, threePoint=95, perimeterDefense=60)
        assert resolve_build_name(caps, _prefs("sharpshooter"), []) == "Sharpshooter"
