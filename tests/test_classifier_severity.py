"""Tests for category-specific severity rules."""

import pytest

from civicscan.classifier.severity import max_confidence_for, score_severity
from civicscan.model import Category, LabelAnnotation, Severity


def labels(*descriptions, confidence=0.9):
    return [LabelAnnotation(d, confidence) for d in descriptions]


class TestPothole:
    @pytest.mark.parametrize("names,expected", [
        (("Sinkhole",), Severity.SEVERE),
        (("road", "deep"), Severity.SEVERE),
        (("Pothole",), Severity.MODERATE),
        (("tar",), Severity.MODERATE),
        (("road surface",), Severity.MILD),
        ((), Severity.MILD),
    ])
    def test_presence_rules(self, names, expected):
        assert score_severity(labels(*names), Category.POTHOLE) is expected

    def test_confidence_is_ignored(self):
        assert score_severity(labels("crater", confidence=0.01), Category.POTHOLE) is Severity.SEVERE


class TestGarbage:
    def test_dumpster_is_severe(self):
        assert score_severity([LabelAnnotation("dumpster", 0.8)], Category.GARBAGE) is Severity.SEVERE

    def test_trash_is_moderate(self):
        assert score_severity([LabelAnnotation("trash", 0.6)], Category.GARBAGE) is Severity.MODERATE

    def test_no_matching_labels(self):
        assert score_severity([LabelAnnotation("street", 0.99)], Category.GARBAGE) is Severity.MILD

    def test_thresholds_are_strict(self):
        assert score_severity([LabelAnnotation("pollution", 0.70)], Category.GARBAGE) is Severity.MILD
        assert score_severity([LabelAnnotation("litter", 0.50)], Category.GARBAGE) is Severity.MILD

    def test_weak_severe_falls_back_to_moderate(self):
        found = [LabelAnnotation("Waste container", 0.4), LabelAnnotation("Plastic bag", 0.55)]
        assert score_severity(found, Category.GARBAGE) is Severity.MODERATE

    def test_max_confidence_for(self):
        found = [LabelAnnotation("trash", 0.3), LabelAnnotation("Trash", 0.7), LabelAnnotation("trash can", 0.99)]
        assert max_confidence_for(found, {"trash"}) == 0.7
        assert max_confidence_for(found, {"garbage"}) == 0.0


@pytest.mark.parametrize("category,severe,moderate", [
    (Category.WATER_LEAK, "Flooding", "rain"),
    (Category.PROPERTY_DAMAGE, "collapse", "Wall"),
    (Category.ENVIRONMENT, "wildfire", "smoke"),
])
class TestPresenceCategories:
    def test_severe(self, category, severe, moderate):
        assert score_severity(labels(moderate, severe), category) is Severity.SEVERE

    def test_moderate(self, category, severe, moderate):
        assert score_severity(labels(moderate), category) is Severity.MODERATE

    def test_mild(self, category, severe, moderate):
        assert score_severity(labels("sky"), category) is Severity.MILD


class TestOtherCategories:
    def test_other_is_mild(self):
        assert score_severity(labels("fire", "flood", "sinkhole"), Category.OTHER) is Severity.MILD

    def test_string_category(self):
        assert score_severity(labels("fire"), "environment") is Severity.SEVERE

    def test_unknown_string_category(self):
        assert score_severity(labels("fire"), "graffiti") is Severity.MILD
