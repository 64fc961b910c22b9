import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_optimizer.schemas.resume import Suggestion  # noqa: E402
from resume_optimizer.scoring.impact import (  # noqa: E402
    ImpactLevel,
    analyze_keyword_impact,
    analyze_suggestion_impact,
    classify_keyword,
    get_impact_level,
    keyword_present,
    round_half_up,
)


class SuggestionImpactTests(unittest.TestCase):
    def test_significant_skills_suggestion_with_metric_scores_high(self):
        suggestion = Suggestion(
            category="skills",
            impact_description="Significant boost, lifts interview callbacks by 20%",
        )
        self.assertGreaterEqual(analyze_suggestion_impact(suggestion), 8)
        self.assertEqual(analyze_suggestion_impact(suggestion), 10)

    def test_unknown_category_uses_default_weight(self):
        self.assertEqual(analyze_suggestion_impact(Suggestion(category="misc")), 6)

    def test_intensity_word_nudges_halfway(self):
        # language weight 0.4 -> 4, "minimal" pulls halfway to 1 -> 2.5 -> 3
        suggestion = Suggestion(category="language", impact_description="Minimal polish")
        self.assertEqual(analyze_suggestion_impact(suggestion), 3)

    def test_ats_reference_adds_a_point(self):
        suggestion = Suggestion(category="content", impact_description="Helps the ATS parse your dates")
        self.assertEqual(analyze_suggestion_impact(suggestion), 8)

    def test_result_is_clamped_to_ten(self):
        suggestion = Suggestion(
            category="ats-direct",
            impact_description="Critical: 50% more resumes pass ATS scanning",
        )
        self.assertEqual(analyze_suggestion_impact(suggestion), 10)

    def test_missing_description_is_treated_as_empty(self):
        self.assertEqual(analyze_suggestion_impact(Suggestion(category="formatting")), 5)


class KeywordImpactTests(unittest.TestCase):
    def test_classification_priority(self):
        self.assertEqual(classify_keyword("REST API"), "technical")
        self.assertEqual(classify_keyword("Leadership"), "soft-skill")
        self.assertEqual(classify_keyword("Negotiated"), "action-verb")
        self.assertEqual(classify_keyword("Compliance"), "industry-specific")
        self.assertEqual(classify_keyword("Excel"), "general")
        # "framework" is in both technical and industry-specific; technical wins.
        self.assertEqual(classify_keyword("Agile framework"), "technical")

    def test_whole_word_case_insensitive_presence(self):
        self.assertTrue(keyword_present("docker", "Shipped services with Docker."))
        self.assertFalse(keyword_present("Docker", "Dockerized services"))
        self.assertTrue(keyword_present("C++", "Expert in C++ and Go"))
        self.assertFalse(keyword_present("", "anything"))

    def test_present_keyword_is_penalized(self):
        absent = analyze_keyword_impact("API design", "Built payment services")
        present = analyze_keyword_impact("API design", "Led API design for payment services")
        self.assertEqual(absent.category, "technical")
        self.assertAlmostEqual(absent.impact, 0.9)
        self.assertAlmostEqual(present.impact, 0.6)
        self.assertLess(present.impact, absent.impact)

    def test_impact_has_a_floor(self):
        result = analyze_keyword_impact("Excel", "Advanced Excel user")
        self.assertEqual(result.category, "general")
        self.assertAlmostEqual(result.impact, 0.1)

    def test_impact_levels(self):
        self.assertEqual(get_impact_level(0.85), ImpactLevel.CRITICAL)
        self.assertEqual(get_impact_level(0.8), ImpactLevel.CRITICAL)
        self.assertEqual(get_impact_level(0.65), ImpactLevel.HIGH)
        self.assertEqual(get_impact_level(0.4), ImpactLevel.MEDIUM)
        self.assertEqual(get_impact_level(0.39), ImpactLevel.LOW)


class RoundingTests(unittest.TestCase):
    def test_halves_round_up(self):
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(1.35), 1)
        self.assertAlmostEqual(round_half_up(0.25, 1), 0.3)
        self.assertAlmostEqual(round_half_up(2.7000000000000006, 1), 2.7)


if __name__ == "__main__":
    unittest.main()
