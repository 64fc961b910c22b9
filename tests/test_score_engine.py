import math
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_optimizer.schemas.resume import Keyword, Suggestion  # noqa: E402
from resume_optimizer.scoring.engine import (  # noqa: E402
    calculate_detailed_ats_score,
    calculate_keyword_point_impact,
    calculate_potential_points,
    calculate_suggestion_point_impact,
    get_keyword_impact_description,
    get_suggestion_impact_description,
    process_keywords,
    process_suggestions,
    recompute_keyword,
    recompute_suggestion,
)
from resume_optimizer.scoring.sections import evaluate_resume_sections  # noqa: E402


def _skills_suggestion(applied: bool = False) -> Suggestion:
    return Suggestion(
        id="s1",
        category="skills",
        text="Add a dedicated skills section",
        impact_description="Significant boost, lifts interview callbacks by 20%",
        is_applied=applied,
    )


class PointImpactTests(unittest.TestCase):
    def test_suggestion_points_apply_category_weight_twice(self):
        # impact 10 -> 3.0 base points, times the skills weight 0.9
        self.assertAlmostEqual(calculate_suggestion_point_impact(_skills_suggestion()), 2.7)

    def test_suggestion_points_are_deterministic(self):
        suggestion = _skills_suggestion()
        self.assertEqual(
            calculate_suggestion_point_impact(suggestion),
            calculate_suggestion_point_impact(suggestion.model_copy()),
        )

    def test_stale_cache_does_not_change_recomputed_points(self):
        stale = _skills_suggestion().model_copy(update={"point_impact": 0.1, "impact_score": 1})
        self.assertAlmostEqual(calculate_suggestion_point_impact(stale), 2.7)
        self.assertAlmostEqual(recompute_suggestion(stale).point_impact, 2.7)

    def test_cache_matches_recompute(self):
        suggestions = process_suggestions(
            [
                _skills_suggestion(),
                Suggestion(category="language", impact_description="Minimal polish"),
                Suggestion(category="ats-direct", impact_description="Helps ATS parsing"),
            ]
        )
        for suggestion in suggestions:
            fresh = recompute_suggestion(suggestion.model_copy(update={"point_impact": None, "impact_score": None}))
            self.assertEqual(suggestion.impact_score, fresh.impact_score)
            self.assertAlmostEqual(suggestion.point_impact, fresh.point_impact)

        content = "Led API design for payment services"
        for keyword in process_keywords([Keyword(text="API design"), Keyword(text="Kubernetes")], content):
            fresh = recompute_keyword(keyword, content)
            self.assertEqual(keyword.category, fresh.category)
            self.assertAlmostEqual(keyword.point_impact, fresh.point_impact)

    def test_technical_absent_keyword_beats_general_present_keyword(self):
        content = "Advanced Excel user who built reporting dashboards"
        technical = calculate_keyword_point_impact(Keyword(text="API integration"), content)
        general = calculate_keyword_point_impact("Excel", content)
        self.assertAlmostEqual(technical, 1.8)
        self.assertAlmostEqual(general, 0.2)
        self.assertGreater(technical, general)


class DetailedScoreTests(unittest.TestCase):
    def test_applied_skills_suggestion_lifts_total_above_base(self):
        suggestion = _skills_suggestion(applied=True)
        breakdown = calculate_detailed_ats_score(60, [suggestion], [], "", structural=False)

        processed = process_suggestions([suggestion])[0]
        self.assertGreaterEqual(processed.impact_score, 8)
        self.assertGreater(processed.point_impact, 2.0)
        # 2.7 points * (1 - 60/120) = 1.35 -> 1
        self.assertEqual(breakdown.suggestion_points, 1)
        self.assertEqual(breakdown.total, 61)
        self.assertGreater(breakdown.total, 60)

    def test_stale_cache_cannot_decide_total(self):
        fresh = calculate_detailed_ats_score(0, [_skills_suggestion(applied=True)], [], "", structural=False)
        stale = _skills_suggestion(applied=True).model_copy(update={"point_impact": 0.1, "impact_score": 1})
        breakdown = calculate_detailed_ats_score(0, [stale], [], "", structural=False)
        # 2.7 points at base 0 -> 3
        self.assertEqual(fresh.total, 3)
        self.assertEqual(breakdown.total, fresh.total)

    def test_keyword_cache_from_old_content_is_refreshed(self):
        old = process_keywords([Keyword(text="API integration", is_applied=True)], "")[0]
        self.assertAlmostEqual(old.point_impact, 1.8)
        content = "Owned API integration for payment services"
        breakdown = calculate_detailed_ats_score(0, [], [old], content, structural=False)
        # present in the text: (0.9 - 0.3) * 2 = 1.2 -> 1
        self.assertEqual(breakdown.keyword_points, 1)

    def test_inputs_are_not_mutated(self):
        suggestion = _skills_suggestion(applied=True)
        calculate_detailed_ats_score(60, [suggestion], [], "", structural=False)
        self.assertIsNone(suggestion.point_impact)
        self.assertIsNone(suggestion.impact_score)

    def test_potential_uses_item_count_diminishing_factor(self):
        suggestions = [_skills_suggestion(), _skills_suggestion()]
        # 5.4 / (1 + 2/20) = 4.909 -> 5
        self.assertEqual(calculate_potential_points(process_suggestions(suggestions), [], ""), 5)

        breakdown = calculate_detailed_ats_score(60, suggestions, [], "", structural=False)
        self.assertEqual(breakdown.total, 60)
        self.assertEqual(breakdown.potential, 65)

    def test_total_and_potential_stay_in_bounds(self):
        suggestions = [_skills_suggestion(applied=True), _skills_suggestion()]
        keywords = [Keyword(text="API integration", is_applied=True), Keyword(text="Kubernetes")]
        for base in (0, 35.5, 60, 99, 100, 150, -20, float("nan")):
            breakdown = calculate_detailed_ats_score(base, suggestions, keywords, "", structural=False)
            self.assertGreaterEqual(breakdown.total, 0)
            self.assertLessEqual(breakdown.total, 100)
            self.assertGreaterEqual(breakdown.potential, breakdown.total)
            self.assertLessEqual(breakdown.potential, 100)
            if isinstance(base, float) and math.isnan(base):
                self.assertEqual(breakdown.base, 0)

    def test_high_base_compresses_gains(self):
        suggestions = [_skills_suggestion(applied=True) for _ in range(4)]
        low = calculate_detailed_ats_score(20, suggestions, [], "", structural=False)
        high = calculate_detailed_ats_score(90, suggestions, [], "", structural=False)
        self.assertGreater(low.suggestion_points, high.suggestion_points)

    def test_breakdown_is_idempotent(self):
        args = (70, [_skills_suggestion(applied=True)], [Keyword(text="Terraform", is_applied=True)], "text")
        self.assertEqual(
            calculate_detailed_ats_score(*args, structural=False),
            calculate_detailed_ats_score(*args, structural=False),
        )


class SectionScoreTests(unittest.TestCase):
    def test_structural_scores(self):
        html = (
            '<section id="resume-skills"><h2>Skills</h2><ul><li>Python</li></ul></section>'
            '<section id="resume-experience"><p>Cut infrastructure costs by 30%</p></section>'
        )
        scores = evaluate_resume_sections(html, structural=True)
        self.assertEqual(scores["resume-skills"], 60)
        self.assertEqual(scores["resume-experience"], 65)
        self.assertEqual(scores["resume-education"], 0)

    def test_long_section_gets_length_bonus(self):
        html = f'<section data-section="resume-summary"><p>{"x" * 520}</p></section>'
        self.assertEqual(evaluate_resume_sections(html, structural=True)["resume-summary"], 65)

    def test_marker_mode(self):
        scores = evaluate_resume_sections('<section id="resume-skills"></section>', structural=False)
        self.assertEqual(scores["resume-skills"], 70)
        self.assertEqual(scores["resume-experience"], 0)


class DescriptionTests(unittest.TestCase):
    def test_suggestion_description(self):
        self.assertEqual(
            get_suggestion_impact_description(_skills_suggestion()),
            "Critical improvement (+2.7 points)",
        )
        minor = Suggestion(category="language", impact_description="Minimal polish")
        self.assertTrue(get_suggestion_impact_description(minor).startswith("Minor improvement"))

    def test_keyword_description(self):
        self.assertEqual(
            get_keyword_impact_description(Keyword(text="API integration"), ""),
            "Essential keyword (+1.8 points)",
        )
        self.assertEqual(
            get_keyword_impact_description(Keyword(text="Excel"), "Excel"),
            "Minor keyword (+0.2 points)",
        )


if __name__ == "__main__":
    unittest.main()
