import sys
import time
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_optimizer.scoring.impact import ImpactLevel  # noqa: E402
from resume_optimizer.scoring.metrics import build_optimization_metrics  # noqa: E402
from resume_optimizer.scoring.session import ScoreSession  # noqa: E402

SKILLS_SUGGESTION = {
    "type": "skills",
    "text": "Add a dedicated skills section",
    "impact": "Significant boost, lifts interview callbacks by 20%",
    "targetSection": "resume-skills",
}
STRUCTURE_SUGGESTION = {
    "category": "structure",
    "text": "Move education below experience",
    "impact_description": "Important for recruiter scanning order",
}


def _session(base=60, content="Backend engineer building payment services", **kwargs):
    return ScoreSession(
        base,
        content,
        [SKILLS_SUGGESTION, STRUCTURE_SUGGESTION],
        ["API integration", {"keyword": "Leadership"}],
        structural=False,
        **kwargs,
    )


class ScoreSessionTests(unittest.TestCase):
    def test_initial_score_equals_base_when_nothing_applied(self):
        session = _session()
        self.assertEqual(session.current_score, 60)
        self.assertEqual(session.breakdown.total, 60)
        self.assertGreater(session.potential_score, 60)

    def test_boundary_shapes_are_normalized(self):
        session = _session()
        first = session.suggestions[0]
        self.assertEqual(first.category, "skills")
        self.assertEqual(first.section, "resume-skills")
        self.assertTrue(first.id.startswith("sug-"))
        self.assertEqual([k.text for k in session.keywords], ["API integration", "Leadership"])
        self.assertEqual(session.keywords[1].category, "soft-skill")

    def test_apply_suggestion_toggles(self):
        session = _session()
        self.assertEqual(session.apply_suggestion(0), 61)
        self.assertTrue(session.suggestions[0].is_applied)
        self.assertEqual(session.apply_suggestion(0), 60)
        self.assertFalse(session.suggestions[0].is_applied)

    def test_invalid_index_leaves_state_alone(self):
        session = _session()
        self.assertEqual(session.apply_suggestion(9), 60)
        self.assertEqual(session.apply_keyword(-1), 60)
        self.assertEqual(session.simulate_suggestion_impact(9).description, "Invalid suggestion")
        self.assertEqual(session.simulate_keyword_impact(9).description, "Invalid keyword")

    def test_apply_all_then_reset_round_trips(self):
        session = _session()
        original = session.current_score
        session.apply_all_suggestions()
        boosted = session.apply_all_keywords()
        self.assertGreater(boosted, original)
        self.assertEqual(session.reset_all_changes(), original)
        self.assertEqual(session.applied_suggestions(), [])
        self.assertEqual(session.applied_keywords(), [])

    def test_simulation_does_not_mutate(self):
        session = _session()
        before_suggestions = session.suggestions
        before_keywords = session.keywords

        preview = session.simulate_suggestion_impact(0)
        self.assertEqual(preview.new_score, 61)
        self.assertAlmostEqual(preview.point_impact, 2.7)
        self.assertEqual(preview.description, "Critical improvement (+2.7 points)")

        session.simulate_keyword_impact(0)
        self.assertEqual(session.suggestions, before_suggestions)
        self.assertEqual(session.keywords, before_keywords)
        self.assertEqual(session.current_score, 60)

    def test_simulating_applied_item(self):
        session = _session()
        session.apply_keyword(0)
        self.assertEqual(session.simulate_keyword_impact(0).description, "Already applied")

    def test_out_of_range_base_update_is_ignored(self):
        session = ScoreSession(72, "text", structural=False)
        self.assertEqual(session.current_score, 72)
        for bad in (150, -1, 10**400, float("nan"), float("inf"), "80", None, True):
            self.assertEqual(session.update_base_score(bad), 72)
        self.assertEqual(session.base_score, 72)
        self.assertEqual(session.current_score, 72)

    def test_base_update_reapplies_items(self):
        session = _session()
        session.apply_suggestion(0)
        # 2.7 * (1 - 80/120) = 0.9 -> 1
        self.assertEqual(session.update_base_score(80), 81)
        self.assertEqual(session.base_score, 80)

    def test_update_content_rederives_keyword_impact(self):
        session = _session()
        self.assertAlmostEqual(session.keywords[0].point_impact, 1.8)
        session.update_content("Owned API integration for payment services")
        self.assertAlmostEqual(session.keywords[0].point_impact, 1.2)

    def test_unchanged_content_skips_recalculation(self):
        scores = []
        session = _session(on_score_change=scores.append)
        self.assertEqual(scores, [60])
        session.update_content(session.resume_content)
        self.assertEqual(scores, [60])
        session.apply_suggestion(0)
        self.assertEqual(scores, [60, 61])

    def test_update_state_replaces_collections(self):
        session = _session()
        score = session.update_state(suggestions=[{**SKILLS_SUGGESTION, "isApplied": True}], keywords=[])
        self.assertEqual(score, 61)
        self.assertEqual(len(session.keywords), 0)

    def test_update_state_ignores_invalid_base(self):
        session = _session()
        session.apply_suggestion(0)
        for bad in (150, -5, 10**400, float("nan")):
            self.assertEqual(session.update_state(base_score=bad), 61)
        self.assertEqual(session.base_score, 60)
        self.assertEqual(session.update_state(base_score=80), 81)

    def test_impact_details(self):
        session = _session()
        details = session.suggestion_impact_details(0)
        self.assertEqual(details.score, 10)
        self.assertEqual(details.level, ImpactLevel.CRITICAL)

        keyword = session.keyword_impact_details(1)
        self.assertEqual(keyword.category, "soft-skill")
        self.assertEqual(keyword.level, ImpactLevel.HIGH)

        rows = session.keywords_with_impact()
        self.assertEqual(rows[0]["description"], "Essential keyword (+1.8 points)")
        self.assertEqual(len(session.suggestions_with_impact()), 2)


class OptimizationMetricsTests(unittest.TestCase):
    def test_metrics_summarize_applied_items(self):
        session = _session()
        started_at = time.monotonic()
        session.apply_suggestion(0)
        session.apply_keyword(1)

        metrics = build_optimization_metrics(session, started_at=started_at)
        self.assertEqual(metrics.initial_score, 60)
        self.assertEqual(metrics.final_score, session.current_score)
        self.assertEqual(metrics.improvement, session.current_score - 60)
        self.assertEqual(metrics.applied_suggestion_count, 1)
        self.assertEqual(metrics.applied_keyword_count, 1)
        self.assertEqual(metrics.suggestion_categories, {"skills": 1})
        self.assertEqual(metrics.keyword_categories, {"soft-skill": 1})
        self.assertEqual(metrics.sections_improved, ["resume-skills"])
        self.assertGreaterEqual(metrics.seconds_elapsed, 0)


if __name__ == "__main__":
    unittest.main()
