import unittest
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_optimizer.core.config.scoring import get_scoring_config, get_scoring_value  # noqa: E402


class ScoringConfigTests(unittest.TestCase):
    def test_loader_and_value_lookup(self):
        config = get_scoring_config()
        self.assertIsInstance(config, dict)
        self.assertIs(get_scoring_config(), config)
        self.assertEqual(get_scoring_value("suggestions.category_weights.skills"), 0.9)
        self.assertEqual(get_scoring_value("keywords.existing_penalty"), 0.3)
        self.assertEqual(get_scoring_value("diminishing_returns.base_divisor"), 120)

    def test_missing_paths_return_default(self):
        self.assertIsNone(get_scoring_value("suggestions.nope"))
        self.assertEqual(get_scoring_value("fallback.base_score.deeper", 7), 7)
        self.assertEqual(get_scoring_value("", "x"), "x")

    def test_impact_vocabulary_is_ranked(self):
        vocabulary = get_scoring_value("suggestions.impact_vocabulary")
        self.assertEqual(vocabulary[0], ["critical", 10])
        scores = [score for _, score in vocabulary]
        self.assertEqual(scores, sorted(scores, reverse=True))


if __name__ == "__main__":
    unittest.main()
