import random
import unittest

from persona_api.models.scoring import TRAITS
from persona_api.services.extractors import (
    clean_sentence,
    extract_pain_points,
    extract_quotes,
    split_sentences,
)
from persona_api.services.naming import generate_persona_name, top_trait


class TestSentenceHelpers(unittest.TestCase):
    def test_split_sentences(self):
        sentences = split_sentences("First one here. Short! What about this?", 5)
        self.assertEqual(sentences, ["First one here", " What about this"])

    def test_split_empty_transcript(self):
        self.assertEqual(split_sentences("", 10), [])

    def test_clean_sentence_strips_one_quote_each_side(self):
        self.assertEqual(clean_sentence('  "quoted text"  '), "quoted text")
        self.assertEqual(clean_sentence("'it''"), "it'")


class TestPainPoints(unittest.TestCase):
    """Test cases for pain point extraction."""

    def test_sample_transcript(self):
        pain_points = extract_pain_points("I think this is hard and I feel confused.")
        self.assertEqual(pain_points, ["I think this is hard and I feel confused"])

    def test_no_matches_returns_empty_list(self):
        self.assertEqual(extract_pain_points("Everything went smoothly today."), [])
        self.assertEqual(extract_pain_points(""), [])

    def test_limit_and_order(self):
        transcript = (
            "The menu was confusing and unclear. "
            "Checkout felt slow on my phone. "
            "Great colors overall. "
            "Search is broken for long words! "
            "The form is complicated to fill?"
        )
        self.assertEqual(
            extract_pain_points(transcript),
            [
                "The menu was confusing and unclear",
                "Checkout felt slow on my phone",
                "Search is broken for long words",
            ],
        )

    def test_short_fragments_are_skipped(self):
        self.assertEqual(extract_pain_points("So hard. Too slow."), [])

    def test_surrounding_quotes_are_stripped(self):
        transcript = "\"I find this checkout so hard to use\". Fine otherwise."
        self.assertEqual(
            extract_pain_points(transcript), ["I find this checkout so hard to use"]
        )

    def test_overlong_sentence_is_skipped(self):
        transcript = "This is a problem " + "x" * 200 + ". It doesn't work at all."
        self.assertEqual(extract_pain_points(transcript), ["It doesn't work at all"])


class TestQuotes(unittest.TestCase):
    """Test cases for quote extraction."""

    def test_sample_transcript(self):
        quotes = extract_quotes("I think this is hard and I feel confused.")
        self.assertEqual(quotes, ["I think this is hard and I feel confused"])

    def test_surrounding_quotes_are_stripped(self):
        transcript = "'I find this checkout so hard to use'! Done."
        self.assertEqual(
            extract_quotes(transcript), ["I find this checkout so hard to use"]
        )

    def test_limit_of_five(self):
        transcript = " ".join(
            f"I would change section number {n} first." for n in range(8)
        )
        quotes = extract_quotes(transcript)
        self.assertEqual(len(quotes), 5)
        self.assertEqual(quotes[0], "I would change section number 0 first")

    def test_length_bounds(self):
        transcript = "I like it a lot. " + "I feel " + "very " * 40 + "good."
        self.assertEqual(extract_quotes(transcript), [])

    def test_non_personal_sentence_skipped(self):
        self.assertEqual(extract_quotes("The button sits at the bottom of the page."), [])

    def test_may_overlap_with_pain_points(self):
        transcript = "My checkout experience was really slow today."
        self.assertEqual(extract_pain_points(transcript), extract_quotes(transcript))


class TestNameGenerator(unittest.TestCase):
    """Test cases for persona name generation."""

    def test_uses_top_trait(self):
        scores = dict.fromkeys(TRAITS, 0.0)
        scores["Thorough"] = 0.2
        name = generate_persona_name(scores, rng=random.Random(1))
        self.assertTrue(name.endswith(" the thorough"))

    def test_all_zero_scores_break_ties_alphabetically(self):
        scores = dict.fromkeys(reversed(TRAITS), 0.0)
        self.assertEqual(top_trait(scores), "Analytical")
        self.assertTrue(generate_persona_name(scores).endswith(" the analytical"))

    def test_tie_between_traits(self):
        scores = {"Social": 0.4, "Creative": 0.4, "Practical": 0.3}
        self.assertEqual(top_trait(scores), "Creative")

    def test_seeded_rng_is_deterministic(self):
        scores = dict.fromkeys(TRAITS, 0.0)
        first = generate_persona_name(scores, rng=random.Random(42))
        second = generate_persona_name(scores, rng=random.Random(42))
        self.assertEqual(first, second)

    def test_name_references_known_trait(self):
        rng = random.Random(7)
        for top in TRAITS:
            scores = dict.fromkeys(TRAITS, 0.1)
            scores[top] = 0.9
            first_name, descriptor = generate_persona_name(scores, rng=rng).split(
                " the "
            )
            self.assertIn(descriptor, [trait.lower() for trait in TRAITS])
            self.assertEqual(descriptor, top.lower())

    def test_empty_scores_fall_back(self):
        name = generate_persona_name({}, names=["Sam"])
        self.assertEqual(name, "Sam the balanced")


if __name__ == "__main__":
    unittest.main()
