"""Tests for training statistics and the smoothed token likelihood."""

from __future__ import annotations

import pytest

from devine_dismisser.errors import CallerContractError, UntrainedModelError
from devine_dismisser.model import ClassStats, Model, smoothed_probability


class TestClassStats:
    """Tests for ClassStats."""

    def test_defaults_are_empty(self):
        stats = ClassStats()
        assert stats.document_count == 0
        assert stats.token_counts == {}
        assert stats.total_tokens == 0

    def test_count_defaults_to_zero(self):
        stats = ClassStats(document_count=1, token_counts={"god": 2})
        assert stats.count("god") == 2
        assert stats.count("missing") == 0

    def test_total_tokens_sums_occurrences(self):
        stats = ClassStats(document_count=2, token_counts={"a": 3, "b": 1})
        assert stats.total_tokens == 4


class TestAddDocument:
    """Tests for Model.add_document."""

    def test_empty_model(self):
        model = Model()
        assert model.labels == []
        assert model.total_documents == 0
        assert model.vocabulary_size == 0
        assert not model.is_trained

    def test_counts_every_occurrence(self):
        model = Model()
        model.add_document("amen amen Amen", "theist")
        assert model.classes["theist"].token_counts == {"amen": 3}
        assert model.classes["theist"].document_count == 1
        assert model.vocabulary == {"amen"}

    def test_zero_token_document_still_counts(self):
        model = Model()
        model.add_document("!!!", "neutral")
        assert model.total_documents == 1
        assert model.classes["neutral"].document_count == 1
        assert model.classes["neutral"].token_counts == {}
        assert model.vocabulary == set()
        assert model.is_trained

    def test_labels_in_first_seen_order(self, scenario_model):
        assert scenario_model.labels == ["theist", "neutral"]

    def test_scenario_counts(self, scenario_model):
        theist = scenario_model.classes["theist"]
        assert theist.document_count == 2
        assert theist.token_counts == {"god": 1, "is": 1, "real": 1, "prayer": 1, "works": 1}
        assert scenario_model.vocabulary == {
            "god", "is", "real", "nature", "beautiful", "prayer", "works",
        }

    def test_training_is_monotonic(self):
        model = Model()
        docs = [
            ("god is real", "theist"),
            ("god is real", "theist"),
            ("", "neutral"),
            ("nature walks", "neutral"),
            ("no evidence", "anti-theist"),
        ]
        for text, label in docs:
            before_total = model.total_documents
            before_vocab = set(model.vocabulary)
            model.add_document(text, label)
            assert model.total_documents == before_total + 1
            assert before_vocab <= model.vocabulary

    def test_total_matches_sum_of_document_counts(self, scenario_model):
        assert scenario_model.total_documents == sum(
            s.document_count for s in scenario_model.classes.values()
        )

    def test_vocabulary_matches_token_counts(self, scenario_model):
        seen = set()
        for stats in scenario_model.classes.values():
            seen.update(stats.token_counts)
        assert seen == scenario_model.vocabulary

    @pytest.mark.parametrize("label", ["", None, 7])
    def test_bad_label_raises(self, label):
        model = Model()
        with pytest.raises(CallerContractError, match="label"):
            model.add_document("some text", label)
        assert model.total_documents == 0

    def test_non_string_text_leaves_model_untouched(self, scenario_model):
        with pytest.raises(CallerContractError):
            scenario_model.add_document(None, "theist")
        assert scenario_model.total_documents == 3
        assert scenario_model.classes["theist"].document_count == 2


class TestWordProbability:
    """Tests for Model.word_probability."""

    def test_seen_token(self, scenario_model):
        # theist has 5 tokens, vocabulary has 7
        assert scenario_model.word_probability("god", "theist") == pytest.approx(2 / 12)

    def test_unseen_token_under_label(self, scenario_model):
        assert scenario_model.word_probability("god", "neutral") == pytest.approx(1 / 10)

    def test_token_outside_vocabulary(self, scenario_model):
        assert scenario_model.word_probability("xyzzy", "theist") == pytest.approx(1 / 12)

    def test_bounds_for_every_token_and_label(self, scenario_model):
        tokens = sorted(scenario_model.vocabulary) + ["never", "seen"]
        for label in scenario_model.labels:
            for token in tokens:
                p = scenario_model.word_probability(token, label)
                assert 0 < p <= 1

    def test_empty_vocabulary_raises(self):
        model = Model()
        with pytest.raises(UntrainedModelError, match="empty vocabulary"):
            model.word_probability("god", "theist")

    def test_empty_vocabulary_with_labels_raises(self):
        model = Model()
        model.add_document("...", "theist")
        with pytest.raises(RuntimeError):
            model.word_probability("god", "theist")

    def test_unknown_label_raises(self, scenario_model):
        with pytest.raises(CallerContractError, match="Unknown label"):
            scenario_model.word_probability("god", "pastafarian")

    def test_does_not_mutate(self, scenario_model):
        before = (dict(scenario_model.classes["theist"].token_counts), set(scenario_model.vocabulary))
        scenario_model.word_probability("unseen", "theist")
        assert before == (scenario_model.classes["theist"].token_counts, scenario_model.vocabulary)


class TestPrior:
    def test_prior(self, scenario_model):
        assert scenario_model.prior("theist") == pytest.approx(2 / 3)
        assert scenario_model.prior("neutral") == pytest.approx(1 / 3)

    def test_unknown_label(self, scenario_model):
        with pytest.raises(CallerContractError):
            scenario_model.prior("other")


def test_smoothed_probability():
    assert smoothed_probability(0, 0, 1) == 1.0
    assert smoothed_probability(3, 10, 5) == pytest.approx(4 / 15)
