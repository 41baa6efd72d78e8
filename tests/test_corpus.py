"""Tests for training corpus loading."""

from __future__ import annotations

import pytest

from devine_dismisser.classifier import NaiveBayesClassifier
from devine_dismisser.corpus import (
    DEFAULT_TRAINING_FILES,
    TrainingGroup,
    load_corpus,
    read_lines,
    train_model,
)


class TestReadLines:
    def test_strips_and_skips_blank_lines(self, tmp_path):
        path = tmp_path / "lines.txt"
        path.write_text("  first line \n\n\t\nsecond line\r\nthird", encoding="utf-8")
        assert read_lines(path) == ["first line", "second line", "third"]

    def test_only_newlines_split_documents(self, tmp_path):
        path = tmp_path / "separators.txt"
        path.write_text(
            "prayer\x0cworks\nfaith\x0bheals\ngod is\x1cgood\nlast\x85line\n",
            encoding="utf-8",
        )
        assert read_lines(path) == [
            "prayer\x0cworks",
            "faith\x0bheals",
            "god is\x1cgood",
            "last\x85line",
        ]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("", encoding="utf-8")
        assert read_lines(path) == []

    def test_utf8(self, tmp_path):
        path = tmp_path / "utf8.txt"
        path.write_text("Dieu est grand ✝\n", encoding="utf-8")
        assert read_lines(path) == ["Dieu est grand ✝"]


class TestLoadCorpus:
    def test_default_files(self, corpus_dir, corpus_lines):
        groups = load_corpus(base_dir=corpus_dir)
        assert [g.label for g in groups] == ["theist", "anti-theist", "neutral"]
        for group in groups:
            assert group.lines == corpus_lines[group.label]

    def test_mapping_order_is_kept(self, corpus_dir):
        files = {
            "neutral": "training_neutral.txt",
            "theist": "training_theist.txt",
        }
        groups = load_corpus(files, base_dir=corpus_dir)
        assert [g.label for g in groups] == ["neutral", "theist"]

    def test_absolute_paths_ignore_base_dir(self, corpus_dir, corpus_lines, tmp_path):
        files = {"theist": corpus_dir / "training_theist.txt"}
        groups = load_corpus(files, base_dir=tmp_path / "elsewhere")
        assert len(groups[0]) == len(corpus_lines["theist"])

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_corpus(base_dir=tmp_path)

    def test_default_mapping(self):
        assert list(DEFAULT_TRAINING_FILES) == ["theist", "anti-theist", "neutral"]


class TestTrainModel:
    def test_every_line_is_a_document(self, corpus_dir):
        model = train_model(load_corpus(base_dir=corpus_dir))
        assert model.total_documents == 18
        assert model.labels == ["theist", "anti-theist", "neutral"]
        assert all(s.document_count == 6 for s in model.classes.values())

    def test_matches_classifier_train(self, corpus_dir):
        groups = load_corpus(base_dir=corpus_dir)
        classifier = NaiveBayesClassifier()
        assert classifier.train(groups) == 18
        assert train_model(groups) == classifier.model

    def test_delegates_to_classifier_train(self, monkeypatch):
        calls = []
        real_train = NaiveBayesClassifier.train

        def spy(self, groups):
            calls.append(groups)
            return real_train(self, groups)

        monkeypatch.setattr(NaiveBayesClassifier, "train", spy)
        groups = [TrainingGroup("theist", ["god is real"])]
        model = train_model(groups)
        assert calls == [groups]
        assert model.total_documents == 1

    def test_empty_groups(self):
        model = train_model([TrainingGroup("theist"), TrainingGroup("neutral", [])])
        assert model.total_documents == 0
        assert model.labels == []
