"""Tests for ProgressStore: high scores and unlock progression."""

from __future__ import annotations

import logging

from quran_tracer.progress.store import ProgressStore

ORDER = ["Alif", "Ba", "Ta"]


class TestInitialState:
    def test_first_letter_unlocked_with_zero_stars(self):
        store = ProgressStore(":memory:", ORDER)
        assert store.is_unlocked("Alif")
        assert store.get_high_score("Alif") == 0
        assert not store.is_unlocked("Ba")

    def test_high_scores_initially_only_first(self):
        store = ProgressStore(":memory:", ORDER)
        assert store.high_scores() == {"Alif": 0}

    def test_without_order_nothing_unlocked(self):
        store = ProgressStore(":memory:")
        assert store.high_scores() == {}

    def test_unknown_letter_score_is_zero(self):
        store = ProgressStore(":memory:", ORDER)
        assert store.get_high_score("Omega") == 0


class TestHighScores:
    def test_higher_tier_is_stored_and_unlocks_next(self):
        store = ProgressStore(":memory:", ORDER)
        assert store.set_high_score_if_higher("Alif", 2) is True
        assert store.get_high_score("Alif") == 2
        assert store.is_unlocked("Ba")
        assert store.get_high_score("Ba") == 0

    def test_equal_or_lower_tier_is_ignored(self):
        store = ProgressStore(":memory:", ORDER)
        store.set_high_score_if_higher("Alif", 2)
        assert store.set_high_score_if_higher("Alif", 2) is False
        assert store.set_high_score_if_higher("Alif", 1) is False
        assert store.get_high_score("Alif") == 2

    def test_zero_tier_is_never_stored(self):
        store = ProgressStore(":memory:", ORDER)
        assert store.set_high_score_if_higher("Alif", 0) is False
        assert not store.is_unlocked("Ba")

    def test_improving_keeps_next_letter_progress(self):
        store = ProgressStore(":memory:", ORDER)
        store.set_high_score_if_higher("Alif", 1)
        store.set_high_score_if_higher("Ba", 3)
        store.set_high_score_if_higher("Alif", 3)
        assert store.get_high_score("Ba") == 3

    def test_new_best_is_logged(self, caplog):
        store = ProgressStore(":memory:", ORDER)
        with caplog.at_level(logging.INFO, logger="quran_tracer.progress.store"):
            store.set_high_score_if_higher("Alif", 3)
        assert "New best for Alif" in caplog.text
        assert "Unlocked Ba" in caplog.text


class TestUnlockNext:
    def test_last_letter_is_noop(self):
        store = ProgressStore(":memory:", ORDER)
        store.unlock_next("Ta")
        assert store.high_scores() == {"Alif": 0}

    def test_unknown_letter_is_noop(self):
        store = ProgressStore(":memory:", ORDER)
        store.unlock_next("Omega")
        assert store.high_scores() == {"Alif": 0}

    def test_does_not_overwrite_existing_stars(self):
        store = ProgressStore(":memory:", ORDER)
        store.set_high_score_if_higher("Alif", 1)
        store.set_high_score_if_higher("Ba", 2)
        store.unlock_next("Alif")
        assert store.get_high_score("Ba") == 2


class TestPersistence:
    def test_survives_reopen(self, tmp_path):
        db = str(tmp_path / "progress.db")
        store = ProgressStore(db, ORDER)
        store.set_high_score_if_higher("Alif", 3)
        store.close()

        reopened = ProgressStore(db, ORDER)
        assert reopened.get_high_score("Alif") == 3
        assert reopened.is_unlocked("Ba")
        reopened.close()

    def test_reset(self, tmp_path):
        store = ProgressStore(str(tmp_path / "progress.db"), ORDER)
        store.set_high_score_if_higher("Alif", 3)
        store.reset()
        assert store.high_scores() == {"Alif": 0}
        store.close()
