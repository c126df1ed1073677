"""Tests for progress projections"""

import pytest

from visatrack.lib.progress import (
    step_progress,
    summarize,
    summarize_step,
    to_percent,
    tracker_progress,
)
from visatrack.lib.store import set_document_status, set_step_status


class TestStepProgress:
    def test_counts_collected_submitted_approved(self, seed):
        steps = set_document_status(seed, "step-2", "doc-2-2", "approved")
        assert step_progress(steps[1]) == 1.0

    def test_partial(self, seed):
        assert step_progress(seed[1]) == 0.5
        assert summarize_step(seed[1]).percent == 50

    def test_no_documents_is_zero(self, seed):
        sp = summarize_step(seed[2])

        assert sp.fraction == 0.0
        assert sp.percent == 0
        assert sp.total_documents == 0

    def test_student_seed_first_step(self, student_seed):
        # two of four documents are collected in the default data
        assert summarize_step(student_seed[0]).percent == 50


class TestTrackerProgress:
    def test_completed_steps_only(self, seed):
        steps = set_step_status(seed, "step-1", "completed")
        steps = set_step_status(steps, "step-2", "in-progress")

        assert tracker_progress(steps) == pytest.approx(1 / 3)
        assert summarize(steps).percent == 33

    def test_document_statuses_do_not_complete_steps(self, seed):
        steps = set_document_status(seed, "step-1", "doc-1-1", "approved")
        assert tracker_progress(steps) == 0.0

    def test_empty_tracker(self):
        overall = summarize(())

        assert overall.fraction == 0.0
        assert overall.percent == 0
        assert overall.steps == []

    def test_summary_counts(self, seed):
        steps = set_step_status(seed, "step-3", "blocked")
        overall = summarize(steps)

        assert overall.total_steps == 3
        assert overall.in_progress_steps == 1
        assert overall.blocked_steps == 1
        assert overall.done_documents == 1
        assert overall.total_documents == 3
        assert [s.step_id for s in overall.steps] == ["step-1", "step-2", "step-3"]


class TestPercent:
    @pytest.mark.parametrize("fraction,expected", [
        (0.0, 0),
        (0.125, 13),
        (0.5, 50),
        (2 / 3, 67),
        (1.0, 100),
    ])
    def test_rounds_half_up(self, fraction, expected):
        assert to_percent(fraction) == expected
