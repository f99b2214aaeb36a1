"""
Tests for score arithmetic

Tests cover:
- Grading a single selected option
- Score and percentage computation
- Letter grades and admin summaries
"""

from types import SimpleNamespace

import pytest

from quizpro.services import scoring


def _question(correct='B', marks=2):
    return SimpleNamespace(correct_option=correct, marks=marks)


class TestGradeAnswer:
    def test_correct_option_earns_marks(self):
        assert scoring.grade_answer(_question('B', 2), 'B') == (True, 2)

    def test_option_is_case_insensitive(self):
        assert scoring.grade_answer(_question('C', 3), ' c ') == (True, 3)

    def test_wrong_option_earns_nothing(self):
        assert scoring.grade_answer(_question('B', 2), 'A') == (False, 0)

    def test_missing_option_earns_nothing(self):
        assert scoring.grade_answer(_question('B', 2), None) == (False, 0)


class TestScoreAndPercentage:
    def test_score_sums_marks_obtained(self):
        answers = [SimpleNamespace(marks_obtained=m) for m in (1, 0, 3, None)]
        assert scoring.compute_score(answers) == 4

    def test_percentage_rounds_to_two_places(self):
        assert scoring.compute_percentage(1, 3) == 33.33
        assert scoring.compute_percentage(2, 3) == 66.67

    def test_percentage_of_full_marks(self):
        assert scoring.compute_percentage(6, 6) == 100.0

    def test_zero_total_marks_gives_zero(self):
        assert scoring.compute_percentage(5, 0) == 0.0


class TestGradeLetter:
    @pytest.mark.parametrize('percentage, letter', [
        (100, 'A'), (80, 'A'), (79.99, 'B'), (60, 'B'),
        (59.5, 'C'), (40, 'C'), (39.99, 'F'), (0, 'F'),
    ])
    def test_boundaries(self, percentage, letter):
        assert scoring.grade_letter(percentage) == letter


class TestSummarize:
    def test_empty(self):
        assert scoring.summarize([]) == {
            'attempts': 0, 'average': 0.0, 'highest': 0.0, 'lowest': 0.0, 'passed': 0,
        }

    def test_aggregates(self):
        summary = scoring.summarize([50.0, 100.0, 20.0])
        assert summary['attempts'] == 3
        assert summary['average'] == 56.67
        assert summary['highest'] == 100.0
        assert summary['lowest'] == 20.0
        assert summary['passed'] == 2
