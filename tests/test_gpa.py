"""Tests for the grade → GPA conversion table and the student GPA calculator."""

from __future__ import annotations

import math

import pytest

from services.gpa import (
    GPA_SCALE,
    GPAResult,
    gpa_info,
    letter_for_average,
    round_half_up,
    student_gpa,
)


# ---------------------------------------------------------------------------
# Range lookup: gpa_info
# ---------------------------------------------------------------------------

class TestGpaInfo:
    @pytest.mark.parametrize("grade", range(93, 101))
    def test_top_band_is_a(self, grade):
        assert gpa_info(grade) == (4.0, "A")

    @pytest.mark.parametrize("grade", range(0, 60))
    def test_bottom_band_is_f(self, grade):
        assert gpa_info(grade) == (0.0, "F")

    @pytest.mark.parametrize("grade, expected", [
        (92, (3.7, "A-")),
        (90, (3.7, "A-")),
        (89, (3.3, "B+")),
        (83, (3.0, "B")),
        (82, (2.7, "B-")),
        (77, (2.3, "C+")),
        (76, (2.0, "C")),
        (70, (1.7, "C-")),
        (67, (1.3, "D+")),
        (63, (1.0, "D")),
        (60, (0.7, "D-")),
    ])
    def test_band_boundaries(self, grade, expected):
        assert gpa_info(grade) == expected

    def test_bands_partition_zero_to_hundred(self):
        for grade in range(0, 101):
            matches = [b for b in GPA_SCALE if b.low <= grade <= b.high]
            assert len(matches) == 1, grade

    def test_fractional_grade_between_bands(self):
        assert gpa_info(92.5) == (3.7, "A-")
        assert gpa_info(59.9) == (0.0, "F")

    @pytest.mark.parametrize("grade", [-1, 100.5, 150, math.nan])
    def test_out_of_table_defaults_to_f(self, grade):
        assert gpa_info(grade) == (0.0, "F")


# ---------------------------------------------------------------------------
# Threshold lookup: letter_for_average
# ---------------------------------------------------------------------------

class TestLetterForAverage:
    def test_exact_four_is_a(self):
        assert letter_for_average(4.0) == "A"

    def test_between_thresholds_takes_lower_entry(self):
        assert letter_for_average(3.75) == "A-"
        assert letter_for_average(3.5) == "B+"

    def test_zero_is_f(self):
        assert letter_for_average(0.0) == "F"

    def test_negative_falls_back_to_f(self):
        assert letter_for_average(-0.5) == "F"


# ---------------------------------------------------------------------------
# student_gpa
# ---------------------------------------------------------------------------

class TestStudentGpa:
    def test_no_grades_is_not_applicable(self):
        assert student_gpa([]) == GPAResult(grade_point_average=0, letter="N/A")

    def test_ninety_and_hundred(self, make_grade):
        result = student_gpa([make_grade(1, 90), make_grade(1, 100)])
        assert result == GPAResult(grade_point_average=3.85, letter="A-")

    def test_ninety_five_and_eighty_five_is_b_plus(self, make_grade):
        # mean(4.0, 3.0) = 3.50; first threshold <= 3.50 in table order is 3.3 → B+
        result = student_gpa([make_grade(1, 95), make_grade(1, 85)])
        assert result == GPAResult(grade_point_average=3.5, letter="B+")

    def test_duplicate_rows_both_count(self, make_grade):
        rows = [make_grade(1, 95), make_grade(1, 95), make_grade(1, 85)]
        assert student_gpa(rows) == GPAResult(grade_point_average=3.67, letter="B+")

    def test_all_failing_is_real_zero(self, make_grade):
        assert student_gpa([make_grade(1, 40)]) == GPAResult(grade_point_average=0.0, letter="F")

    def test_exact_half_rounds_up(self, make_grade):
        # (4 * 4.0 + 3 * 3.0 + 0.0) / 8 = 3.125 → 3.13
        rows = [make_grade(1, 95)] * 4 + [make_grade(1, 85)] * 3 + [make_grade(1, 40)]
        assert student_gpa(rows) == GPAResult(grade_point_average=3.13, letter="B")


# ---------------------------------------------------------------------------
# round_half_up
# ---------------------------------------------------------------------------

class TestRoundHalfUp:
    @pytest.mark.parametrize("value, digits, expected", [
        (20.5, 0, 21),
        (12.5, 0, 13),
        (87.5, 0, 88),
        (3.125, 2, 3.13),
        (3.124, 2, 3.12),
        (90.25, 1, 90.3),
    ])
    def test_halves_go_up(self, value, digits, expected):
        assert round_half_up(value, digits) == expected

    def test_whole_number_result_is_int(self):
        assert isinstance(round_half_up(20.5), int)
