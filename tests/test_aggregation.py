"""Tests for the aggregation engine: GPA stats, histograms, enrollment trend, tie-breaks."""

from __future__ import annotations

import pytest

from services.aggregation import (
    GPA_BINS,
    YearEnrollment,
    aggregate,
    enrollment_trend,
    first_max,
    gpa_histogram,
    parse_enrollment_term,
    year_over_year_growth,
)
from services.errors import MalformedEnrollmentDateError


# ---------------------------------------------------------------------------
# parse_enrollment_term
# ---------------------------------------------------------------------------

class TestParseEnrollmentTerm:
    def test_year_and_semester(self):
        assert parse_enrollment_term("2023 Fall") == (2023, "Fall")

    def test_extra_whitespace(self):
        assert parse_enrollment_term("  2021   Spring ") == (2021, "Spring")

    @pytest.mark.parametrize("value", ["2023", "Fall 2023", "2023 Winter", "2023-09-01", "", "2023 fall"])
    def test_malformed_raises(self, value):
        with pytest.raises(MalformedEnrollmentDateError) as excinfo:
            parse_enrollment_term(value, student_id=7)
        assert excinfo.value.student_id == 7
        assert excinfo.value.value == value


# ---------------------------------------------------------------------------
# Histogram / growth / tie-break helpers
# ---------------------------------------------------------------------------

class TestGpaHistogram:
    def test_bins_in_fixed_order(self):
        assert list(gpa_histogram([])) == [label for label, _ in GPA_BINS]

    def test_bin_edges(self):
        histogram = gpa_histogram([4.0, 3.99, 3.7, 3.69, 3.3, 3.0, 2.7, 2.3, 2.0, 1.99, 0])
        assert histogram == {
            "4.0": 1,
            "3.7-3.99": 2,
            "3.3-3.69": 2,
            "3.0-3.29": 1,
            "2.7-2.99": 1,
            "2.3-2.69": 1,
            "2.0-2.29": 1,
            "Below 2.0": 2,
        }

    def test_counts_sum_to_input_size(self):
        gpas = [i / 10 for i in range(0, 41)]
        assert sum(gpa_histogram(gpas).values()) == len(gpas)


class TestYearOverYearGrowth:
    def test_first_year_has_no_growth(self):
        by_year = {2021: YearEnrollment(total=2), 2022: YearEnrollment(total=3), 2023: YearEnrollment(total=3)}
        assert year_over_year_growth(by_year) == [(2022, 50.0), (2023, 0.0)]

    def test_single_year(self):
        assert year_over_year_growth({2023: YearEnrollment(total=4)}) == []

    def test_decline(self):
        by_year = {2020: YearEnrollment(total=4), 2021: YearEnrollment(total=1)}
        assert year_over_year_growth(by_year) == [(2021, -75.0)]


class TestEnrollmentTrend:
    def test_groups_by_year_and_semester_sorted(self, make_student):
        students = [
            make_student(1, enrollment_date="2023 Fall"),
            make_student(2, enrollment_date="2021 Spring"),
            make_student(3, enrollment_date="2023 Spring"),
            make_student(4, enrollment_date="2023 Fall"),
        ]
        trend = enrollment_trend(students)
        assert list(trend) == [2021, 2023]
        assert trend[2023].total == 3
        assert trend[2023].by_semester == {"Spring": 1, "Fall": 2}
        assert trend[2021].by_semester == {"Spring": 1, "Fall": 0}


class TestFirstMax:
    def test_tie_goes_to_first_seen(self):
        assert first_max({"Math": 2, "CS": 2, "Art": 1}) == "Math"

    def test_empty(self):
        assert first_max({}) is None


# ---------------------------------------------------------------------------
# aggregate
# ---------------------------------------------------------------------------

class TestAggregate:
    def test_sample_dataset(self, sample_records):
        students, grades, subjects = sample_records
        r = aggregate(students, grades, subjects, "summary")

        assert r.total_students == 3
        assert r.total_subjects == 2
        assert r.total_grades == 3
        assert (r.male_count, r.female_count) == (1, 2)
        assert {sid: info.grade_point_average for sid, info in r.student_gpas.items()} == {1: 3.5, 2: 3.7, 3: 0}
        assert r.average_gpa == 2.4
        assert r.honor_roll_count == 1
        assert (r.age_min, r.age_max, r.age_mean) == (19, 22, 20)
        assert (r.highest_grade, r.lowest_grade, r.average_grade) == (95, 85, 90.3)

    def test_mean_age_half_rounds_up(self, make_student):
        students = [make_student(1, age=20), make_student(2, age=21)]
        assert aggregate(students, [], [], "summary").age_mean == 21

    def test_histogram_counts_every_student(self, sample_records):
        students, grades, subjects = sample_records
        r = aggregate(students, grades, subjects, "summary")
        assert sum(r.gpa_distribution.values()) == len(students)
        assert r.gpa_distribution["3.3-3.69"] == 1
        assert r.gpa_distribution["3.7-3.99"] == 1
        assert r.gpa_distribution["Below 2.0"] == 1

    def test_major_stats_and_picks(self, sample_records):
        students, grades, subjects = sample_records
        r = aggregate(students, grades, subjects, "enrollment")

        assert list(r.major_stats) == ["CS", "Math"]
        assert r.major_stats["CS"].count == 2
        assert r.major_stats["CS"].average_gpa == 1.75
        assert r.major_stats["Math"].average_gpa == 3.7
        assert r.best_major == "Math"
        assert r.most_popular_major == "CS"
        # 2023 has one CS and one Math enrollee: tie resolved by scan order
        assert r.fastest_growing_major == "CS"

    def test_enrollment_trend_fields(self, sample_records):
        students, grades, subjects = sample_records
        r = aggregate(students, grades, subjects, "enrollment")

        assert {y: b.total for y, b in r.enrollment_by_year.items()} == {2022: 1, 2023: 2}
        assert r.year_over_year_growth == [(2023, 100.0)]
        assert len(r.year_over_year_growth) == len(r.enrollment_by_year) - 1
        assert r.earliest_term == (2022, "Fall")
        assert r.latest_term == (2023, "Fall")
        assert r.latest_term_count == 1

    def test_subject_averages(self, sample_records):
        students, grades, subjects = sample_records
        r = aggregate(students, grades, subjects, "performance")
        assert r.subject_stats[1].average_grade == 93.0
        assert r.subject_stats[2].average_grade == 85.0

    def test_best_major_tie_uses_first_seen(self, make_student, make_grade):
        students = [
            make_student(1, major="Physics"),
            make_student(2, major="Biology"),
        ]
        grades = [make_grade(1, 85), make_grade(2, 85)]
        r = aggregate(students, grades, [], "summary")
        assert r.best_major == "Physics"

    def test_majors_are_case_sensitive(self, make_student):
        students = [make_student(1, major="cs"), make_student(2, major="CS")]
        r = aggregate(students, [], [], "summary")
        assert list(r.major_stats) == ["cs", "CS"]

    def test_unrecognized_gender_excluded(self, make_student):
        students = [
            make_student(1, gender="Male"),
            make_student(2, gender="male"),
            make_student(3, gender="Other"),
        ]
        r = aggregate(students, [], [], "summary")
        assert (r.male_count, r.female_count) == (1, 0)

    def test_grades_for_unknown_students_are_ignored(self, make_student, make_grade):
        r = aggregate([make_student(1)], [make_grade(1, 95), make_grade(99, 40)], [], "summary")
        assert r.student_gpas[1].grade_point_average == 4.0
        assert 99 not in r.student_gpas

    def test_empty_snapshot(self):
        r = aggregate([], [], [], "summary")
        assert r.total_students == 0
        assert r.average_gpa == 0
        assert r.age_min is None and r.age_max is None and r.age_mean is None
        assert r.best_major is None and r.most_popular_major is None
        assert r.fastest_growing_major is None
        assert r.enrollment_by_year == {}
        assert r.year_over_year_growth == []
        assert sum(r.gpa_distribution.values()) == 0

    def test_malformed_enrollment_date_raises(self, make_student):
        students = [make_student(1), make_student(2, enrollment_date="September 2023")]
        with pytest.raises(MalformedEnrollmentDateError):
            aggregate(students, [], [], "enrollment")

    def test_performance_skips_enrollment_trend(self, make_student):
        students = [make_student(1, enrollment_date="unknown")]
        r = aggregate(students, [], [], "performance")
        assert r.enrollment_by_year == {}
        assert r.total_students == 1

    def test_inputs_are_not_mutated(self, sample_records):
        students, grades, subjects = sample_records
        before = [s.model_dump() for s in students], [g.model_dump() for g in grades]
        aggregate(students, grades, subjects, "summary")
        assert ([s.model_dump() for s in students], [g.model_dump() for g in grades]) == before
