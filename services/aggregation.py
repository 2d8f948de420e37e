"""
services/aggregation.py

학생/성적/과목 스냅샷으로부터 리포트용 통계를 계산하는 순수 함수 모음.
- 모든 값은 요청마다 다시 계산되며 저장하지 않음
- 전공/연도별 누적은 삽입 순서가 유지되는 dict에 한 번의 순회로 쌓음
  (동점일 때는 먼저 등장한 전공이 이김)
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from services.errors import MalformedEnrollmentDateError
from services.gpa import round2, round_half_up, student_gpa

logger = logging.getLogger(__name__)

SEMESTERS = ("Spring", "Fall")       # 한 해 안에서의 순서
MALE, FEMALE = "Male", "Female"
HONOR_ROLL_GPA = 3.7

# (라벨, 하한 포함): 4.0은 정확히 4.0만, 마지막 구간은 2.0 미만 전부
GPA_BINS: Tuple[Tuple[str, float], ...] = (
    ("4.0", 4.0),
    ("3.7-3.99", 3.7),
    ("3.3-3.69", 3.3),
    ("3.0-3.29", 3.0),
    ("2.7-2.99", 2.7),
    ("2.3-2.69", 2.3),
    ("2.0-2.29", 2.0),
    ("Below 2.0", -math.inf),
)


# ==========================================================
# 결과 타입
# ==========================================================

@dataclass(frozen=True)
class StudentGPAInfo:
    student_id: int
    grade_point_average: float
    major: str


@dataclass
class MajorStats:
    count: int = 0
    gpa_total: float = 0.0
    latest_year_count: int = 0

    @property
    def average_gpa(self) -> float:
        return round2(self.gpa_total / self.count) if self.count else 0.0


@dataclass
class YearEnrollment:
    total: int = 0
    by_semester: Dict[str, int] = field(default_factory=lambda: {s: 0 for s in SEMESTERS})


@dataclass
class SubjectStats:
    name: str
    code: str
    count: int = 0
    grade_total: float = 0.0

    @property
    def average_grade(self) -> Optional[float]:
        return round_half_up(self.grade_total / self.count, 1) if self.count else None


@dataclass
class AggregateResult:
    report_type: Optional[str]
    total_students: int
    total_subjects: int
    total_grades: int
    male_count: int
    female_count: int
    student_gpas: Dict[int, StudentGPAInfo]
    average_gpa: float
    gpa_distribution: Dict[str, int]
    honor_roll_count: int
    age_min: Optional[int]
    age_max: Optional[int]
    age_mean: Optional[int]
    highest_grade: Optional[float]
    lowest_grade: Optional[float]
    average_grade: Optional[float]
    major_stats: Dict[str, MajorStats]
    best_major: Optional[str]
    most_popular_major: Optional[str]
    subject_stats: Dict[int, SubjectStats]
    # 아래는 입학 추세 계산 시에만 채워짐 (performance 리포트는 생략)
    enrollment_by_year: Dict[int, YearEnrollment] = field(default_factory=dict)
    year_over_year_growth: List[Tuple[int, float]] = field(default_factory=list)
    earliest_term: Optional[Tuple[int, str]] = None
    latest_term: Optional[Tuple[int, str]] = None
    latest_term_count: int = 0
    fastest_growing_major: Optional[str] = None


# ==========================================================
# 입학 시기 파싱 / 추세
# ==========================================================

def parse_enrollment_term(value: str, student_id=None) -> Tuple[int, str]:
    """ "2023 Fall" → (2023, "Fall"), 형식이 다르면 MalformedEnrollmentDateError """
    parts = (value or "").split()
    if len(parts) != 2 or not parts[0].isdigit() or parts[1] not in SEMESTERS:
        logger.warning("Malformed enrollment date %r for student %s", value, student_id)
        raise MalformedEnrollmentDateError(student_id, value)
    return int(parts[0]), parts[1]


def _term_key(term: Tuple[int, str]) -> Tuple[int, int]:
    return term[0], SEMESTERS.index(term[1])


def enrollment_trend(students: Sequence) -> Dict[int, YearEnrollment]:
    """연도 오름차순 dict: 연도별 합계와 학기별 인원"""
    by_year: Dict[int, YearEnrollment] = {}
    for s in students:
        year, semester = parse_enrollment_term(s.enrollment_date, s.id)
        bucket = by_year.setdefault(year, YearEnrollment())
        bucket.total += 1
        bucket.by_semester[semester] += 1
    return {year: by_year[year] for year in sorted(by_year)}


def year_over_year_growth(by_year: Dict[int, YearEnrollment]) -> List[Tuple[int, float]]:
    """연속한 연도 간 증감률(%): 첫 해는 결과에 포함되지 않음"""
    years = sorted(by_year)
    growth = []
    for prev, cur in zip(years, years[1:]):
        before, after = by_year[prev].total, by_year[cur].total
        growth.append((cur, round_half_up((after - before) / before * 100, 1)))
    return growth


# ==========================================================
# 분포 / 선택
# ==========================================================

def gpa_histogram(gpas: Iterable[float]) -> Dict[str, int]:
    histogram = {label: 0 for label, _ in GPA_BINS}
    for gpa in gpas:
        if gpa >= 4.0:
            histogram[GPA_BINS[0][0]] += 1
            continue
        for label, low in GPA_BINS[1:]:
            if gpa >= low:
                histogram[label] += 1
                break
        else:
            # NaN 등 어떤 구간에도 속하지 않는 값은 최하위 구간으로
            histogram[GPA_BINS[-1][0]] += 1
    return histogram


def first_max(items: Dict[str, float]) -> Optional[str]:
    """최댓값을 가진 키, 동점이면 먼저 등장한 키"""
    best_key, best_value = None, None
    for key, value in items.items():
        if best_value is None or value > best_value:
            best_key, best_value = key, value
    return best_key


def _mean(values: Sequence[float]) -> float:
    return math.fsum(values) / len(values)


# ==========================================================
# 메인 집계
# ==========================================================

def aggregate(students: Sequence, grades: Sequence, subjects: Sequence,
              report_type: Optional[str] = None) -> AggregateResult:
    grades_by_student: Dict[int, list] = {s.id: [] for s in students}
    for g in grades:
        if g.student_id in grades_by_student:
            grades_by_student[g.student_id].append(g)

    student_gpas: Dict[int, StudentGPAInfo] = {}
    major_stats: Dict[str, MajorStats] = {}
    for s in students:
        result = student_gpa(grades_by_student[s.id])
        student_gpas[s.id] = StudentGPAInfo(s.id, result.grade_point_average, s.major)
        stats = major_stats.setdefault(s.major, MajorStats())
        stats.count += 1
        stats.gpa_total += result.grade_point_average

    gpa_values = [info.grade_point_average for info in student_gpas.values()]
    ages = [s.age for s in students]
    raw_grades = [g.grade for g in grades]

    subject_stats = {sub.id: SubjectStats(sub.name, sub.code) for sub in subjects}
    for g in grades:
        if g.subject_id in subject_stats:
            subject_stats[g.subject_id].count += 1
            subject_stats[g.subject_id].grade_total += g.grade

    result = AggregateResult(
        report_type=report_type,
        total_students=len(students),
        total_subjects=len(subjects),
        total_grades=len(grades),
        male_count=sum(1 for s in students if s.gender == MALE),
        female_count=sum(1 for s in students if s.gender == FEMALE),
        student_gpas=student_gpas,
        average_gpa=round2(_mean(gpa_values)) if gpa_values else 0,
        gpa_distribution=gpa_histogram(gpa_values),
        honor_roll_count=sum(1 for gpa in gpa_values if gpa >= HONOR_ROLL_GPA),
        age_min=min(ages) if ages else None,
        age_max=max(ages) if ages else None,
        age_mean=round_half_up(_mean(ages)) if ages else None,
        highest_grade=max(raw_grades) if raw_grades else None,
        lowest_grade=min(raw_grades) if raw_grades else None,
        average_grade=round_half_up(_mean(raw_grades), 1) if raw_grades else None,
        major_stats=major_stats,
        best_major=first_max({m: st.average_gpa for m, st in major_stats.items()}),
        most_popular_major=first_max({m: st.count for m, st in major_stats.items()}),
        subject_stats=subject_stats,
    )

    if report_type != "performance":
        _apply_enrollment_trend(result, students)
    return result


def _apply_enrollment_trend(result: AggregateResult, students: Sequence) -> None:
    terms = {s.id: parse_enrollment_term(s.enrollment_date, s.id) for s in students}
    result.enrollment_by_year = enrollment_trend(students)
    result.year_over_year_growth = year_over_year_growth(result.enrollment_by_year)
    if not terms:
        return

    ordered = sorted(set(terms.values()), key=_term_key)
    result.earliest_term, result.latest_term = ordered[0], ordered[-1]
    result.latest_term_count = sum(1 for t in terms.values() if t == result.latest_term)

    latest_year = result.latest_term[0]
    for s in students:
        if terms[s.id][0] == latest_year:
            result.major_stats[s.major].latest_year_count += 1
    result.fastest_growing_major = first_max(
        {m: st.latest_year_count for m, st in result.major_stats.items()}
    )
