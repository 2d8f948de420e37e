"""
services/gpa.py

점수(0~100) → 4.0 만점 GPA 환산표와 학생별 GPA 계산.

같은 환산표를 두 가지 방식으로 조회한다.
- gpa_info(): 점수가 속한 구간을 찾는 범위 조회
- letter_for_average(): 평균 GPA 이하인 첫 grade_point를 찾는 내림차순 임계값 조회
두 결과는 서로 다를 수 있으므로 함수를 분리해 둔다.
"""

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, NamedTuple


class GradeBand(NamedTuple):
    low: float            # 하한 (포함)
    high: float           # 상한 (포함)
    grade_point: float
    letter: str


class GradePoint(NamedTuple):
    grade_point: float
    letter: str


@dataclass(frozen=True)
class GPAResult:
    grade_point_average: float
    letter: str


# grade_point 내림차순, 0~100을 빈틈없이 덮음
GPA_SCALE = (
    GradeBand(93, 100, 4.0, "A"),
    GradeBand(90, 92, 3.7, "A-"),
    GradeBand(87, 89, 3.3, "B+"),
    GradeBand(83, 86, 3.0, "B"),
    GradeBand(80, 82, 2.7, "B-"),
    GradeBand(77, 79, 2.3, "C+"),
    GradeBand(73, 76, 2.0, "C"),
    GradeBand(70, 72, 1.7, "C-"),
    GradeBand(67, 69, 1.3, "D+"),
    GradeBand(63, 66, 1.0, "D"),
    GradeBand(60, 62, 0.7, "D-"),
    GradeBand(0, 59, 0.0, "F"),
)

DEFAULT_GRADE_POINT = GradePoint(0.0, "F")
NO_GRADES = GPAResult(grade_point_average=0, letter="N/A")


def gpa_info(grade: float) -> GradePoint:
    """
    점수가 속한 구간의 (grade_point, letter) 반환.
    정수 경계 사이의 소수 점수(예: 92.5)는 아래 구간의 하한 이상이므로 그 구간에 속한다.
    0~100 밖의 값이나 NaN은 기본값 (0.0, "F").
    """
    if not (GPA_SCALE[-1].low <= grade <= GPA_SCALE[0].high):
        return DEFAULT_GRADE_POINT
    for band in GPA_SCALE:
        if band.low <= grade <= band.high or band.high < grade < band.high + 1:
            return GradePoint(band.grade_point, band.letter)
    return DEFAULT_GRADE_POINT


def letter_for_average(average: float) -> str:
    """환산표 선언 순서대로 grade_point <= average 인 첫 항목의 letter (없으면 "F")"""
    for band in GPA_SCALE:
        if band.grade_point <= average:
            return band.letter
    return DEFAULT_GRADE_POINT.letter


def round_half_up(value: float, digits: int = 0):
    """정확히 .5인 값은 0에서 먼 쪽으로 올림 (내장 round()는 짝수 쪽으로 반올림)"""
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if digits == 0 else float(rounded)


def round2(value: float) -> float:
    return round_half_up(value, 2)


def student_gpa(grades: Iterable) -> GPAResult:
    """
    학생 한 명의 성적 행들로 GPA 계산.
    - 성적이 없으면 (0, "N/A"): 실제 0.0 GPA와 구분되는 값
    - 각 점수를 grade_point로 환산해 산술 평균 → 소수 둘째 자리 반올림
    """
    points = [gpa_info(g.grade).grade_point for g in grades]
    if not points:
        return NO_GRADES
    average = round2(math.fsum(points) / len(points))
    return GPAResult(grade_point_average=average, letter=letter_for_average(average))
