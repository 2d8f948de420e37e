"""
services/report_formatter.py

집계 결과를 고정 레이아웃의 마크다운 텍스트로 변환.
- summary / enrollment / performance 세 가지 유형
- 그 외 유형은 예외 대신 INVALID_TYPE_RESPONSE 반환
"""

from typing import Optional, Tuple

from services.aggregation import HONOR_ROLL_GPA, AggregateResult
from services.gpa import round_half_up

REPORT_TYPES = ("summary", "enrollment", "performance")
INVALID_TYPE_RESPONSE = "Invalid query type"
NA = "N/A"


def _term(term: Optional[Tuple[int, str]]) -> str:
    return f"{term[0]} {term[1]}" if term else NA


def _num(value, suffix: str = "") -> str:
    if value is None:
        return NA
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value}{suffix}"


def _percent(part: int, total: int) -> str:
    return f"{round_half_up(part / total * 100)}%"


# ==========================================================
# [summary]
# ==========================================================
def format_summary(r: AggregateResult) -> str:
    distribution = "\n".join(
        f"* {label}: {count} students" for label, count in r.gpa_distribution.items()
    )
    majors = sorted(r.major_stats.items(), key=lambda item: item[1].count, reverse=True)
    majors_list = "\n".join(f"* {major}: {st.count} students" for major, st in majors) or f"* {NA}"

    return f"""### Student Data Overview

**Total Students**: {r.total_students}
**Total Subjects**: {r.total_subjects}
**Gender Distribution**:
* Male Students: {r.male_count}
* Female Students: {r.female_count}

### GPA Analysis
**Average GPA**: {r.average_gpa:.2f}
**GPA Distribution**:
{distribution}

### Major Distribution
**Total Majors**: {len(r.major_stats)}
**Popular Majors**:
{majors_list}

### Enrollment Insights
* Earliest Enrollment: {_term(r.earliest_term)}
* Latest Enrollment: {_term(r.latest_term)}
* Average Student Age: {_num(r.age_mean, " years")}"""


# ==========================================================
# [enrollment]
# ==========================================================
def format_enrollment(r: AggregateResult) -> str:
    growth = dict(r.year_over_year_growth)
    trend_lines = []
    for year, bucket in r.enrollment_by_year.items():
        semesters = ", ".join(f"{s}: {n}" for s, n in bucket.by_semester.items())
        line = f"* {year}: {bucket.total} students ({semesters})"
        if year in growth:
            line += f" [{growth[year]:+.1f}% year over year]"
        trend_lines.append(line)
    trend = "\n".join(trend_lines) or f"* {NA}"

    if r.total_students:
        gender_balance = (
            f"{_percent(r.male_count, r.total_students)} Male / "
            f"{_percent(r.female_count, r.total_students)} Female"
        )
        age_range = f"{r.age_min} - {r.age_max} years"
    else:
        gender_balance = age_range = NA

    return f"""### Enrollment Analysis

**Current Enrollment Status**
* Total Active Students: {r.total_students}
* Recent Enrollments ({_term(r.latest_term)}): {r.latest_term_count}

**Enrollment Trend by Year**
{trend}

**Major Distribution Trends**
* Most Popular Major: {r.most_popular_major or NA}
* Fastest Growing Major: {r.fastest_growing_major or NA}

**Demographics**
* Age Range: {age_range}
* Gender Balance: {gender_balance}"""


# ==========================================================
# [performance]
# ==========================================================
def format_performance(r: AggregateResult) -> str:
    by_major = "\n".join(
        f"* {major}: {st.average_gpa:.2f} GPA ({st.count} students)"
        for major, st in r.major_stats.items()
    ) or f"* {NA}"
    by_subject = "\n".join(
        f"* {st.name} ({st.code}): {_num(st.average_grade, '%')} average"
        for st in r.subject_stats.values()
    ) or f"* {NA}"

    return f"""### Academic Performance Metrics

**GPA Overview**
* Highest Grade: {_num(r.highest_grade, '%')}
* Lowest Grade: {_num(r.lowest_grade, '%')}
* Average GPA: {r.average_gpa:.2f}

**Performance by Major**
{by_major}

**Subject Averages**
{by_subject}

**Top Performers**
* Students with GPA of {HONOR_ROLL_GPA} or higher: {r.honor_roll_count}
* Best Performing Major: {r.best_major or NA}"""


_FORMATTERS = {
    "summary": format_summary,
    "enrollment": format_enrollment,
    "performance": format_performance,
}


def format_report(report_type: Optional[str], result: AggregateResult) -> str:
    formatter = _FORMATTERS.get(report_type)
    if formatter is None:
        return INVALID_TYPE_RESPONSE
    return formatter(result)
