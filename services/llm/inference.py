"""
services/llm/inference.py

집계 통계를 컨텍스트로 넣은 프롬프트를 텍스트 생성 서버에 보내고,
원시 응답을 정리(사고 과정 블록 제거, 헤더 정규화)해서 돌려준다.
"""

import logging
import re

from services.aggregation import AggregateResult
from services.llm.base import TextGenerator

logger = logging.getLogger(__name__)

INSIGHTS_QUESTION = (
    "Analyze this student data and provide insights about enrollment trends, "
    "GPA distribution, and popular majors."
)

_THINK_BLOCK = re.compile(r"<think>.*?</think>", re.DOTALL | re.IGNORECASE)
_INSTRUCTION_ARTIFACTS = re.compile(r"\[/?INST\]|<\|[^|>]*\|>|</?s>")
_HEADING = re.compile(r"^[ \t]*#{1,6}[ \t]*", re.MULTILINE)


def build_context_block(r: AggregateResult) -> str:
    lines = [
        "Student Statistics:",
        f"- Total Students: {r.total_students}",
        f"- Total Subjects: {r.total_subjects}",
        f"- Total Grade Records: {r.total_grades}",
        f"- Gender: {r.male_count} Male, {r.female_count} Female",
        f"- Average GPA: {r.average_gpa:.2f}",
        f"- Age Range: {r.age_min if r.age_min is not None else 'N/A'} - "
        f"{r.age_max if r.age_max is not None else 'N/A'} "
        f"(average {r.age_mean if r.age_mean is not None else 'N/A'})",
        "- GPA Distribution: "
        + ", ".join(f"{label}: {count}" for label, count in r.gpa_distribution.items()),
        "",
        "Majors:",
    ]
    lines += [
        f"- {major}: {st.count} students, average GPA {st.average_gpa:.2f}"
        for major, st in r.major_stats.items()
    ] or ["- none"]
    lines += ["", "Enrollment by Year:"]
    lines += [
        f"- {year}: {bucket.total} students "
        + "(" + ", ".join(f"{s}: {n}" for s, n in bucket.by_semester.items()) + ")"
        for year, bucket in r.enrollment_by_year.items()
    ] or ["- none"]
    if r.year_over_year_growth:
        lines += ["", "Year-over-Year Growth:"]
        lines += [f"- {year}: {pct:+.1f}%" for year, pct in r.year_over_year_growth]
    lines += [
        "",
        f"Best Performing Major: {r.best_major or 'N/A'}",
        f"Most Popular Major: {r.most_popular_major or 'N/A'}",
        f"Fastest Growing Major: {r.fastest_growing_major or 'N/A'}",
    ]
    return "\n".join(lines)


def build_prompt(question: str, r: AggregateResult) -> str:
    return (
        "You are an academic records analyst. Answer the question using ONLY the "
        "statistics below. If the statistics do not contain the answer, say so. "
        "Organize the answer into sections that start with '### '.\n\n"
        f"{build_context_block(r)}\n\n"
        f"Question: {question.strip()}\n\n"
        "Answer:"
    )


def sanitize_response(raw: str) -> str:
    text = _THINK_BLOCK.sub("", raw)
    text = _INSTRUCTION_ARTIFACTS.sub("", text)
    text = text.strip()
    text = _HEADING.sub("### ", text)

    chunks = [chunk.strip() for chunk in text.split("###")]
    preamble, sections = chunks[0], [c for c in chunks[1:] if c]
    if not sections:
        return preamble
    joined = "\n\n### ".join(sections)
    return f"{preamble}\n\n### {joined}" if preamble else f"### {joined}"


class InferenceBridge:
    def __init__(self, generator: TextGenerator):
        self.generator = generator

    async def ask_custom_question(self, question: str, context: AggregateResult) -> str:
        prompt = build_prompt(question, context)
        raw = await self.generator.generate(prompt)
        answer = sanitize_response(raw)
        logger.info("LLM answer: %d raw chars → %d sanitized chars", len(raw), len(answer))
        return answer

    async def generate_insights(self, context: AggregateResult) -> str:
        return await self.ask_custom_question(INSIGHTS_QUESTION, context)
