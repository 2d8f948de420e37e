from sqlalchemy import Column, Integer, Float, String, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base

class Grade(Base):
    __tablename__ = "grades"  # 학생별 과목 성적 테이블

    id = Column(Integer, primary_key=True, index=True)     # 성적 고유 ID (Primary Key)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False, index=True)
    grade = Column(Float, nullable=False)                  # 점수 (0~100)
    semester = Column(String(20), nullable=False)          # 학기 (예: "2024 Spring")
    created_at = Column(String(40), nullable=False)        # 생성 시각 (ISO-8601, UTC)

    # (student, subject, semester) 중복 행 허용: 모두 GPA 평균에 반영됨
    student = relationship("Student", back_populates="grades")
    subject = relationship("Subject", back_populates="grades")
