from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from database.db import Base

class Student(Base):
    __tablename__ = "students"  # 학생 기본 정보 테이블

    id = Column(Integer, primary_key=True, index=True)               # 고유 학생 ID (Primary Key)
    first_name = Column(String(100), nullable=False)                # 이름
    last_name = Column(String(100), nullable=False)                 # 성
    email = Column(String(200), nullable=False)                     # 이메일
    major = Column(String(100), nullable=False)                     # 전공 (대소문자 구분, 정규화 없음)
    enrollment_date = Column(String(20), nullable=False)            # 입학 시기 (예: "2023 Fall")
    gender = Column(String(10), nullable=False)                     # 성별 (Male, Female)
    age = Column(Integer, nullable=False)                           # 나이

    # 학생 삭제 시 성적도 함께 삭제 (DB 레벨 ON DELETE CASCADE)
    grades = relationship("Grade", back_populates="student", passive_deletes=True)
