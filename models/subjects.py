from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from database.db import Base

class Subject(Base):
    __tablename__ = "subjects"  # 과목 정보 테이블

    id = Column(Integer, primary_key=True, index=True)         # 과목 고유 ID (Primary Key)
    name = Column(String(100), nullable=False)                # 과목 이름 (예: Calculus I)
    code = Column(String(20), nullable=False)                 # 과목 코드 (예: MATH101)
    description = Column(String(500))                         # 과목 설명 (선택)

    grades = relationship("Grade", back_populates="subject", passive_deletes=True)
