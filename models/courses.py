from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, Text, func
from sqlalchemy.orm import relationship
from database.db import Base


class Course(Base):
    __tablename__ = "courses"  # 과목 정보 테이블
    __table_args__ = (
        CheckConstraint("credits > 0", name="ck_courses_credits_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)             # 과목 고유 ID (Primary Key)
    code = Column(String(20), unique=True, nullable=False)         # 과목 코드 (예: CS101, 고유)
    name = Column(String(100), nullable=False)                     # 과목 이름
    credits = Column(Integer, nullable=False)                      # 학점 (양의 정수)
    description = Column(Text)                                     # 과목 설명
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    grades = relationship("Grade", back_populates="course", cascade="all, delete-orphan", passive_deletes=True)
