from sqlalchemy import (
    CheckConstraint, Column, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint, func,
)
from sqlalchemy.orm import relationship
from database.db import Base


class Grade(Base):
    __tablename__ = "grades"  # 성적 테이블 (학생 x 과목 x 학기 x 학년도 당 1건)
    __table_args__ = (
        UniqueConstraint(
            "student_id", "course_id", "semester", "academic_year",
            name="uq_grades_student_course_semester_year",
        ),
        CheckConstraint("score >= 0 AND score <= 100", name="ck_grades_score_range"),
    )

    id = Column(Integer, primary_key=True, index=True)      # 성적 고유 ID (Primary Key)
    student_id = Column(
        Integer, ForeignKey("students.id", ondelete="RESTRICT"), nullable=False, index=True
    )                                                       # 학생 ID (FK)
    course_id = Column(
        Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )                                                       # 과목 ID (FK)
    score = Column(Float, nullable=False)                   # 점수 (0~100)
    semester = Column(String(10), nullable=False)           # 학기 (Fall / Spring / Summer)
    academic_year = Column(String(9), nullable=False)       # 학년도 (예: 2021-2022)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    # ==========================================================
    # [관계 설정]
    # ==========================================================
    student = relationship("Student", back_populates="grades")
    course = relationship("Course", back_populates="grades")
