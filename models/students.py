from sqlalchemy import Column, Date, DateTime, Integer, String, func
from sqlalchemy.orm import relationship
from database.db import Base


class Student(Base):
    __tablename__ = "students"  # 학생 기본 정보 테이블

    id = Column(Integer, primary_key=True, index=True)                    # 내부 학생 ID (Primary Key)
    student_number = Column(String(20), unique=True, nullable=False)      # 학번 (외부 식별자, 고유)
    first_name = Column(String(100), nullable=False)                      # 이름
    last_name = Column(String(100), nullable=False)                       # 성
    email = Column(String(255), unique=True, nullable=False)              # 이메일 (고유)
    date_of_birth = Column(Date, nullable=False)                          # 생년월일
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    # ✅ 성적이 남아 있는 학생은 삭제 불가 (DB의 ON DELETE RESTRICT, ORM 은 자식 행을 건드리지 않음)
    grades = relationship("Grade", back_populates="student", passive_deletes="all")
