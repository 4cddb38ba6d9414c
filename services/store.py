"""
services/store.py

세션 하나를 감싸는 저장소 어댑터.
- 조회 결과는 ORM 객체 / Row 로 돌려주고, 없으면 None
- 쓰기는 commit 까지 수행, 실패하면 rollback 후 원래 예외(SQLAlchemyError)를 그대로 올림
- 예외를 도메인 에러로 바꾸는 일은 서비스 계층(grade_ledger, stats, ...)의 몫
"""

from typing import Any, List, Mapping, Optional, Tuple

from sqlalchemy import case, distinct, func, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from models.courses import Course
from models.grades import Grade
from models.students import Student

# 드라이버별 "고유 제약 위반" 코드
_PG_UNIQUE_VIOLATION = "23505"
_MYSQL_DUP_ENTRY = 1062
_SQLITE_CONSTRAINT_UNIQUE = 2067


def is_unique_violation(exc: IntegrityError) -> bool:
    """IntegrityError 가 고유 제약 위반인지 드라이버 에러 코드로 판별"""
    orig = getattr(exc, "orig", None)
    if orig is None:
        return False
    if getattr(orig, "pgcode", None) == _PG_UNIQUE_VIOLATION or getattr(orig, "sqlstate", None) == _PG_UNIQUE_VIOLATION:
        return True
    if getattr(orig, "sqlite_errorcode", None) == _SQLITE_CONSTRAINT_UNIQUE:
        return True
    args = getattr(orig, "args", ())
    if args and args[0] == _MYSQL_DUP_ENTRY:
        return True
    # sqlite3 (3.11 미만) 은 코드가 없어서 메시지로 판별
    return "UNIQUE constraint failed" in str(orig)


class EntityStore:
    def __init__(self, session: Session):
        self.session = session

    # ==========================================================
    # [공통] 원시 쿼리 / 쓰기
    # ==========================================================
    def execute(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> List[Any]:
        return list(self.session.execute(text(sql), params or {}).all())

    def add(self, entity):
        try:
            self.session.add(entity)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        self.session.refresh(entity)
        return entity

    def save(self, entity, fields: Mapping[str, Any]):
        try:
            for key, value in fields.items():
                setattr(entity, key, value)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        self.session.refresh(entity)
        return entity

    def remove(self, entity) -> None:
        try:
            self.session.delete(entity)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

    # ==========================================================
    # [단건/목록 조회]
    # ==========================================================
    def get_student(self, student_id: int) -> Optional[Student]:
        return self.session.query(Student).filter(Student.id == student_id).first()

    def get_course(self, course_id: int) -> Optional[Course]:
        return self.session.query(Course).filter(Course.id == course_id).first()

    def get_grade(self, grade_id: int) -> Optional[Grade]:
        return self.session.query(Grade).filter(Grade.id == grade_id).first()

    def list_students(self) -> List[Student]:
        return self.session.query(Student).order_by(Student.last_name, Student.first_name, Student.id).all()

    def list_courses(self) -> List[Course]:
        return self.session.query(Course).order_by(Course.code).all()

    def list_grades(self) -> List[Grade]:
        return self.session.query(Grade).order_by(Grade.id).all()

    def student_has_grades(self, student_id: int) -> bool:
        return self.session.query(Grade.id).filter(Grade.student_id == student_id).first() is not None

    def list_grades_by_student(self, student_id: int) -> List[Grade]:
        return self.session.query(Grade).filter(Grade.student_id == student_id).order_by(Grade.id).all()

    # ==========================================================
    # [통계/증명서용 조회]
    # ==========================================================
    def _grades_in_year(self, query, academic_year: Optional[str]):
        if academic_year:
            query = query.filter(Grade.academic_year == academic_year)
        return query

    def course_grade_summary(self, course_id: int, academic_year: Optional[str], pass_threshold: float):
        """과목 하나의 평균/최저/최고/학생 수/이수 비율(0~1). 성적이 없으면 None"""
        query = (
            self.session.query(
                Course.id.label("course_id"),
                Course.code.label("course_code"),
                Course.name.label("course_name"),
                func.avg(Grade.score).label("average_score"),
                func.min(Grade.score).label("min_score"),
                func.max(Grade.score).label("max_score"),
                func.count(distinct(Grade.student_id)).label("total_students"),
                func.avg(case((Grade.score >= pass_threshold, 1.0), else_=0.0)).label("success_ratio"),
            )
            .join(Grade, Grade.course_id == Course.id)
            .filter(Course.id == course_id)
            .group_by(Course.id, Course.code, Course.name)
        )
        return self._grades_in_year(query, academic_year).first()

    def global_grade_summary(self, academic_year: Optional[str]):
        """전체 평균 / 학생 수 / 과목 수 / 성적 건수 (항상 1행)"""
        query = self.session.query(
            func.avg(Grade.score).label("global_average"),
            func.count(distinct(Grade.student_id)).label("total_students"),
            func.count(distinct(Grade.course_id)).label("total_courses"),
            func.count(Grade.id).label("grades_count"),
        )
        return self._grades_in_year(query, academic_year).one()

    def average_course_success_rate(self, academic_year: Optional[str], pass_threshold: float) -> Optional[float]:
        """과목별 이수 비율(0~1)의 평균"""
        per_course = self._grades_in_year(
            self.session.query(
                Grade.course_id,
                func.avg(case((Grade.score >= pass_threshold, 1.0), else_=0.0)).label("ratio"),
            ),
            academic_year,
        ).group_by(Grade.course_id).subquery()
        return self.session.query(func.avg(per_course.c.ratio)).scalar()

    def student_course_grades(self, student_id: int, academic_year: Optional[str]) -> List[Tuple[Grade, Course]]:
        """학생의 (성적, 과목) 목록 — 학년도/학기/과목코드 순"""
        query = (
            self.session.query(Grade, Course)
            .join(Course, Course.id == Grade.course_id)
            .filter(Grade.student_id == student_id)
        )
        return self._grades_in_year(query, academic_year).order_by(
            Grade.academic_year, Grade.semester, Course.code
        ).all()
