"""
services/grade_ledger.py

성적 CRUD.
- 등록 전 학생/과목 존재 확인 (validator) → 정확한 404
- (학생, 과목, 학기, 학년도) 중복은 DB 고유 제약이 판정 → 409 로 변환
- 그 외 DB 예외는 단계별 메시지를 가진 Internal 로 감싸서 반환
"""

import logging
from typing import Any, Mapping

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models.grades import Grade as GradeModel
from services.result import Conflict, Err, Internal, NotFound, Ok, Result
from services.store import EntityStore, is_unique_violation
from services.validator import validate_references

logger = logging.getLogger(__name__)

GRADE_UNIQUE = "grade_student_course_semester_year"
DUPLICATE_GRADE_MESSAGE = "A grade for this student/course/semester/year already exists"

# 수정 가능한 필드
MUTABLE_FIELDS = ("score", "semester", "academic_year")


class GradeLedger:
    def __init__(self, store: EntityStore):
        self.store = store

    # ✅ [CREATE]
    def create(self, student_id: int, course_id: int, score: float, semester: str, academic_year: str) -> Result:
        checked = validate_references(self.store, student_id, course_id)
        if not checked.ok:
            logger.info("grade rejected: %s (student_id=%s, course_id=%s)", checked.error.message, student_id, course_id)
            return checked

        grade = GradeModel(
            student_id=student_id,
            course_id=course_id,
            score=score,
            semester=semester,
            academic_year=academic_year,
        )
        try:
            created = self.store.add(grade)
        except IntegrityError as e:
            if is_unique_violation(e):
                logger.warning(
                    "duplicate grade: student_id=%s course_id=%s %s %s",
                    student_id, course_id, semester, academic_year,
                )
                return Err(Conflict(GRADE_UNIQUE, DUPLICATE_GRADE_MESSAGE))
            logger.exception("grade insert failed")
            return Err(Internal("Error while creating the grade", e))
        except SQLAlchemyError as e:
            logger.exception("grade insert failed")
            return Err(Internal("Error while creating the grade", e))

        logger.info("grade created: id=%s", created.id)
        return Ok(created)

    # ✅ [READ] 전체
    def get_all(self) -> Result:
        try:
            return Ok(self.store.list_grades())
        except SQLAlchemyError as e:
            logger.exception("grade listing failed")
            return Err(Internal("Error while fetching grades", e))

    # ✅ [READ] 학생별 (학생 존재 여부는 확인하지 않음 → 없으면 빈 목록)
    def get_by_student(self, student_id: int) -> Result:
        try:
            return Ok(self.store.list_grades_by_student(student_id))
        except SQLAlchemyError as e:
            logger.exception("grade listing failed: student_id=%s", student_id)
            return Err(Internal("Error while fetching the student's grades", e))

    # ✅ [UPDATE] 점수/학기/학년도 부분 수정
    def update(self, grade_id: int, fields: Mapping[str, Any]) -> Result:
        changes = {k: v for k, v in fields.items() if k in MUTABLE_FIELDS and v is not None}
        try:
            grade = self.store.get_grade(grade_id)
            if grade is None:
                return Err(NotFound("grade"))
            updated = self.store.save(grade, changes)
        except IntegrityError as e:
            if is_unique_violation(e):
                logger.warning("grade update collides with an existing grade: id=%s", grade_id)
                return Err(Conflict(GRADE_UNIQUE, DUPLICATE_GRADE_MESSAGE))
            logger.exception("grade update failed: id=%s", grade_id)
            return Err(Internal("Error while updating the grade", e))
        except SQLAlchemyError as e:
            logger.exception("grade update failed: id=%s", grade_id)
            return Err(Internal("Error while updating the grade", e))
        return Ok(updated)

    # ✅ [DELETE]
    def delete(self, grade_id: int) -> Result:
        try:
            grade = self.store.get_grade(grade_id)
            if grade is None:
                return Err(NotFound("grade"))
            self.store.remove(grade)
        except SQLAlchemyError as e:
            logger.exception("grade delete failed: id=%s", grade_id)
            return Err(Internal("Error while deleting the grade", e))
        logger.info("grade deleted: id=%s", grade_id)
        return Ok(None)
