import logging

from sqlalchemy.exc import SQLAlchemyError

from services.result import Err, Internal, NotFound, Ok, Result
from services.store import EntityStore

logger = logging.getLogger(__name__)


def validate_references(store: EntityStore, student_id: int, course_id: int) -> Result:
    """
    성적 등록 전 학생/과목 존재 여부 확인 (읽기 전용)
    - 학생을 먼저 확인: 둘 다 없으면 항상 "student" 로 보고
    """
    try:
        if store.get_student(student_id) is None:
            return Err(NotFound("student"))
        if store.get_course(course_id) is None:
            return Err(NotFound("course"))
    except SQLAlchemyError as e:
        logger.exception("reference lookup failed: student_id=%s course_id=%s", student_id, course_id)
        return Err(Internal("Error while checking the student and course", e))
    return Ok(None)
