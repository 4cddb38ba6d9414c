"""
services/catalog.py

학생/과목 기본 CRUD. 성적 원장과 같은 규칙으로 결과를 돌려준다.
- 고유 값(학번/이메일, 과목 코드) 중복 → Conflict (409)
- 성적이 참조 중인 학생 삭제, 연락처 외 필드 수정 → Conflict (409)
- 없는 id → NotFound (404)
- 그 외 DB 오류 → Internal (500, 단계별 메시지)
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models.courses import Course as CourseModel
from models.students import Student as StudentModel
from services.result import Conflict, Err, Internal, NotFound, Ok, Result
from services.store import EntityStore, is_unique_violation

logger = logging.getLogger(__name__)

STUDENT_HAS_GRADES = Conflict("student_has_grades", "Cannot delete a student who has grades")
STUDENT_LOCKED = Conflict("student_has_grades", "Only contact fields can change once the student has grades")


class _CatalogService(ABC):
    entity = ""
    model = None
    conflict = Conflict("", "")
    mutable_fields = ()

    def __init__(self, store: EntityStore):
        self.store = store

    @abstractmethod
    def _get(self, entity_id: int):
        ...

    @abstractmethod
    def _list(self):
        ...

    def _blocked(self, found, changes: Optional[Mapping[str, Any]] = None) -> Optional[Conflict]:
        """수정(changes) / 삭제(changes=None) 를 막아야 하면 Conflict"""
        return None

    def _write_failed(self, e: SQLAlchemyError, stage: str) -> Err:
        if isinstance(e, IntegrityError) and is_unique_violation(e):
            logger.warning("%s rejected: %s", self.entity, self.conflict.message)
            return Err(self.conflict)
        logger.exception("%s %s failed", self.entity, stage)
        return Err(Internal(f"Error while {stage} the {self.entity}", e))

    def create(self, fields: Mapping[str, Any]) -> Result:
        try:
            created = self.store.add(self.model(**fields))
        except SQLAlchemyError as e:
            return self._write_failed(e, "creating")
        logger.info("%s created: id=%s", self.entity, created.id)
        return Ok(created)

    def get_all(self) -> Result:
        try:
            return Ok(self._list())
        except SQLAlchemyError as e:
            logger.exception("%s listing failed", self.entity)
            return Err(Internal(f"Error while fetching {self.entity}s", e))

    def get_by_id(self, entity_id: int) -> Result:
        try:
            found = self._get(entity_id)
        except SQLAlchemyError as e:
            logger.exception("%s lookup failed: id=%s", self.entity, entity_id)
            return Err(Internal(f"Error while fetching the {self.entity}", e))
        if found is None:
            return Err(NotFound(self.entity))
        return Ok(found)

    def update(self, entity_id: int, fields: Mapping[str, Any]) -> Result:
        changes = {k: v for k, v in fields.items() if k in self.mutable_fields and v is not None}
        try:
            found = self._get(entity_id)
            if found is None:
                return Err(NotFound(self.entity))
            blocked = self._blocked(found, changes)
            if blocked is not None:
                logger.warning("%s update rejected: id=%s %s", self.entity, entity_id, blocked.message)
                return Err(blocked)
            return Ok(self.store.save(found, changes))
        except SQLAlchemyError as e:
            return self._write_failed(e, "updating")

    def delete(self, entity_id: int) -> Result:
        try:
            found = self._get(entity_id)
            if found is None:
                return Err(NotFound(self.entity))
            blocked = self._blocked(found)
            if blocked is not None:
                logger.warning("%s delete rejected: id=%s %s", self.entity, entity_id, blocked.message)
                return Err(blocked)
            self.store.remove(found)
        except SQLAlchemyError as e:
            return self._write_failed(e, "deleting")
        logger.info("%s deleted: id=%s", self.entity, entity_id)
        return Ok(None)


class StudentService(_CatalogService):
    entity = "student"
    model = StudentModel
    conflict = Conflict("student_number_or_email", "A student with this student number or email already exists")
    mutable_fields = ("first_name", "last_name", "email")
    # 성적이 참조한 뒤에도 바꿀 수 있는 연락처 필드
    contact_fields = ("email",)

    def _get(self, entity_id: int):
        return self.store.get_student(entity_id)

    def _list(self):
        return self.store.list_students()

    def _blocked(self, found, changes=None):
        if not self.store.student_has_grades(found.id):
            return None
        if changes is None:
            return STUDENT_HAS_GRADES
        locked = [k for k, v in changes.items() if k not in self.contact_fields and getattr(found, k) != v]
        return STUDENT_LOCKED if locked else None


class CourseService(_CatalogService):
    entity = "course"
    model = CourseModel
    conflict = Conflict("course_code", "A course with this code already exists")
    mutable_fields = ("code", "name", "credits", "description")

    def _get(self, entity_id: int):
        return self.store.get_course(entity_id)

    def _list(self):
        return self.store.list_courses()
