"""
성적 CSV → DB 일괄 등록
- 컬럼: student_id, course_id, score, semester, academic_year
- 행 형식은 GradeCreate 스키마로 검증, 성적 원장(GradeLedger)을 거치므로 학생/과목 확인, 중복 검사가 API와 동일
- 실패한 행은 건너뛰고 마지막에 요약 출력
"""

import csv
import sys

from pydantic import ValidationError

from config.settings import settings
from database.db import Database
from schemas.grades import GradeCreate
from services.grade_ledger import GradeLedger
from services.store import EntityStore

CSV_PATH = "data/grades.csv"  # ✅ 기본 파일 경로


def import_grades(csv_path: str, ledger: GradeLedger):
    created, rejected = 0, []

    with open(csv_path, newline="", encoding="utf-8-sig") as csvfile:
        reader = csv.DictReader(csvfile)
        for line_no, row in enumerate(reader, start=2):  # 1행은 헤더
            try:
                payload = GradeCreate.model_validate(row)
            except ValidationError as e:
                rejected.append((line_no, f"invalid row ({e.error_count()} error(s))"))
                continue

            result = ledger.create(
                student_id=payload.student_id,
                course_id=payload.course_id,
                score=payload.score,
                semester=payload.semester,
                academic_year=payload.academic_year,
            )
            if result.ok:
                created += 1
            else:
                rejected.append((line_no, result.error.message))

    return created, rejected


def main(csv_path: str = CSV_PATH):
    database = Database(settings.DATABASE_URL)
    try:
        with database.session() as db:
            created, rejected = import_grades(csv_path, GradeLedger(EntityStore(db)))
    finally:
        database.dispose()

    for line_no, message in rejected:
        print(f"⚠️  {line_no}행: {message}")
    print(f"✅ 성적 CSV → DB 등록 완료: {created}건 등록, {len(rejected)}건 제외")


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else CSV_PATH)
