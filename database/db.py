from contextlib import contextmanager

from sqlalchemy import create_engine, event               # SQLAlchemy 엔진 생성 도구
from sqlalchemy.orm import declarative_base, sessionmaker  # 모델 Base / 세션 팩토리

# ✅ 모델 정의 시 상속할 Base 클래스 (Declarative 방식 사용)
Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    엔진 + 세션 팩토리 묶음.
    - 프로세스 시작 시 한 번 생성(main.py lifespan), 종료 시 dispose()
    - 전역 싱글턴 대신 app.state 에 보관하고 get_db 의존성으로 세션을 나눠줌
    """

    def __init__(self, url: str, **engine_kwargs):
        self.url = url
        self.engine = create_engine(url, **engine_kwargs)
        if self.engine.dialect.name == "sqlite":
            # SQLite는 FK(ON DELETE CASCADE)가 기본 비활성화
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        # ✅ 세션 팩토리: DB 연결에 사용할 세션 생성기 정의
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self):
        # 모델 모듈이 import 되어 있어야 metadata 에 테이블이 등록됨
        from models import courses, grades, students  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def session(self):
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self):
        self.engine.dispose()
