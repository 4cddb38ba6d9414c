from config.settings import settings
from database.db import Database


def setup_database():
    database = Database(settings.DATABASE_URL)
    try:
        database.create_all()
    finally:
        database.dispose()
    print("✅ 테이블 생성 완료 (students, courses, grades)")


if __name__ == "__main__":
    setup_database()
