# app/database.py

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from app.core.config import get_settings

settings = get_settings()

# sqlite는 요청 스레드가 달라도 같은 연결을 쓸 수 있어야 함
connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

# 엔진 생성
engine = create_engine(
    settings.database_url,
    echo=settings.sql_echo,  # SQL 로그 출력
    pool_pre_ping=True,  # 연결 상태 확인
    connect_args=connect_args,
)

# 세션 팩토리 생성
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

# Base 클래스 생성
Base = declarative_base()


# 의존성 주입용 함수
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
