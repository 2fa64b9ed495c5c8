# app/core/config.py

from functools import lru_cache
from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """설정 클래스"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # 애플리케이션 설정
    app_name: str = Field(default="Film Explorer", description="애플리케이션 이름")
    debug: bool = Field(default=False, description="디버그 모드")

    # 데이터베이스 설정
    database_url: str = Field(default="sqlite:///./filmexplorer.db", description="DB 접속 URL")
    sql_echo: bool = Field(default=False, description="SQL 로그 출력 여부")

    # JWT 인증 설정
    secret_key: str = Field(default="secret-jwt-key", description="JWT 토큰 암호화 키")
    algorithm: str = Field(default="HS256", description="JWT 알고리즘")
    access_token_expire_minutes: int = Field(default=60 * 24, description="JWT 토큰 만료 시간(분)")

    # CORS 설정
    allowed_origins: List[str] = Field(
        default=["http://localhost:4200", "http://localhost:5173"],
        description="CORS 허용 도메인"
    )

    # 로깅 설정
    log_level: str = Field(default="INFO", description="로그 레벨")
    log_json: bool = Field(default=True, description="JSON 형식 로그 출력 여부")

    # 토큰 블랙리스트 정리 주기
    blacklist_sweep_interval_seconds: int = Field(
        default=3600, description="만료 토큰 정리 주기(초)"
    )

    # CSV 내보내기 기본 건수
    export_default_size: int = Field(default=10000, description="CSV 내보내기 기본 건수")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
