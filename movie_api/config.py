# -------------------------------------------------------
# config.py — 환경변수 기반 설정 값 모음
# -------------------------------------------------------

import os
from dotenv import load_dotenv

# .env 파일의 환경변수를 현재 프로세스 환경에 주입
# - 운영환경에서는 .env 대신 실제 환경변수로 주입하는 것도 권장
load_dotenv()

# -----------------------------
# DB 접속 정보 (기본값 포함)
# -----------------------------
# NOTE: 기본값은 로컬 개발 편의를 위한 것이며,
#       운영환경에서는 반드시 안전한 비밀값으로 대체해야 합니다.
DB_USER = os.getenv("DB_USER", "fastapiid")
DB_PASSWORD = os.getenv("DB_PASSWORD", "fastapipw")
DB_HOST = os.getenv("DB_HOST", "127.0.0.1")
DB_PORT = os.getenv("DB_PORT", "3306")
DB_NAME = os.getenv("DB_NAME", "moviesdb")


def build_database_url(user=DB_USER, password=DB_PASSWORD, host=DB_HOST, port=DB_PORT, name=DB_NAME):
    """
    PyMySQL 드라이버용 SQLAlchemy URL을 조립합니다.
    - utf8mb4: 이모지 포함 전체 유니코드 지원
    - utf8mb4 기본 collation은 대소문자를 구분하지 않으므로 title UNIQUE 제약도 대소문자 무시로 동작
    """
    return f"mysql+pymysql://{user}:{password}@{host}:{port}/{name}?charset=utf8mb4"


# DATABASE_URL이 있으면 그대로 사용 (예: sqlite:///./movies.db), 없으면 DB_* 값으로 조립
DATABASE_URL = os.getenv("DATABASE_URL") or build_database_url()

# 응답 메시지 언어 (pt-BR / ko / en)
MESSAGE_LOCALE = os.getenv("MESSAGE_LOCALE", "pt-BR")

# 로깅 레벨 (DEBUG / INFO / WARNING / ERROR)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# 쉼표로 구분된 CORS 허용 오리진 목록
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# `python -m movie_api.main` 실행 시 uvicorn 바인딩 주소
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "3000"))
