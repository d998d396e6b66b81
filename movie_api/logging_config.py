# ------------------------------------------------------------
# logging_config.py — 프로세스 로깅 설정
# ------------------------------------------------------------

import logging

# 예: 2026-10-19 12:00:00,000 INFO [movie_api.routers.movies] movie created id=1 ...
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level="INFO"):
    """
    루트 로거에 레벨과 stream handler 1개를 설정합니다.
    - level: "DEBUG" / "INFO" 같은 문자열 또는 logging 상수 (config.LOG_LEVEL)
    - 각 모듈은 logging.getLogger(__name__)로 로거를 얻어 사용
    """
    root = logging.getLogger()
    root.setLevel(level.upper() if isinstance(level, str) else level)

    # 이미 핸들러가 있으면(uvicorn/pytest 등) 중복 등록하지 않음
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
