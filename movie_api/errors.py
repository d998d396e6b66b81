# ------------------------------------------------------------
# errors.py — API 에러 타입 및 저장소(DB) 실패 변환
# ------------------------------------------------------------

import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from .messages import t

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """
    {"message": "..."} 바디와 자체 상태코드로 응답되는 에러.
    - main.create_app에 등록된 exception handler가 JSONResponse로 변환
    """

    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


# 같은 제목(대소문자 무시)의 영화가 이미 있음
class DuplicateTitleError(ApiError):
    status_code = 409


class MovieNotFoundError(ApiError):
    status_code = 404


# 원인(접속 끊김/제약 위반/타임아웃 등)과 무관하게 저장소 실패는 모두 이 에러로 수렴
class StoreError(ApiError):
    status_code = 500


@contextmanager
def store_failure(db, message_key):
    """
    블록 안에서 발생한 SQLAlchemy 예외를 StoreError로 바꿉니다.

    1) 세션 rollback (커밋 전 flush된 변경도 되돌려서 부분 레코드가 남지 않음)
    2) 서버 로그에 스택트레이스 기록
    3) message_key에 해당하는 현지화 메시지로 StoreError 발생

    블록 안에서 직접 던진 ApiError(409/404 등)는 그대로 통과합니다.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("store failure (%s)", message_key)
        raise StoreError(t(message_key)) from exc
