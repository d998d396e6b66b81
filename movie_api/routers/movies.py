# ---------------------------------------------
# movies.py — 영화 CRUD 엔드포인트
# ---------------------------------------------

import logging
from typing import List, Optional

# FastAPI의 APIRouter: 라우터 분리/모듈화를 위한 도구
# Depends: 의존성 주입(Dependency Injection)을 위한 헬퍼 (예: DB 세션)
from fastapi import APIRouter, Depends, Response, status

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..db import get_db
from ..errors import DuplicateTitleError, MovieNotFoundError, store_failure
from ..messages import t
from ..repository import MovieRepository
from ..schemas import MessageOut, MovieCreate, MovieOut, MovieUpdate

logger = logging.getLogger(__name__)

# 에러 응답도 {"message": "..."} 형태라서 Swagger 문서에 함께 표시
_ERRORS = {
    404: {"model": MessageOut},
    409: {"model": MessageOut},
    500: {"model": MessageOut},
}

router = APIRouter(prefix="/movies", tags=["movies"])


@router.get("", response_model=List[MovieOut], responses={500: _ERRORS[500]})
def list_movies(
    genre: Optional[str] = None,     # 쿼리 파라미터: 장르 이름 필터 (대소문자 무시)
    db: Session = Depends(get_db),
):
    """
    영화 목록을 제목 오름차순으로 반환합니다. 각 영화에는 genre/language가 중첩됩니다.

    - GET /movies               -> 전체
    - GET /movies?genre=drama   -> 장르 이름이 "Drama"/"drama" 등인 영화만
    """
    repo = MovieRepository(db)
    with store_failure(db, "list_failed"):
        if genre is not None:
            return repo.list_by_genre_name(genre)
        return repo.list_ordered()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    responses={409: _ERRORS[409], 500: _ERRORS[500]},
)
def create_movie(payload: MovieCreate, db: Session = Depends(get_db)):
    """
    영화를 등록합니다. 성공 시 201 + 빈 바디.

    1) 같은 제목(대소문자 무시)의 영화가 있으면 409
    2) 없으면 INSERT (release_date는 스키마에서 이미 date로 파싱됨)
    3) 동시 요청으로 DB UNIQUE 제약에 걸리면 다시 조회해서 중복이면 409
    """
    repo = MovieRepository(db)
    with store_failure(db, "create_failed"):
        if repo.find_by_title(payload.title):
            raise DuplicateTitleError(t("duplicate_title"))

        try:
            movie = repo.create(**payload.model_dump())
        except IntegrityError:
            db.rollback()
            if repo.find_by_title(payload.title):
                raise DuplicateTitleError(t("duplicate_title"))
            # FK 위반 등 다른 무결성 오류는 일반 저장소 실패로 처리
            raise

    logger.info("movie created id=%s title=%r", movie.id, movie.title)
    return Response(status_code=status.HTTP_201_CREATED)


@router.put("/{movie_id}", response_model=MessageOut, responses=_ERRORS)
def update_movie(movie_id: int, payload: MovieUpdate, db: Session = Depends(get_db)):
    """
    영화 정보를 부분 수정합니다. 보낸 필드만 바뀌고 나머지는 그대로 유지됩니다.
    - 없는 id면 404를 반환하고 UPDATE는 시도하지 않음
    - title을 다른 영화와 겹치게(대소문자 무시) 바꾸면 409
    """
    # 보내지 않았거나 null인 필드는 제외 (release_date 누락 시 기존 값 유지)
    fields = payload.model_dump(exclude_unset=True, exclude_none=True)

    repo = MovieRepository(db)
    with store_failure(db, "update_failed"):
        movie = repo.get(movie_id)
        if movie is None:
            raise MovieNotFoundError(t("movie_not_found"))

        if "title" in fields and repo.find_by_title(fields["title"], exclude_id=movie_id):
            raise DuplicateTitleError(t("duplicate_title"))

        try:
            repo.update(movie, **fields)
        except IntegrityError:
            # 등록과 같은 경쟁 조건: 조회 후 다른 요청이 같은 제목을 먼저 저장한 경우
            db.rollback()
            if "title" in fields and repo.find_by_title(fields["title"], exclude_id=movie_id):
                raise DuplicateTitleError(t("duplicate_title"))
            raise

    logger.info("movie updated id=%s fields=%s", movie_id, sorted(fields))
    return {"message": t("movie_updated")}


@router.delete(
    "/{movie_id}",
    response_model=MessageOut,
    responses={404: _ERRORS[404], 500: _ERRORS[500]},
)
def delete_movie(movie_id: int, db: Session = Depends(get_db)):
    repo = MovieRepository(db)
    with store_failure(db, "delete_failed"):
        movie = repo.get(movie_id)
        if movie is None:
            raise MovieNotFoundError(t("movie_not_found"))
        repo.delete(movie)

    logger.info("movie deleted id=%s", movie_id)
    return {"message": t("movie_deleted")}


# -----------------------------
# [추가 설명]
# -----------------------------
# 1) 제목 중복 검사는 "조회 후 INSERT"라서 동시 요청이 둘 다 통과할 수 있습니다.
#    models.Movie의 UNIQUE 제약이 두 번째 INSERT를 막고, 여기서 409로 변환합니다.
#
# 2) 저장소 오류(접속 끊김, 제약 위반, 타임아웃 등)는 원인을 구분하지 않고
#    라우트별 고정 메시지와 500으로 응답합니다. 원인은 서버 로그에 남습니다.
#
# 3) 예시 호출
#    - GET    /movies
#    - GET    /movies?genre=Drama
#    - POST   /movies      (JSON: {"title": "Dune", "genre_id": 1, "language_id": 1,
#                                  "oscar_count": 6, "release_date": "2021-10-22"})
#    - PUT    /movies/1    (JSON: {"oscar_count": 5})
#    - DELETE /movies/1
