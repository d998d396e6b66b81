# ------------------------------------------------------------
# repository.py — 라우터가 사용하는 영화/장르/언어 영속화 연산
# ------------------------------------------------------------

from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from .db import ci_lower
from .models import Genre, Language, Movie


class MovieRepository:
    """
    요청 하나의 Session을 감싸는 영화 저장소.
    - 쓰기 연산(create/update/delete)은 각자 commit까지 수행
    - 예외 처리(rollback/상태코드 변환)는 호출하는 쪽(errors.store_failure)에서 담당
    """

    def __init__(self, db: Session):
        self.db = db

    def _with_relations(self):
        # 장르/언어를 JOIN으로 한 번에 로드 (응답 직렬화 시 N+1 방지)
        return self.db.query(Movie).options(joinedload(Movie.genre), joinedload(Movie.language))

    def list_ordered(self) -> List[Movie]:
        # SELECT ... FROM movies JOIN genres JOIN languages ORDER BY title ASC
        return self._with_relations().order_by(Movie.title.asc()).all()

    def list_by_genre_name(self, genre_name: str) -> List[Movie]:
        # 장르 이름 대소문자 무시 비교: lower(genres.name) = :name (파이썬에서 lower 처리)
        return (
            self._with_relations()
            .join(Movie.genre)
            .filter(ci_lower(Genre.name) == genre_name.lower())
            .order_by(Movie.title.asc())
            .all()
        )

    def find_by_title(self, title: str, exclude_id: Optional[int] = None) -> Optional[Movie]:
        # 제목 대소문자 무시 비교 (비ASCII 포함, db.ci_lower 참고)
        query = self.db.query(Movie).filter(ci_lower(Movie.title) == title.lower())
        if exclude_id is not None:
            query = query.filter(Movie.id != exclude_id)
        return query.first()

    def get(self, movie_id: int) -> Optional[Movie]:
        return self.db.get(Movie, movie_id)

    def create(self, **fields) -> Movie:
        movie = Movie(**fields)
        self.db.add(movie)
        self.db.commit()
        self.db.refresh(movie)
        return movie

    def update(self, movie: Movie, **fields) -> Movie:
        # 전달된 필드만 반영 (부분 수정)
        for name, value in fields.items():
            setattr(movie, name, value)
        self.db.commit()
        self.db.refresh(movie)
        return movie

    def delete(self, movie: Movie) -> None:
        self.db.delete(movie)
        self.db.commit()


class LookupRepository:
    """장르/언어 조회 전용 저장소."""

    def __init__(self, db: Session):
        self.db = db

    def genres(self) -> List[Genre]:
        return self.db.query(Genre).order_by(Genre.name.asc()).all()

    def languages(self) -> List[Language]:
        return self.db.query(Language).order_by(Language.name.asc()).all()
