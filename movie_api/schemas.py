from datetime import date
from pydantic import BaseModel
from typing import Optional


# ------------------------------------------------------------
# GenreOut / LanguageOut: 조회용 엔티티 응답 스키마
# ------------------------------------------------------------
class GenreOut(BaseModel):
    id: int
    name: str

    class Config:
        # ORM 객체(예: SQLAlchemy 모델)로부터 필드 맵핑 허용
        from_attributes = True


class LanguageOut(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


# ------------------------------------------------------------
# MovieOut: 클라이언트로 내보낼 "영화" 데이터의 응답 스키마
#  - genre / language는 중첩 객체로 함께 내보냄
# ------------------------------------------------------------
class MovieOut(BaseModel):
    id: int
    title: str
    genre_id: int
    language_id: int
    oscar_count: int
    release_date: date
    genre: GenreOut
    language: LanguageOut

    class Config:
        from_attributes = True


# ------------------------------------------------------------
# MovieCreate: 영화 등록 요청 바디(JSON) 스키마
#  - release_date는 "2021-10-22" 같은 날짜 문자열을 date로 파싱
# ------------------------------------------------------------
class MovieCreate(BaseModel):
    title: str
    genre_id: int
    language_id: int
    oscar_count: int = 0
    release_date: date


# ------------------------------------------------------------
# MovieUpdate: 부분 수정 요청 바디 스키마
#  - 보낸 필드만 반영 (model_dump(exclude_unset=True, exclude_none=True))
# ------------------------------------------------------------
class MovieUpdate(BaseModel):
    title: Optional[str] = None
    genre_id: Optional[int] = None
    language_id: Optional[int] = None
    oscar_count: Optional[int] = None
    release_date: Optional[date] = None


# ------------------------------------------------------------
# MessageOut: 확인/에러 응답 바디 {"message": "..."}
# ------------------------------------------------------------
class MessageOut(BaseModel):
    message: str
