# -----------------------------------------------------------
# lookups.py — 장르/언어 조회 엔드포인트 (읽기 전용)
# -----------------------------------------------------------

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..repository import LookupRepository
from ..schemas import GenreOut, LanguageOut

router = APIRouter(tags=["lookups"])


@router.get("/genres", response_model=List[GenreOut])
def list_genres(db: Session = Depends(get_db)):
    """영화 등록 시 genre_id로 쓸 수 있는 장르 목록 (이름순)."""
    return LookupRepository(db).genres()


@router.get("/languages", response_model=List[LanguageOut])
def list_languages(db: Session = Depends(get_db)):
    return LookupRepository(db).languages()
