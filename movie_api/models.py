# ------------------------------------------------------------
# models.py — SQLAlchemy ORM 모델 정의 (genres/languages/movies)
# ------------------------------------------------------------

from sqlalchemy import Column, Integer, String, Date, ForeignKey, UniqueConstraint
from sqlalchemy.dialects import mysql
from sqlalchemy.orm import relationship
from .db import Base  # Declarative Base: 모든 ORM 모델의 베이스 클래스


def ci_string(length):
    """
    대소문자만 무시하고 악센트는 구분하는 문자열 컬럼 타입.
    - MySQL 8 기본 collation(utf8mb4_0900_ai_ci)은 악센트까지 무시해서 "Amelie" = "Amélie"가 됨
      → MySQL에서는 utf8mb4_0900_as_ci로 고정 (MySQL 8.0 이상 필요)
    - SQLite 등 다른 DB는 일반 String
    """
    return String(length).with_variant(mysql.VARCHAR(length, collation="utf8mb4_0900_as_ci"), "mysql")


# ------------------------------
# Genre: 장르 조회용 테이블
# ------------------------------
class Genre(Base):
    __tablename__ = "genres"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(ci_string(100), nullable=False)

    # 장르와 영화의 1:N 관계
    movies = relationship("Movie", back_populates="genre")


# ------------------------------
# Language: 언어 조회용 테이블
# ------------------------------
class Language(Base):
    __tablename__ = "languages"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)

    movies = relationship("Movie", back_populates="language")


# ------------------------------
# Movie: 영화 테이블
# ------------------------------
class Movie(Base):
    __tablename__ = "movies"

    id = Column(Integer, primary_key=True, index=True)

    # 제목 중복은 애플리케이션에서 대소문자 무시로 먼저 검사하고,
    # DB UNIQUE 제약(MySQL에서는 ci_string의 _as_ci collation으로 대소문자 무시)으로 동시 요청 경쟁도 막음
    title = Column(ci_string(255), nullable=False)

    # FK 존재 여부는 핸들러가 미리 검사하지 않고 DB 참조 무결성에 맡김
    genre_id = Column(Integer, ForeignKey("genres.id"), nullable=False)
    language_id = Column(Integer, ForeignKey("languages.id"), nullable=False)

    # 아카데미 수상 횟수. 기본값 0
    oscar_count = Column(Integer, nullable=False, default=0)

    # 개봉일 (요청의 날짜 문자열을 파싱해서 저장)
    release_date = Column(Date, nullable=False)

    genre = relationship("Genre", back_populates="movies")
    language = relationship("Language", back_populates="movies")

    __table_args__ = (UniqueConstraint("title", name="uix_movie_title"),)
