# ------------------------------------------------------------
# main.py — FastAPI 앱 팩토리/미들웨어/라우터 등록 진입점
# ------------------------------------------------------------

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import config
from .db import Base, build_engine, build_session_factory
from .errors import ApiError
from .logging_config import setup_logging
from .routers import lookups, movies     # 모듈화된 라우터들(영화/장르·언어)

logger = logging.getLogger(__name__)


def create_app(engine=None):
    """
    FastAPI 애플리케이션을 만듭니다.

    - engine: 사용할 SQLAlchemy Engine. 생략하면 config.DATABASE_URL로 생성
      (테스트에서는 SQLite 메모리 엔진을 넘겨서 실제 MySQL 없이 실행)
    - 엔진/세션팩토리는 프로세스당 한 번 만들어 app.state에 보관하고,
      db.get_db 의존성이 요청마다 여기서 세션을 꺼내 씀
    """
    setup_logging(config.LOG_LEVEL)

    if engine is None:
        engine = build_engine(config.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # 앱 시작 시점에 ORM 메타데이터 기준으로 테이블을 생성
        # - create_all()은 "존재하지 않는 테이블만" 생성
        # - DB 접속 실패는 여기서 예외로 전파되어 서버 기동이 중단됨
        Base.metadata.create_all(bind=engine)
        logger.info("database ready: %s", engine.url.render_as_string(hide_password=True))
        yield
        engine.dispose()

    # title은 문서화(Swagger UI, /docs)에서 표시되는 서비스 제목
    app = FastAPI(title="Movie API", lifespan=lifespan)
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    # -------------------------------
    # CORS 설정 (운영에서는 CORS_ORIGINS로 구체 도메인 지정 권장)
    # -------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------
    # 에러 응답 형식 통일: {"message": "..."}
    # -------------------------------
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        if exc.status_code < 500:
            logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    # -------------------------------
    # 라우터 등록
    # - movies:  /movies
    # - lookups: /genres, /languages
    # -------------------------------
    app.include_router(movies.router)
    app.include_router(lookups.router)

    # 상태 확인(헬스체크)용 루트 엔드포인트
    @app.get("/")
    def root():
        return {"ok": True, "service": "movie-api"}

    return app


# uvicorn movie_api.main:app 으로 실행할 때 사용하는 기본 앱 인스턴스
# (엔진 생성만 하고 실제 DB 접속은 서버 시작(lifespan) 시점에 일어남)
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("movie_api.main:app", host=config.HOST, port=config.PORT)
