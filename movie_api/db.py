# -------------------------------------------------------
# db.py — SQLAlchemy 엔진/세션팩토리 생성 및 FastAPI 의존성 정의
# -------------------------------------------------------

from fastapi import Request
from sqlalchemy import String, create_engine, event
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql.functions import FunctionElement

# ----------------------------------------------
# Declarative Base
# ----------------------------------------------
# - 모든 ORM 모델이 상속받는 베이스 클래스
# - models.py에서 class Model(Base): __tablename__=... 형태로 사용
Base = declarative_base()


# ----------------------------------------------
# ci_lower(): 대소문자 무시 비교용 lower()
# ----------------------------------------------
# - SQLite 내장 lower()는 ASCII만 변환하므로 ("É" → "É" 그대로)
#   SQLite에서는 커넥션마다 등록한 파이썬 str.lower 기반 unicode_lower()로 컴파일
# - 그 외(MySQL 등)는 일반 lower()
class ci_lower(FunctionElement):
    type = String()
    name = "ci_lower"
    inherit_cache = True


@compiles(ci_lower)
def _compile_ci_lower(element, compiler, **kw):
    return "lower(%s)" % compiler.process(element.clauses, **kw)


@compiles(ci_lower, "sqlite")
def _compile_ci_lower_sqlite(element, compiler, **kw):
    return "unicode_lower(%s)" % compiler.process(element.clauses, **kw)


def _unicode_lower(value):
    return value.lower() if value is not None else None


def _sqlite_on_connect(dbapi_connection, connection_record):
    # SQLite는 PRAGMA foreign_keys=ON 없이는 FK를 검사하지 않음
    # → 없는 genre_id/language_id INSERT가 IntegrityError로 거부되도록 커넥션마다 켬
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
    dbapi_connection.create_function("unicode_lower", 1, _unicode_lower, deterministic=True)


def build_engine(url):
    """
    URL로부터 SQLAlchemy Engine을 생성합니다. (이 시점에는 실제 접속하지 않음)

    - MySQL:
        pool_pre_ping=True  → 풀에서 커넥션을 빌리기 전에 ping으로 죽은 커넥션 감지
        pool_recycle=3600   → 'MySQL server has gone away' 방지를 위해 1시간마다 커넥션 재생성
    - SQLite(로컬/테스트):
        check_same_thread=False → FastAPI 스레드풀에서 같은 커넥션 사용 허용
        메모리 DB(":memory:")는 StaticPool로 커넥션 1개를 공유해야 테이블이 유지됨
        커넥션마다 FK 검사 ON + unicode_lower() 등록 (_sqlite_on_connect)
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, **kwargs)
        event.listen(engine, "connect", _sqlite_on_connect)
        return engine
    return create_engine(url, pool_pre_ping=True, pool_recycle=3600)


def build_session_factory(engine):
    """
    세션팩토리 생성
    - autocommit=False: 명시적 commit() 호출 전까지 트랜잭션 커밋되지 않음
    - autoflush=False:  쿼리 실행 시점에 변경사항 자동 flush 방지
    - expire_on_commit=False: 커밋 후에도 응답 직렬화를 위해 로드된 속성 유지
    """
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def get_db(request: Request):
    """
    FastAPI 의존성 주입용 DB 세션 제공자(Generator)

    세션팩토리는 전역 변수가 아니라 앱 팩토리(main.create_app)가 만든 것을
    app.state에서 꺼내 씁니다. 테스트에서는 다른 엔진으로 만든 앱을 쓰면 됩니다.

    동작:
    1) 요청이 들어오면 app.state.session_factory()로 세션 생성
    2) 핸들러에 주입(yield)
    3) 응답 후 finally 블록에서 세션 종료(close)
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
