from datetime import date

import pytest
from fastapi.testclient import TestClient

from movie_api.db import build_engine
from movie_api.main import create_app
from movie_api.models import Genre, Language, Movie


@pytest.fixture
def engine():
    # in-memory SQLite, shared through StaticPool
    return build_engine("sqlite://")


@pytest.fixture
def app(engine):
    return create_app(engine)


@pytest.fixture
def client(app):
    # the context manager runs the lifespan, which creates the tables
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(app, client):
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def seeded(db):
    db.add_all([
        Genre(id=1, name="Sci-Fi"),
        Genre(id=2, name="Drama"),
        Language(id=1, name="English"),
        Language(id=2, name="French"),
    ])
    db.commit()
    return db


@pytest.fixture
def dune(seeded):
    movie = Movie(
        title="Dune",
        genre_id=1,
        language_id=1,
        oscar_count=6,
        release_date=date(2021, 10, 22),
    )
    seeded.add(movie)
    seeded.commit()
    return movie
