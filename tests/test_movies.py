from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from movie_api.messages import t
from movie_api.models import Genre, Movie
from movie_api.repository import MovieRepository

DUNE = {
    "title": "Dune",
    "genre_id": 1,
    "language_id": 1,
    "oscar_count": 6,
    "release_date": "2021-10-22",
}


def _boom(*args, **kwargs):
    raise SQLAlchemyError("store is down")


# ---------- create ----------

def test_create_movie_returns_201_with_empty_body(client, seeded):
    res = client.post("/movies", json=DUNE)

    assert res.status_code == 201
    assert res.content == b""

    seeded.expire_all()
    movies = seeded.query(Movie).filter(Movie.title == "Dune").all()
    assert len(movies) == 1
    assert movies[0].release_date == date(2021, 10, 22)
    assert movies[0].oscar_count == 6


def test_create_duplicate_title_ignores_case(client, seeded):
    assert client.post("/movies", json=DUNE).status_code == 201

    res = client.post("/movies", json={**DUNE, "title": "dune"})

    assert res.status_code == 409
    assert res.json() == {"message": t("duplicate_title")}
    assert seeded.query(Movie).count() == 1


def test_create_oscar_count_defaults_to_zero(client, seeded):
    payload = {k: v for k, v in DUNE.items() if k != "oscar_count"}
    assert client.post("/movies", json=payload).status_code == 201

    seeded.expire_all()
    assert seeded.query(Movie).one().oscar_count == 0


def test_create_race_on_unique_constraint_is_a_conflict(client, dune, monkeypatch):
    # the first lookup misses (as if another request inserted in between),
    # the INSERT then hits the unique constraint
    real_find = MovieRepository.find_by_title
    calls = []

    def racy_find(self, title, exclude_id=None):
        calls.append(title)
        if len(calls) == 1:
            return None
        return real_find(self, title, exclude_id)

    monkeypatch.setattr(MovieRepository, "find_by_title", racy_find)

    res = client.post("/movies", json=DUNE)

    assert res.status_code == 409
    assert len(calls) == 2


def test_create_store_failure(client, seeded, monkeypatch):
    monkeypatch.setattr(MovieRepository, "create", _boom)

    res = client.post("/movies", json=DUNE)

    assert res.status_code == 500
    assert res.json() == {"message": t("create_failed")}
    assert seeded.query(Movie).count() == 0


def test_create_rejects_malformed_date(client, seeded):
    res = client.post("/movies", json={**DUNE, "release_date": "not a date"})
    assert res.status_code == 422


# ---------- list ----------

def test_list_movies_ordered_by_title_with_relations(client, seeded):
    for title, genre_id, language_id in [("Zodiac", 2, 1), ("Amelie", 2, 2), ("Dune", 1, 1)]:
        payload = {**DUNE, "title": title, "genre_id": genre_id, "language_id": language_id}
        assert client.post("/movies", json=payload).status_code == 201

    res = client.get("/movies")

    assert res.status_code == 200
    body = res.json()
    assert [m["title"] for m in body] == ["Amelie", "Dune", "Zodiac"]
    assert body[0]["genre"] == {"id": 2, "name": "Drama"}
    assert body[0]["language"] == {"id": 2, "name": "French"}
    assert body[1]["release_date"] == "2021-10-22"


def test_list_movies_empty(client, seeded):
    res = client.get("/movies")
    assert res.status_code == 200
    assert res.json() == []


def test_list_movies_by_genre_ignores_case(client, seeded):
    client.post("/movies", json=DUNE)
    client.post("/movies", json={**DUNE, "title": "Amelie", "genre_id": 2, "language_id": 2})
    client.post("/movies", json={**DUNE, "title": "Arrival"})

    res = client.get("/movies", params={"genre": "sci-fi"})

    assert res.status_code == 200
    assert [m["title"] for m in res.json()] == ["Arrival", "Dune"]
    assert all(m["genre"]["name"] == "Sci-Fi" for m in res.json())


def test_list_movies_by_unknown_genre(client, seeded):
    client.post("/movies", json=DUNE)
    assert client.get("/movies", params={"genre": "Western"}).json() == []


def test_list_movies_by_genre_store_failure(client, seeded, monkeypatch):
    monkeypatch.setattr(MovieRepository, "list_by_genre_name", _boom)

    res = client.get("/movies", params={"genre": "Drama"})

    assert res.status_code == 500
    assert res.json() == {"message": t("list_failed")}


# ---------- update ----------

def test_update_only_changes_sent_fields(client, dune, seeded):
    res = client.put(f"/movies/{dune.id}", json={"oscar_count": 5})

    assert res.status_code == 200
    assert res.json() == {"message": t("movie_updated")}

    seeded.expire_all()
    movie = seeded.get(Movie, dune.id)
    assert movie.oscar_count == 5
    assert movie.title == "Dune"
    assert movie.release_date == date(2021, 10, 22)
    assert movie.genre_id == 1


def test_update_parses_release_date(client, dune, seeded):
    res = client.put(f"/movies/{dune.id}", json={"release_date": "2021-09-03"})

    assert res.status_code == 200
    seeded.expire_all()
    assert seeded.get(Movie, dune.id).release_date == date(2021, 9, 3)


def test_update_null_release_date_keeps_existing(client, dune, seeded):
    res = client.put(f"/movies/{dune.id}", json={"release_date": None, "oscar_count": 1})

    assert res.status_code == 200
    seeded.expire_all()
    assert seeded.get(Movie, dune.id).release_date == date(2021, 10, 22)


def test_update_missing_movie_stops_before_update(client, seeded, monkeypatch):
    calls = []
    monkeypatch.setattr(MovieRepository, "update", lambda self, movie, **f: calls.append(f))

    res = client.put("/movies/999", json={"oscar_count": 5})

    assert res.status_code == 404
    assert res.json() == {"message": t("movie_not_found")}
    assert calls == []


def test_update_title_to_existing_title_is_a_conflict(client, dune, seeded):
    client.post("/movies", json={**DUNE, "title": "Arrival"})
    arrival = seeded.query(Movie).filter(Movie.title == "Arrival").one()

    res = client.put(f"/movies/{arrival.id}", json={"title": "DUNE"})

    assert res.status_code == 409
    seeded.expire_all()
    assert seeded.get(Movie, arrival.id).title == "Arrival"


def test_update_title_case_of_same_movie(client, dune, seeded):
    res = client.put(f"/movies/{dune.id}", json={"title": "DUNE"})

    assert res.status_code == 200
    seeded.expire_all()
    assert seeded.get(Movie, dune.id).title == "DUNE"


def test_update_store_failure(client, dune, monkeypatch):
    monkeypatch.setattr(MovieRepository, "update", _boom)

    res = client.put(f"/movies/{dune.id}", json={"oscar_count": 1})

    assert res.status_code == 500
    assert res.json() == {"message": t("update_failed")}


# ---------- delete ----------

def test_delete_movie(client, dune, seeded):
    res = client.delete(f"/movies/{dune.id}")

    assert res.status_code == 200
    assert res.json() == {"message": t("movie_deleted")}
    assert client.get("/movies").json() == []


def test_delete_missing_movie(client, dune, seeded):
    res = client.delete("/movies/999")

    assert res.status_code == 404
    assert res.json() == {"message": t("movie_not_found")}
    assert seeded.query(Movie).count() == 1


def test_delete_store_failure(client, dune, seeded, monkeypatch):
    monkeypatch.setattr(MovieRepository, "get", _boom)

    res = client.delete(f"/movies/{dune.id}")

    assert res.status_code == 500
    assert res.json() == {"message": t("delete_failed")}
    assert seeded.query(Movie).count() == 1


# ---------- store integrity ----------

def test_create_with_unknown_genre_is_rejected_by_the_store(client, seeded):
    res = client.post("/movies", json={**DUNE, "genre_id": 999})

    assert res.status_code == 500
    assert res.json() == {"message": t("create_failed")}
    assert seeded.query(Movie).count() == 0
    # no dangling movie, so listing keeps working
    assert client.get("/movies").json() == []


def test_create_failure_at_commit_leaves_no_record(client, seeded, monkeypatch):
    def flush_then_fail(self):
        self.flush()
        raise SQLAlchemyError("commit failed")

    monkeypatch.setattr(Session, "commit", flush_then_fail)

    res = client.post("/movies", json=DUNE)

    assert res.status_code == 500
    assert res.json() == {"message": t("create_failed")}
    assert seeded.query(Movie).count() == 0


def test_list_movies_store_failure(client, seeded, monkeypatch):
    monkeypatch.setattr(MovieRepository, "list_ordered", _boom)

    res = client.get("/movies")

    assert res.status_code == 500
    assert res.json() == {"message": t("list_failed")}


# ---------- non-ASCII titles and genres ----------

def test_create_duplicate_accented_title_ignores_case(client, seeded):
    assert client.post("/movies", json={**DUNE, "title": "Élan"}).status_code == 201

    res = client.post("/movies", json={**DUNE, "title": "élan"})

    assert res.status_code == 409
    assert seeded.query(Movie).count() == 1


def test_list_movies_by_accented_genre_ignores_case(client, seeded):
    seeded.add(Genre(id=3, name="Ação"))
    seeded.commit()
    client.post("/movies", json={**DUNE, "title": "Cidade de Deus", "genre_id": 3})
    client.post("/movies", json=DUNE)

    res = client.get("/movies", params={"genre": "AÇÃO"})

    assert res.status_code == 200
    assert [m["title"] for m in res.json()] == ["Cidade de Deus"]


# ---------- update race ----------

def test_update_race_on_unique_constraint_is_a_conflict(client, dune, seeded, monkeypatch):
    client.post("/movies", json={**DUNE, "title": "Arrival"})
    arrival = seeded.query(Movie).filter(Movie.title == "Arrival").one()

    real_find = MovieRepository.find_by_title
    calls = []

    def racy_find(self, title, exclude_id=None):
        calls.append(title)
        if len(calls) == 1:
            return None
        return real_find(self, title, exclude_id)

    monkeypatch.setattr(MovieRepository, "find_by_title", racy_find)

    res = client.put(f"/movies/{arrival.id}", json={"title": "Dune"})

    assert res.status_code == 409
    assert res.json() == {"message": t("duplicate_title")}
    assert len(calls) == 2
    seeded.expire_all()
    assert seeded.get(Movie, arrival.id).title == "Arrival"
