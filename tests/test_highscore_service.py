from __future__ import annotations

import threading

import pytest

from highscore_api.app.core.errors import StorageIOFailure
from highscore_api.app.schemas.highscore import Highscore


def hs(score: int, name: str = "alice", version: str = "1.0") -> Highscore:
    return Highscore(score=score, name=name, version=version)


def test_insert_then_list_all_returns_record_unchanged(service):
    record = hs(19, "abow", "0.0.1")
    service.insert(record)

    assert service.list_all() == [record]


def test_list_all_keeps_insertion_order_and_duplicates(service):
    records = [hs(5, "a"), hs(50, "b"), hs(5, "a")]
    for record in records:
        service.insert(record)

    assert service.list_all() == records


def test_list_by_version_is_exact_match(service):
    service.insert(hs(1, version="1.0"))
    service.insert(hs(2, version="1.0.1"))
    service.insert(hs(3, version="2.0"))
    service.insert(hs(4, version="V1.0"))

    assert [r.score for r in service.list_by_version("1.0")] == [1]
    assert [r.score for r in service.list_by_version("v1.0")] == []


def test_list_by_unknown_version_is_empty(service):
    service.insert(hs(10))

    assert service.list_by_version("nope") == []


def test_top_n_orders_by_score_descending(service):
    for score in (5, 50, 20):
        service.insert(hs(score))
    service.insert(hs(1000, version="2.0"))

    assert [r.score for r in service.top_n("1.0")] == [50, 20, 5]


def test_top_n_clips_to_n(service):
    for score in range(15):
        service.insert(hs(score))

    top = service.top_n("1.0", 10)

    assert [r.score for r in top] == list(range(14, 4, -1))


def test_top_n_with_fewer_records_than_n(service):
    service.insert(hs(7))
    service.insert(hs(3))

    assert [r.score for r in service.top_n("1.0", 10)] == [7, 3]
    assert service.top_n("empty", 10) == []


def test_top_n_ties_keep_insertion_order(service):
    service.insert(hs(10, "first"))
    service.insert(hs(20, "best"))
    service.insert(hs(10, "second"))

    assert [r.name for r in service.top_n("1.0")] == ["best", "first", "second"]


def test_top_n_rejects_negative_n(service):
    with pytest.raises(ValueError):
        service.top_n("1.0", -1)


def test_query_with_limit_zero_is_empty(service):
    service.insert(hs(1))

    assert service.query(limit=0) == []


def test_concurrent_inserts_are_all_stored(service):
    errors = []

    def worker(n: int) -> None:
        try:
            for i in range(20):
                service.insert(hs(n * 100 + i, name=f"player{n}"))
        except Exception as exc:  # pragma: no cover - reported below
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    scores = sorted(r.score for r in service.list_all())
    assert scores == sorted(n * 100 + i for n in range(8) for i in range(20))


def test_undecodable_row_fails_whole_query(service, pool):
    service.insert(hs(1))
    with pool.connection() as conn:
        conn.execute("INSERT INTO highscores (version, score, name) VALUES ('1.0', 'lots', 'bob')")
    service.insert(hs(2))

    with pytest.raises(StorageIOFailure):
        service.list_all()
    with pytest.raises(StorageIOFailure):
        service.top_n("1.0")


def test_negative_stored_score_fails_query(service, pool):
    with pool.connection() as conn:
        conn.execute("INSERT INTO highscores (version, score, name) VALUES ('1.0', -5, 'bob')")

    with pytest.raises(StorageIOFailure):
        service.list_by_version("1.0")


def test_insert_failure_is_raised(service, pool):
    with pool.connection() as conn:
        conn.execute("DROP TABLE highscores")

    with pytest.raises(StorageIOFailure):
        service.insert(hs(1))
