import pytest

from roulette_pool.config import PoolConfig
from roulette_pool.exceptions import PoolModifiedError
from roulette_pool.pool import WeightedPool
from roulette_pool.session import DrawSession


def test_session_leaves_pool_untouched(fitness_pairs):
    pool = WeightedPool.from_pairs(fitness_pairs, PoolConfig(seed=7))
    before = list(pool)
    total = pool.total_weight

    drawn = list(pool.session())

    assert len(drawn) == 5
    assert len(pool) == 5
    assert pool.total_weight == total
    assert list(pool) == before


def test_session_order_matches_consuming_order(fitness_pairs, scripted):
    samples = [0.5, 0.0, 0.99, 0.3, 0.7]
    borrowing = WeightedPool.from_pairs(fitness_pairs, random_fn=scripted(samples))
    consuming = WeightedPool.from_pairs(fitness_pairs, random_fn=scripted(samples))

    assert list(borrowing.session()) == list(consuming.drain())


def test_session_returns_references_to_stored_values(scripted):
    values = [{"id": 1}, {"id": 2}]
    pool = WeightedPool.from_pairs([(1.0, values[0]), (1.0, values[1])], random_fn=scripted([0.75]))

    weight, value = pool.session().draw()

    assert weight == 1.0
    assert value is values[1]


def test_exhausted_session_stays_exhausted(fitness_pairs):
    pool = WeightedPool.from_pairs(fitness_pairs, PoolConfig(seed=1))
    session = pool.session()

    assert len(list(session)) == 5
    assert session.remaining == 0
    assert session.remaining_weight == 0.0
    assert session.draw() is None
    with pytest.raises(StopIteration):
        next(session)

    assert len(pool.session()) == 5


def test_sessions_do_not_share_state(fitness_pairs):
    pool = WeightedPool.from_pairs(fitness_pairs, PoolConfig(seed=2))
    first = pool.session()
    second = pool.session()

    first.draw()
    first.draw()

    assert first.remaining == 3
    assert second.remaining == 5
    assert second.remaining_weight == pool.total_weight


def test_session_tracks_remaining_weight(scripted):
    pool = WeightedPool.from_pairs([(1.0, "a"), (3.0, "b")], random_fn=scripted([0.9]))
    session = pool.session()

    assert session.draw() == (3.0, "b")
    assert session.remaining_weight == 1.0
    assert len(session) == 1


def test_session_detects_pool_mutation(fitness_pairs):
    pool = WeightedPool.from_pairs(fitness_pairs, PoolConfig(seed=4))
    session = pool.session()
    session.draw()

    pool.insert(1.0, 20)

    with pytest.raises(PoolModifiedError):
        session.draw()


def test_zero_weight_session_yields_nothing():
    pool = WeightedPool.from_pairs([(0.0, "a"), (0.0, "b")])

    assert list(pool.session()) == []


def test_session_on_empty_pool():
    session = WeightedPool().session()

    assert session.draw() is None
    assert session.remaining_weight == 0.0


def test_draw_iter_is_a_borrowing_session(fitness_pairs):
    pool = WeightedPool.from_pairs(fitness_pairs, PoolConfig(seed=8))

    cursor = pool.draw_iter()

    assert isinstance(cursor, DrawSession)
    assert sorted(value for _, value in cursor) == [15, 16, 17, 18, 19]
    assert len(pool) == 5


def test_session_survives_cancellation_in_total():
    pool = WeightedPool.from_pairs([(1e16, "a"), (1.0, "b")], random_fn=lambda: 0.0)

    drawn = list(pool.session())

    assert [value for _, value in drawn] == ["a", "b"]
    assert len(pool) == 2
