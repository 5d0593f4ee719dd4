from wordlebot.parser import ParsedResult
from wordlebot.store import ResultStore


def make_result(player_id, round_number, attempts, name=None):
    return ParsedResult(
        player_id=player_id,
        display_name=name or f"p{player_id}",
        round_number=round_number,
        attempts=attempts,
    )


def test_add_returns_current_round_results():
    store = ResultStore()
    first = make_result(1, 1000, 4)
    second = make_result(2, 1000, 3)

    assert store.add(first) == [first]
    assert store.add(second) == [first, second]
    assert len(store) == 2


def test_duplicate_submission_keeps_first_result():
    store = ResultStore()
    first = make_result(1, 1000, 4)
    store.add(first)

    results = store.add(make_result(1, 1000, 2, name="renamed"))

    assert results == [first]
    assert len(store) == 1


def test_same_player_can_submit_different_rounds():
    store = ResultStore()
    store.add(make_result(1, 1000, 4))
    store.add(make_result(1, 1001, 2))

    assert len(store) == 2
    assert store.contains(1, 1000)
    assert store.contains(1, 1001)
    assert not store.contains(2, 1000)


def test_rounds_are_kept_separate():
    store = ResultStore()
    a = make_result(1, 1000, 4)
    b = make_result(2, 1001, 2)
    store.add(a)

    assert store.add(b) == [b]
    assert store.results_for(1000) == [a]
    assert store.rounds() == [1000, 1001]
    assert store.latest_round() == 1001


def test_results_for_returns_copy():
    store = ResultStore()
    store.add(make_result(1, 1000, 4))

    snapshot = store.results_for(1000)
    snapshot.clear()

    assert len(store.results_for(1000)) == 1


def test_empty_store():
    store = ResultStore()

    assert len(store) == 0
    assert store.latest_round() is None
    assert store.results_for(1) == []
