import random
from dataclasses import dataclass

import pytest

from petring.core.errors import NotFound
from petring.services.ring import (
    Direction,
    RandomMode,
    any_member,
    is_verified,
    locate_neighbor,
    ring_seed,
    select_random,
)


@dataclass
class Rec:
    id: int
    username: str
    verified: bool = True

    @property
    def url(self) -> str:
        return f"https://{self.username}.example"


def _ring(*ids: int, unverified: tuple[int, ...] = ()) -> list[Rec]:
    return [Rec(id=i, username=f"m{i}", verified=i not in unverified) for i in ids]


def _next(records, name, predicate=is_verified):
    return locate_neighbor(records, predicate, name, Direction.NEXT)


def _prev(records, name, predicate=is_verified):
    return locate_neighbor(records, predicate, name, Direction.PREV)


def test_wraparound_with_gap_in_ids():
    ring = _ring(1, 2, 3, 5)

    assert _next(ring, "m2").id == 3
    assert _next(ring, "m3").id == 5
    assert _next(ring, "m5").id == 1
    assert _prev(ring, "m1").id == 5
    assert _prev(ring, "m5").id == 3


@pytest.mark.parametrize(
    "ids",
    [
        (1, 2),
        (1, 2, 3, 5),
        (4, 9, 10, 11, 30),
        (2, 3, 5, 7, 11, 13, 17),
    ],
)
def test_next_then_prev_returns_to_start(ids):
    ring = _ring(*ids)
    for member in ring:
        forward = _next(ring, member.username)
        assert forward.id != member.id
        assert _prev(ring, forward.username).id == member.id


def test_single_member_ring_points_at_itself():
    ring = _ring(7)

    assert _next(ring, "m7").id == 7
    assert _prev(ring, "m7").id == 7


def test_order_comes_from_ids_not_input_order():
    ring = list(reversed(_ring(1, 2, 3, 5)))

    assert _next(ring, "m3").id == 5
    assert _prev(ring, "m1").id == 5


def test_predicate_skips_excluded_members():
    ring = _ring(1, 2, 3, 4, unverified=(2, 3))

    assert _next(ring, "m1").id == 4
    assert _prev(ring, "m4").id == 1
    assert _next(ring, "m1", predicate=any_member).id == 2


def test_unknown_or_excluded_current_member_is_not_found():
    ring = _ring(1, 2, 3, unverified=(2,))

    with pytest.raises(NotFound):
        _next(ring, "nobody")
    with pytest.raises(NotFound):
        _prev(ring, "m2")
    assert _next(ring, "m2", predicate=any_member).id == 3


def test_empty_ring_is_not_found():
    with pytest.raises(NotFound):
        _next([], "m1")
    with pytest.raises(NotFound):
        _prev(_ring(1, 2, unverified=(1, 2)), "m1")
    with pytest.raises(NotFound):
        select_random([], is_verified, RandomMode.UNIFORM)


def test_ring_seed_matches_shift_or():
    assert ring_seed(7) == 458759
    assert ring_seed(1) == 65537


def test_seeded_pick_is_reproducible():
    ring = _ring(1, 2, 3, 5, 7, 8, 13, 21)

    picks = {select_random(ring, is_verified, RandomMode.SEEDED, seed_basis=7).id for _ in range(25)}

    assert len(picks) == 1
    expected = random.Random(458759).choice(ring)
    assert picks == {expected.id}


def test_seeded_pick_only_draws_from_the_filtered_ring():
    ring = _ring(1, 2, 3, 4, 5, 6, 7, unverified=(2, 4, 6))

    picked = select_random(ring, is_verified, RandomMode.SEEDED, seed_basis=7)

    assert picked.verified
    filtered = [r for r in ring if r.verified]
    assert picked.id == random.Random(ring_seed(7)).choice(filtered).id


def test_seeded_pick_requires_basis_in_ring():
    ring = _ring(1, 2, 3, unverified=(3,))

    with pytest.raises(NotFound):
        select_random(ring, is_verified, RandomMode.SEEDED, seed_basis=42)
    with pytest.raises(NotFound):
        select_random(ring, is_verified, RandomMode.SEEDED, seed_basis=3)
    with pytest.raises(NotFound):
        select_random(ring, is_verified, RandomMode.SEEDED)


def test_uniform_pick_varies_and_respects_predicate():
    ring = _ring(1, 2, 3, 4, unverified=(4,))

    picks = {select_random(ring, is_verified, RandomMode.UNIFORM).id for _ in range(300)}

    assert picks == {1, 2, 3}
