"""
Navigation through the webring.

Everything here works on one snapshot of records, already ordered by id,
fetched by the caller right before use. A record only needs `id` and
`username` attributes. Callers choose the predicate that decides which
records are part of the ring for their endpoint.
"""
import enum
import random
from typing import Callable, Optional, Sequence, TypeVar

from petring.core.errors import NotFound


R = TypeVar("R")
Predicate = Callable[[R], bool]


class Direction(str, enum.Enum):
    NEXT = "next"
    PREV = "prev"


class RandomMode(str, enum.Enum):
    UNIFORM = "uniform"
    SEEDED = "seeded"


def is_verified(record) -> bool:
    return bool(record.verified)


def any_member(record) -> bool:
    return True


def ring_seed(member_id: int) -> int:
    """Seed for the stable random hop out of a member's site. Not a security control."""
    return ((member_id << 16) | member_id) & 0xFFFFFFFFFFFFFFFF


def _in_ring(records: Sequence[R], predicate: Predicate) -> list[R]:
    return sorted(
        (record for record in records if predicate(record)),
        key=lambda record: record.id,
    )


def locate_neighbor(
    records: Sequence[R],
    predicate: Predicate,
    current_username: str,
    direction: Direction,
) -> R:
    ring = _in_ring(records, predicate)
    if not ring:
        raise NotFound()

    current = next((record for record in ring if record.username == current_username), None)
    if current is None:
        raise NotFound()

    first, last = ring[0], ring[-1]
    if direction == Direction.NEXT:
        if current.id == last.id:
            return first
        return min((r for r in ring if r.id > current.id), key=lambda r: r.id)

    if current.id == first.id:
        return last
    return max((r for r in ring if r.id < current.id), key=lambda r: r.id)


def select_random(
    records: Sequence[R],
    predicate: Predicate,
    mode: RandomMode,
    seed_basis: Optional[int] = None,
) -> R:
    """
    Pick one record from the ring.

    UNIFORM draws from a fresh system random source every call. SEEDED
    seeds a deterministic generator from `seed_basis` (a member id that
    must itself be in the ring), so the same ring and the same basis always
    give the same record.
    """
    ring = _in_ring(records, predicate)
    if not ring:
        raise NotFound("Couldn't pick a random user")

    if mode == RandomMode.UNIFORM:
        return random.SystemRandom().choice(ring)

    if seed_basis is None or not any(record.id == seed_basis for record in ring):
        raise NotFound("Couldn't pick a random user")

    rng = random.Random(ring_seed(seed_basis))
    return rng.choice(ring)
