from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Deque, List, Set

from ...errors import InvalidArgument

if TYPE_CHECKING:
    from .bird import Bird
    from .food import Food


@dataclass(frozen=True, slots=True)
class CollisionEvent:
    bird_x: float
    bird_y: float
    bird_rotation: float
    bird_satiation: int
    food_x: float
    food_y: float
    distance: float

    @staticmethod
    def create(bird: "Bird", food: "Food", distance: float) -> "CollisionEvent":
        return CollisionEvent(
            bird_x=bird.position.x,
            bird_y=bird.position.y,
            bird_rotation=bird.rotation,
            bird_satiation=bird.satiation,
            food_x=food.position.x,
            food_y=food.position.y,
            distance=distance,
        )


class Subscription:
    def __init__(self, capacity: int):
        self._queue: Deque[CollisionEvent] = deque(maxlen=capacity)
        self.dropped = 0

    def __len__(self) -> int:
        return len(self._queue)

    def offer(self, event: CollisionEvent) -> None:
        if len(self._queue) == self._queue.maxlen:
            self.dropped += 1
        self._queue.append(event)

    def drain(self) -> List[CollisionEvent]:
        events = list(self._queue)
        self._queue.clear()
        return events


class CollisionChannel:
    """Fan-out of collision events to any number of subscribers.

    Publishing never blocks: every subscriber owns a bounded queue and, once it is
    full, the oldest event is discarded to make room.
    """

    def __init__(self, capacity: int = 1024):
        if capacity < 1:
            raise InvalidArgument(f"Channel capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._subscribers: Set[Subscription] = set()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self) -> Subscription:
        subscription = Subscription(self._capacity)
        self._subscribers.add(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        self._subscribers.discard(subscription)

    def publish(self, event: CollisionEvent) -> None:
        for subscription in self._subscribers:
            subscription.offer(event)
