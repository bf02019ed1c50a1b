"""Curve player entity: kinematics, trail, and collision tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator
import math
import random

from .geometry import distance, segments_intersect
from .utils import (
    PLAYER_SPEED,
    PLAYER_TURN_RATE,
    SCOREBOARD_WIDTH,
    TRAIL_SPACING,
    Color,
    Point,
    Segment,
)

# A gap may only open once a run is longer than this many trail points.
MIN_RUN_BEFORE_GAP = 5
# round(u * 3) == 3 holds for u >= 5/6, so one eligible emission in six.
GAP_CUTOFF = 5 / 6


@dataclass(frozen=True, slots=True)
class TrailPoint:
    """A trail vertex. ``gap`` hides the segment leading into it."""

    x: float
    y: float
    gap: bool = False


@dataclass(frozen=True, slots=True)
class Arena:
    """Arena dimensions with a reserved scoreboard strip on the right."""

    width: float
    height: float
    reserved: float = SCOREBOARD_WIDTH

    @property
    def playable_width(self) -> float:
        return self.width - self.reserved

    def contains(self, point: Point) -> bool:
        """Check if a point lies inside the playable rectangle."""
        x, y = point
        return 0 <= x <= self.playable_width and 0 <= y <= self.height

    def random_point(self, rng: random.Random) -> Point:
        """Return a uniformly random point inside the playable rectangle."""
        return (rng.random() * self.playable_width, rng.random() * self.height)


@dataclass(slots=True, eq=False)
class Player:
    """State and behavior for one curve."""

    player_id: int
    name: str
    color: Color
    left_key: int
    right_key: int
    arena: Arena
    rng: random.Random = field(default_factory=random.Random, repr=False)
    left_label: str = ""
    right_label: str = ""
    speed: float = PLAYER_SPEED
    turn_rate: float = PLAYER_TURN_RATE

    x: float = field(default=0.0, init=False)
    y: float = field(default=0.0, init=False)
    heading: float = field(default=0.0, init=False)
    enabled: bool = field(default=False, init=False)
    alive: bool = field(default=True, init=False)
    score: int = field(default=0, init=False)
    trail: list[TrailPoint] = field(default_factory=list, init=False, repr=False)
    run_length: int = field(default=0, init=False)
    steer_left: bool = field(default=False, init=False)
    steer_right: bool = field(default=False, init=False)

    @property
    def position(self) -> Point:
        return (self.x, self.y)

    def binds(self, key: int) -> bool:
        """Return whether ``key`` is one of this player's steering keys."""
        return key == self.left_key or key == self.right_key

    def move(self, delta_ms: float) -> None:
        """Advance heading and position by ``delta_ms`` and extend the trail."""
        if self.steer_left:
            self.heading += self.turn_rate * delta_ms
        if self.steer_right:
            self.heading -= self.turn_rate * delta_ms

        radians = math.radians(self.heading)
        self.x += math.sin(radians) * self.speed * delta_ms
        self.y += math.cos(radians) * self.speed * delta_ms

        if self.trail:
            last = self.trail[-1]
            if distance((last.x, last.y), self.position) <= TRAIL_SPACING:
                return

        gap = False
        if self.run_length > MIN_RUN_BEFORE_GAP and self.rng.random() >= GAP_CUTOFF:
            self.run_length = 0
            gap = True
        self.trail.append(TrailPoint(self.x, self.y, gap))
        self.run_length += 1

    def last_segment(self) -> Segment | None:
        """Return the most recent trail step, if there are two points."""
        if len(self.trail) < 2:
            return None
        start, end = self.trail[-2], self.trail[-1]
        return ((start.x, start.y), (end.x, end.y))

    def solid_segments(self, stop: int | None = None) -> Iterator[Segment]:
        """Yield collidable trail segments ending before index ``stop``."""
        end = len(self.trail) if stop is None else stop
        for idx in range(1, end):
            point = self.trail[idx]
            if point.gap:
                continue
            previous = self.trail[idx - 1]
            yield ((previous.x, previous.y), (point.x, point.y))

    def collide_with(self, other: Player) -> bool:
        """Check if this player's last step crossed ``other``'s trail."""
        own = self.last_segment()
        if own is None or len(other.trail) < 2:
            return False
        return any(segments_intersect(own, segment) for segment in other.solid_segments())

    def suicide(self) -> bool:
        """Check if the player left the arena or ran into its own trail."""
        if not self.arena.contains(self.position):
            return True
        if len(self.trail) <= 2:
            return False
        own = self.last_segment()
        # The two newest segments share vertices with ``own``; skip them.
        stop = len(self.trail) - 2
        return any(segments_intersect(own, segment) for segment in self.solid_segments(stop))

    def reset(self) -> None:
        """Respawn at a random spot with a random heading for a new round."""
        self.trail.clear()
        self.run_length = 0
        self.x, self.y = self.arena.random_point(self.rng)
        self.heading = self.rng.random() * 360
        self.alive = True
        self.steer_left = False
        self.steer_right = False
