"""A falling-particle emitter that keeps its particles sorted back to front."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

KILL_HEIGHT = -3.0


@dataclass
class Particle:
    """One live particle: position, colour and downward speed."""

    x: float
    y: float
    z: float
    red: float
    green: float
    blue: float
    velocity: float


@dataclass(frozen=True)
class Vertex:
    """A vertex of a particle quad: position, texture coordinate and RGBA colour."""

    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    texture: tuple[float, float] = (0.0, 0.0)
    color: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)


_EMPTY_VERTEX = Vertex()

# Corner offsets (sign of x, sign of y) and texture coordinates for the two
# triangles of each quad: bottom left, top left, bottom right, bottom right,
# top left, top right.
_QUAD_CORNERS = (
    (-1.0, -1.0, (0.0, 1.0)),
    (-1.0, 1.0, (0.0, 0.0)),
    (1.0, -1.0, (1.0, 1.0)),
    (1.0, -1.0, (1.0, 1.0)),
    (-1.0, 1.0, (0.0, 0.0)),
    (1.0, 1.0, (1.0, 0.0)),
)

VERTICES_PER_PARTICLE = len(_QUAD_CORNERS)


@dataclass
class ParticleSystem:
    """Emits particles at a steady rate, lets them fall and removes them below a floor.

    Live particles are held in ``particles`` ordered by decreasing depth so that
    they can be drawn from back to front.
    """

    deviation: tuple[float, float, float] = (0.5, 0.1, 2.0)
    velocity: float = 1.0
    velocity_variation: float = 0.2
    size: float = 0.2
    particles_per_second: float = 100.0
    max_particles: int = 1000
    rng: random.Random = field(default_factory=random.Random)
    particles: list[Particle] = field(default_factory=list)
    accumulated_time: float = 0.0
    vertices: list[Vertex] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.max_particles < 1:
            raise ValueError("max_particles must be at least 1")
        if self.particles_per_second <= 0.0:
            raise ValueError("particles_per_second must be positive")
        self.vertices = [_EMPTY_VERTEX] * self.vertex_count

    @property
    def vertex_count(self) -> int:
        """Size of the vertex array: six vertices for every possible particle."""
        return self.max_particles * VERTICES_PER_PARTICLE

    @property
    def index_count(self) -> int:
        """Number of indices drawn each frame; equal to the vertex count."""
        return self.vertex_count

    @property
    def count(self) -> int:
        """Number of live particles."""
        return len(self.particles)

    def frame(self, frame_time: float) -> list[Vertex]:
        """Advance the system by ``frame_time`` seconds and rebuild the vertices."""
        self.kill()
        self.emit(frame_time)
        self.update(frame_time)
        return self.build_vertices()

    def _spread(self) -> float:
        return self.rng.random() - self.rng.random()

    def emit(self, frame_time: float) -> Particle | None:
        """Emit at most one particle once enough time has built up; return it."""
        self.accumulated_time += frame_time
        if self.accumulated_time <= 1.0 / self.particles_per_second:
            return None
        self.accumulated_time = 0.0

        if self.count >= self.max_particles - 1:
            return None

        dev_x, dev_y, dev_z = self.deviation
        particle = Particle(
            x=self._spread() * dev_x,
            y=self._spread() * dev_y,
            z=self._spread() * dev_z,
            velocity=self.velocity + self._spread() * self.velocity_variation,
            red=self._spread() + 0.5,
            green=self._spread() + 0.5,
            blue=self._spread() + 0.5,
        )

        position = next(
            (i for i, other in enumerate(self.particles) if other.z < particle.z),
            len(self.particles),
        )
        self.particles.insert(position, particle)
        return particle

    def update(self, frame_time: float) -> None:
        """Move every live particle down by its velocity times ``frame_time``."""
        for particle in self.particles:
            particle.y -= particle.velocity * frame_time

    def kill(self) -> int:
        """Remove particles that have fallen below the floor; return how many."""
        before = len(self.particles)
        self.particles = [p for p in self.particles if not p.y < KILL_HEIGHT]
        return before - len(self.particles)

    def build_vertices(self) -> list[Vertex]:
        """Build two triangles per live particle, padded with empty vertices."""
        size = self.size
        built = [
            Vertex(
                position=(p.x + sx * size, p.y + sy * size, p.z),
                texture=texture,
                color=(p.red, p.green, p.blue, 1.0),
            )
            for p in self.particles
            for sx, sy, texture in _QUAD_CORNERS
        ]
        built.extend([_EMPTY_VERTEX] * (self.vertex_count - len(built)))
        self.vertices = built
        return built