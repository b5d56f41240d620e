"""Particle filter for a planar robot state [x, y, theta, v_x, v_y, omega]."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

STATE_DIM = 6
MEASUREMENT_DIM = 5
# State components observed by a measurement [x, y, theta, v_x, omega].
_MEASURED = [0, 1, 2, 3, 5]


@dataclass
class Particle:
    """One hypothesis of the state with its importance weight."""

    x: np.ndarray
    weight: float


class ParticleFilter:
    """Sampling filter with systematic resampling after every measurement."""

    def __init__(self, num_particles: int, delta_t: float, seed: Optional[int] = None) -> None:
        self.num_particles = int(num_particles)
        self.delta_t = float(delta_t)
        self.state_dim = STATE_DIM
        self.process_noise = np.eye(STATE_DIM) * 0.5
        self.measurement_noise = np.eye(MEASUREMENT_DIM) * 0.1
        self.particles: list[Particle] = []
        self._rng = np.random.default_rng(seed)

    def initialize(self, mu0, sigma0) -> None:
        """Scatter particles around mu0 with the per-axis spread of sigma0."""
        mu0 = np.asarray(mu0, dtype=float)
        spread = np.sqrt(np.diag(np.asarray(sigma0, dtype=float))[: self.state_dim])
        weight = 1.0 / self.num_particles
        self.particles = []
        for _ in range(self.num_particles):
            x = mu0.copy()
            x[: self.state_dim] += self._rng.standard_normal(self.state_dim) * spread
            self.particles.append(Particle(x, weight))

    def predict(self, u) -> None:
        """Move every particle with body velocities u = [v_x, v_y, (omega)]."""
        u = np.asarray(u, dtype=float)
        v_x, v_y = u[0], u[1]
        omega = u[2] if u.size > 2 else 0.0
        noise_scale = np.sqrt(np.diag(self.process_noise))
        dt = self.delta_t

        for p in self.particles:
            theta = p.x[2]
            c, s = np.cos(theta), np.sin(theta)
            p.x[0] += (c * v_x - s * v_y) * dt
            p.x[1] += (s * v_x + c * v_y) * dt
            p.x[2] += omega * dt
            p.x[3] = v_x
            p.x[4] = v_y
            p.x[5] = omega
            p.x[: self.state_dim] += self._rng.standard_normal(self.state_dim) * noise_scale

    def update_measurement(self, z) -> None:
        """Weight particles by measurement likelihood, then resample."""
        if not self.particles:
            raise RuntimeError("particle filter is not initialized")
        z = np.asarray(z, dtype=float)
        r_inv = np.linalg.inv(self.measurement_noise)
        total = 0.0
        for p in self.particles:
            diff = z - p.x[_MEASURED]
            p.weight = float(np.exp(-0.5 * diff @ r_inv @ diff))
            total += p.weight
        for p in self.particles:
            p.weight /= total + 1e-12
        self._resample()

    def _resample(self) -> None:
        cdf = np.cumsum([p.weight for p in self.particles])
        step = 1.0 / self.num_particles
        start = self._rng.random() * step
        positions = start + step * np.arange(self.num_particles)
        last = len(self.particles) - 1
        indices = np.minimum(np.searchsorted(cdf, positions, side="left"), last)
        self.particles = [
            Particle(self.particles[i].x.copy(), step) for i in indices
        ]

    @property
    def state(self) -> np.ndarray:
        """Weighted mean of the particles."""
        mean = np.zeros(self.state_dim)
        for p in self.particles:
            mean += p.weight * p.x[: self.state_dim]
        return mean

    @property
    def covariance(self) -> np.ndarray:
        """Weighted covariance of the particles around their mean."""
        mean = self.state
        cov = np.zeros((self.state_dim, self.state_dim))
        for p in self.particles:
            d = p.x[: self.state_dim] - mean
            cov += p.weight * np.outer(d, d)
        return cov