"""Extended Kalman filter with user-supplied nonlinear models."""

from __future__ import annotations

from typing import Callable, Optional

import numpy as np

TransitionFn = Callable[[np.ndarray, np.ndarray, float], np.ndarray]
MeasurementFn = Callable[[np.ndarray], np.ndarray]


class ExtendedKalmanFilter:
    """EKF whose motion and measurement models are given as callables.

    The transition model is called as g(u, mu, delta_t) and its Jacobian as
    g_jacobian(u, mu, delta_t); the measurement model as h(mu) and h_jacobian(mu).
    """

    def __init__(self, delta_t: float) -> None:
        self.delta_t = float(delta_t)
        self.initialized = False
        self.process_noise: Optional[np.ndarray] = None
        self.measurement_noise: Optional[np.ndarray] = None
        self._mu = np.zeros(0)
        self._sigma = np.zeros((0, 0))
        self._g: Optional[TransitionFn] = None
        self._g_jacobian: Optional[TransitionFn] = None
        self._h: Optional[MeasurementFn] = None
        self._h_jacobian: Optional[MeasurementFn] = None

    @property
    def state(self) -> np.ndarray:
        """Current state estimate."""
        return self._mu.copy()

    @property
    def covariance(self) -> np.ndarray:
        """Current state covariance."""
        return self._sigma.copy()

    def initialize(self, mu0, sigma0) -> None:
        """Set the initial estimate and covariance and enable filtering."""
        self._mu = np.array(mu0, dtype=float)
        self._sigma = np.array(sigma0, dtype=float)
        self.initialized = True

    def set_state_transition_function(self, g: TransitionFn, g_jacobian: TransitionFn) -> None:
        """Install the motion model and its Jacobian."""
        self._g = g
        self._g_jacobian = g_jacobian

    def set_measurement_function(self, h: MeasurementFn, h_jacobian: MeasurementFn) -> None:
        """Install the measurement model and its Jacobian."""
        self._h = h
        self._h_jacobian = h_jacobian

    def predict(self, u) -> None:
        """Propagate the estimate with control u; no-op until initialized."""
        if not self.initialized:
            return
        if self._g is None or self._g_jacobian is None:
            raise RuntimeError("state transition function is not set")
        if self.process_noise is None:
            raise RuntimeError("process noise is not set")
        u = np.asarray(u, dtype=float)
        mu_bar = np.asarray(self._g(u, self._mu, self.delta_t), dtype=float)
        jac = np.asarray(self._g_jacobian(u, self._mu, self.delta_t), dtype=float)
        self._sigma = jac @ self._sigma @ jac.T + self.process_noise
        self._mu = mu_bar

    def update_measurement(self, z) -> None:
        """Correct the estimate with measurement z; no-op until initialized."""
        if not self.initialized:
            return
        if self._h is None or self._h_jacobian is None:
            raise RuntimeError("measurement function is not set")
        if self.measurement_noise is None:
            raise RuntimeError("measurement noise is not set")
        z = np.asarray(z, dtype=float)
        z_hat = np.asarray(self._h(self._mu), dtype=float)
        jac = np.asarray(self._h_jacobian(self._mu), dtype=float)

        innovation = z - z_hat
        s = jac @ self._sigma @ jac.T + self.measurement_noise
        gain = self._sigma @ jac.T @ np.linalg.inv(s)

        self._mu = self._mu + gain @ innovation
        n = self._mu.size
        self._sigma = (np.eye(n) - gain @ jac) @ self._sigma