"""Linear Kalman filter for a planar robot with a constant-velocity model."""

from __future__ import annotations

import logging

import numpy as np

logger = logging.getLogger(__name__)

STATE_DIM = 6
MEASUREMENT_DIM = 5


def velocity_robot_to_world(v_robot: float, theta: float) -> np.ndarray:
    """Rotate a forward speed in the robot frame into world-frame (v_x, v_y)."""
    return np.array([v_robot * np.cos(theta), v_robot * np.sin(theta)])


class KalmanFilter:
    """Kalman filter over the state [x, y, theta, v_x, v_y, omega].

    Measurements are [x, y, theta, v_x, v_y]; the control input is
    [forward acceleration, angular acceleration].
    """

    def __init__(self, delta_t: float = 0.05) -> None:
        self.delta_t = float(delta_t)
        n, m = STATE_DIM, MEASUREMENT_DIM

        self.transition_matrix = np.eye(n)
        self.transition_matrix[0, 3] = self.delta_t
        self.transition_matrix[1, 4] = self.delta_t
        self.transition_matrix[2, 5] = self.delta_t

        self.control_matrix = np.zeros((n, 2))

        self.measurement_matrix = np.zeros((m, n))
        self.measurement_matrix[:, :m] = np.eye(m)

        self.process_noise = np.eye(n) * 0.5
        self.measurement_noise = np.eye(m) * 0.1

        self._mu = np.zeros(n)
        self._sigma = np.eye(n)
        self.initialized = False

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

    def predict(self, u) -> None:
        """Propagate the estimate with control input u; no-op until initialized."""
        if not self.initialized:
            return
        u = np.asarray(u, dtype=float)

        theta = self._mu[2]
        self.control_matrix = np.zeros((STATE_DIM, 2))
        self.control_matrix[3, 0] = np.cos(theta)
        self.control_matrix[4, 0] = np.sin(theta)
        self.control_matrix[5, 1] = 1.0

        a = self.transition_matrix
        self._mu = a @ self._mu + self.control_matrix @ u
        logger.debug("state after predict: %s", self._mu)
        self._sigma = a @ self._sigma @ a.T + self.process_noise

    def update_measurement(self, z_raw, velocity_is_robot_frame: bool = True) -> None:
        """Correct the estimate with a measurement; no-op until initialized.

        When velocity_is_robot_frame is true, z_raw[3] is taken as a forward
        speed and rotated into world-frame velocities with the current heading.
        """
        if not self.initialized:
            return
        z = np.array(z_raw, dtype=float)

        if velocity_is_robot_frame and z.size >= MEASUREMENT_DIM:
            z[3:5] = velocity_robot_to_world(z[3], self._mu[2])

        c = self.measurement_matrix
        innovation = z - c @ self._mu
        s = c @ self._sigma @ c.T + self.measurement_noise
        gain = self._sigma @ c.T @ np.linalg.inv(s)

        self._mu = self._mu + gain @ innovation
        self._sigma = (np.eye(STATE_DIM) - gain @ c) @ self._sigma