"""Fusion node: odometry drives the Kalman prediction and a planar pose is published."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from robofilters.kalman import KalmanFilter

COVARIANCE_SIZE = 36
# (row, column) of the 3x3 pose block and the slot it occupies in the flat
# 6x6 row-major layout over (x, y, z, roll, pitch, yaw).
_COVARIANCE_SLOTS = {
    (0, 0): 0,
    (0, 1): 1,
    (0, 2): 5,
    (1, 0): 6,
    (1, 1): 7,
    (1, 2): 11,
    (2, 0): 30,
    (2, 1): 31,
    (2, 2): 35,
}


@dataclass(frozen=True)
class Quaternion:
    """Rotation quaternion with components (x, y, z, w)."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0


@dataclass(frozen=True)
class OdometrySample:
    """Odometry reading: forward speed and yaw rate at a timestamp."""

    stamp: float
    linear_x: float
    angular_z: float


@dataclass(frozen=True)
class ImuSample:
    """IMU reading carrying the sensor orientation."""

    stamp: float
    orientation: Quaternion


@dataclass
class PoseWithCovarianceStamped:
    """Planar pose estimate with a flat 6x6 covariance."""

    stamp: float
    frame_id: str
    position: tuple[float, float, float]
    orientation: Quaternion
    covariance: list[float] = field(default_factory=lambda: [0.0] * COVARIANCE_SIZE)


def yaw_from_quaternion(q: Quaternion) -> float:
    """Return the yaw angle (rotation about z) of a quaternion."""
    siny_cosp = 2.0 * (q.w * q.z + q.x * q.y)
    cosy_cosp = 1.0 - 2.0 * (q.y * q.y + q.z * q.z)
    return math.atan2(siny_cosp, cosy_cosp)


def quaternion_from_rpy(roll: float, pitch: float, yaw: float) -> Quaternion:
    """Build a quaternion from fixed-axis roll, pitch and yaw angles."""
    cr, sr = math.cos(roll / 2.0), math.sin(roll / 2.0)
    cp, sp = math.cos(pitch / 2.0), math.sin(pitch / 2.0)
    cy, sy = math.cos(yaw / 2.0), math.sin(yaw / 2.0)
    return Quaternion(
        x=sr * cp * cy - cr * sp * sy,
        y=cr * sp * cy + sr * cp * sy,
        z=cr * cp * sy - sr * sp * cy,
        w=cr * cp * cy + sr * sp * sy,
    )


def covariance_to_ros(sigma) -> list[float]:
    """Place the (x, y, theta) block of sigma into a flat 36-entry covariance."""
    sigma = np.asarray(sigma, dtype=float)
    if sigma.ndim != 2 or sigma.shape[0] < 3 or sigma.shape[1] < 3:
        raise ValueError(f"covariance must be at least 3x3, got shape {sigma.shape}")
    flat = [0.0] * COVARIANCE_SIZE
    for (row, col), slot in _COVARIANCE_SLOTS.items():
        flat[slot] = float(sigma[row, col])
    return flat


class FilterNode:
    """Runs a Kalman filter on paired odometry and IMU samples."""

    frame_id = "odom"

    def __init__(
        self,
        start_x: float = 0.5,
        start_y: float = 0.5,
        start_yaw: float = 0.0,
        delta_t: float = 0.05,
    ) -> None:
        self.kf = KalmanFilter(delta_t)
        mu0 = np.array([start_x, start_y, start_yaw, 0.5, 0.5, 0.0])
        self.kf.initialize(mu0, np.eye(6) * 0.1)
        self.last_measurement: np.ndarray | None = None

    def sensor_callback(self, odom: OdometrySample, imu: ImuSample) -> PoseWithCovarianceStamped:
        """Predict with the odometry input and return the resulting pose estimate.

        The IMU yaw is combined with the current estimate into a measurement
        vector, kept as ``last_measurement``; the correction step is not applied.
        """
        self.kf.predict([odom.linear_x, odom.angular_z])

        mu = self.kf.state
        yaw_meas = yaw_from_quaternion(imu.orientation)
        self.last_measurement = np.array([mu[0], mu[1], yaw_meas, mu[3], mu[4]])

        mu_post = self.kf.state
        sigma_post = self.kf.covariance
        return PoseWithCovarianceStamped(
            stamp=odom.stamp,
            frame_id=self.frame_id,
            position=(float(mu_post[0]), float(mu_post[1]), 0.0),
            orientation=quaternion_from_rpy(0.0, 0.0, float(mu_post[2])),
            covariance=covariance_to_ros(sigma_post),
        )