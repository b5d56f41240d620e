"""Kalman, extended Kalman and particle filters, and an odometry/IMU fusion node, for planar robots."""

__version__ = "0.1.0"
__all__ = ["ekf", "kalman", "node", "particle"]