import math

import numpy as np
import pytest

from robofilters.kalman import KalmanFilter, velocity_robot_to_world


def _initialized(delta_t=0.05, mu=None):
    kf = KalmanFilter(delta_t)
    if mu is None:
        mu = [1.0, 2.0, 0.0, 0.5, 0.5, 0.1]
    kf.initialize(mu, np.eye(6))
    return kf


def test_defaults_from_constructor():
    kf = KalmanFilter()
    assert kf.delta_t == 0.05
    np.testing.assert_allclose(kf.state, np.zeros(6))
    np.testing.assert_allclose(kf.covariance, np.eye(6))
    np.testing.assert_allclose(kf.process_noise, np.eye(6) * 0.5)
    np.testing.assert_allclose(kf.measurement_noise, np.eye(5) * 0.1)


def test_transition_matrix_couples_velocities():
    kf = KalmanFilter(0.2)
    a = kf.transition_matrix
    assert a[0, 3] == 0.2 and a[1, 4] == 0.2 and a[2, 5] == 0.2
    np.testing.assert_allclose(np.diag(a), np.ones(6))


def test_predict_before_initialize_is_noop():
    kf = KalmanFilter()
    kf.predict([1.0, 1.0])
    kf.update_measurement([1, 2, 3, 4, 5])
    np.testing.assert_allclose(kf.state, np.zeros(6))
    np.testing.assert_allclose(kf.covariance, np.eye(6))


def test_predict_zero_dt_applies_control_only():
    mu = [1.0, 2.0, 0.0, 0.5, 0.5, 0.1]
    kf = _initialized(delta_t=0.0, mu=mu)
    kf.predict([1.0, 0.25])
    expected = np.array(mu)
    expected[3] += 1.0
    expected[5] += 0.25
    np.testing.assert_allclose(kf.state, expected)
    np.testing.assert_allclose(kf.covariance, np.eye(6) + kf.process_noise)


def test_predict_zero_control_keeps_heading_constant_velocity():
    mu = [0.0, 0.0, 0.0, 0.5, 0.5, 0.0]
    kf = _initialized(delta_t=1.0, mu=mu)
    kf.predict([0.0, 0.0])
    np.testing.assert_allclose(kf.state, [0.5, 0.5, 0.0, 0.5, 0.5, 0.0])


def test_predict_rejects_wrong_control_size():
    kf = _initialized()
    with pytest.raises(ValueError):
        kf.predict([1.0, 2.0, 3.0])


def test_velocity_robot_to_world():
    np.testing.assert_allclose(velocity_robot_to_world(2.0, 0.0), [2.0, 0.0])
    np.testing.assert_allclose(
        velocity_robot_to_world(1.0, math.pi / 2), [0.0, 1.0], atol=1e-12
    )


def test_update_with_consistent_measurement_keeps_state():
    mu = [1.0, 2.0, 0.3, 0.5, 0.5, 0.1]
    kf = _initialized(mu=mu)
    before = kf.covariance
    kf.update_measurement(mu[:5], velocity_is_robot_frame=False)
    np.testing.assert_allclose(kf.state, mu)
    assert np.diag(kf.covariance).sum() < np.diag(before).sum()
    np.testing.assert_allclose(kf.covariance, kf.covariance.T)


def test_update_with_zero_noise_matches_measurement():
    kf = _initialized(mu=[0.0, 0.0, 0.0, 0.0, 0.0, 0.0])
    kf.measurement_noise = np.zeros((5, 5))
    z = [1.0, 2.0, 0.5, 3.0, 4.0]
    kf.update_measurement(z, velocity_is_robot_frame=False)
    np.testing.assert_allclose(kf.state[:5], z, atol=1e-12)


def test_update_robot_frame_rotates_velocity_with_current_heading():
    kf = _initialized(mu=[0.0, 0.0, 0.0, 0.0, 0.0, 0.0])
    kf.measurement_noise = np.zeros((5, 5))
    kf.update_measurement([1.0, 2.0, 0.0, 3.0, 9.0])
    np.testing.assert_allclose(kf.state[:5], [1.0, 2.0, 0.0, 3.0, 0.0], atol=1e-12)