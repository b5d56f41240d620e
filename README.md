# robofilters

Recursive state estimators for a robot moving in the plane, working on
NumPy arrays: a linear Kalman filter, an extended Kalman filter, a particle
filter, and a small node that runs the Kalman filter on paired odometry and
IMU samples and returns a pose estimate with covariance.

Install with the `test` extra to get pytest for the test suite.

## `robofilters.kalman`

`KalmanFilter(delta_t=0.05)` tracks the state `[x, y, theta, v_x, v_y, omega]`
with a constant-velocity model: each prediction advances `x`, `y` and
`theta` by `delta_t` times the corresponding velocity.

- `initialize(mu0, sigma0)` sets the starting estimate and covariance.
  Until it is called, `predict` and `update_measurement` do nothing.
- `predict(u)` takes a two-element control `[a, alpha]`. The first entry is
  added to `v_x` and `v_y` along the current heading (`cos(theta)`,
  `sin(theta)`), the second is added to `omega`. The covariance grows by
  `process_noise`. The new state is logged at debug level.
- `update_measurement(z_raw, velocity_is_robot_frame=True)` corrects with a
  measurement `[x, y, theta, v_x, v_y]`. When `velocity_is_robot_frame` is
  true, the fourth entry is taken as a forward speed and replaced, together
  with the fifth, by its world-frame components at the current heading.
- `state` and `covariance` return copies of the estimate.
- `process_noise` (default `0.5 * I6`), `measurement_noise` (default
  `0.1 * I5`), `transition_matrix`, `measurement_matrix` and `delta_t` are
  plain attributes.

`velocity_robot_to_world(v_robot, theta)` returns
`[v_robot * cos(theta), v_robot * sin(theta)]`.

```python
import numpy as np
from robofilters.kalman import KalmanFilter

kf = KalmanFilter(0.05)
kf.initialize(np.zeros(6), np.eye(6) * 0.1)
kf.predict([0.5, 0.1])
kf.update_measurement([0.02, 0.0, 0.005, 0.5, 0.0], True)
print(kf.state, kf.covariance)
```

## `robofilters.ekf`

`ExtendedKalmanFilter(delta_t)` is a general EKF. Supply:

- the motion model and its Jacobian with
  `set_state_transition_function(g, g_jacobian)`; both are called as
  `f(u, mu, delta_t)`;
- the measurement model and its Jacobian with
  `set_measurement_function(h, h_jacobian)`; both are called as `f(mu)`;
- the noise matrices by assigning `process_noise` and `measurement_noise`.

`predict(u)` and `update_measurement(z)` do nothing before `initialize`.
After it, they raise `RuntimeError` if the needed model or noise matrix has
not been set. `state` and `covariance` return copies of the estimate.

```python
import numpy as np
from robofilters.ekf import ExtendedKalmanFilter


def motion(u, mu, dt):
    x, y, theta = mu
    v, omega = u
    return np.array([x + v * np.cos(theta) * dt, y + v * np.sin(theta) * dt, theta + omega * dt])


def motion_jacobian(u, mu, dt):
    _, _, theta = mu
    v, _ = u
    return np.array([
        [1.0, 0.0, -v * np.sin(theta) * dt],
        [0.0, 1.0, v * np.cos(theta) * dt],
        [0.0, 0.0, 1.0],
    ])


ekf = ExtendedKalmanFilter(0.1)
ekf.initialize(np.zeros(3), np.eye(3))
ekf.set_state_transition_function(motion, motion_jacobian)
ekf.set_measurement_function(lambda mu: mu.copy(), lambda mu: np.eye(3))
ekf.process_noise = np.eye(3) * 0.01
ekf.measurement_noise = np.eye(3) * 0.1
ekf.predict([1.0, 0.2])
ekf.update_measurement([0.1, 0.0, 0.02])
```

## `robofilters.particle`

`ParticleFilter(num_particles, delta_t, seed=None)` works over the same
six-dimensional state. Each `Particle` holds a state vector `x` and a
`weight`; the current set is in `particles`. Pass `seed` for a reproducible
run.

- `initialize(mu0, sigma0)` draws particles around `mu0` with the standard
  deviations on the diagonal of `sigma0`, each with weight
  `1 / num_particles`.
- `predict(u)` moves every particle with robot-frame velocities
  `[v_x, v_y]` or `[v_x, v_y, omega]` (omega defaults to 0), stores them in
  the particle's velocity entries, and adds Gaussian noise scaled by the
  diagonal of `process_noise` (default `0.5 * I6`).
- `update_measurement(z)` weights each particle by a Gaussian likelihood of
  `z = [x, y, theta, v_x, omega]` under `measurement_noise` (default
  `0.1 * I5`), normalises, and resamples systematically. It raises
  `RuntimeError` if there are no particles yet.
- `state` is the weighted mean and `covariance` the weighted covariance.

```python
from robofilters.particle import ParticleFilter
import numpy as np

pf = ParticleFilter(500, 0.05, seed=7)
pf.initialize(np.zeros(6), np.eye(6) * 0.1)
pf.predict([0.5, 0.0, 0.1])
pf.update_measurement([0.025, 0.0, 0.005, 0.5, 0.1])
```

## `robofilters.node`

`FilterNode(start_x=0.5, start_y=0.5, start_yaw=0.0, delta_t=0.05)` holds a
`KalmanFilter` (attribute `kf`) started at
`[start_x, start_y, start_yaw, 0.5, 0.5, 0.0]` with covariance `0.1 * I6`.

`sensor_callback(odom, imu)` takes an `OdometrySample(stamp, linear_x,
angular_z)` and an `ImuSample(stamp, orientation)`. It runs a prediction
with `[linear_x, angular_z]`, and builds the measurement vector from the
current estimate with the IMU yaw in place of `theta`. It keeps that vector
in `last_measurement` but does not apply it as a correction. It returns a
`PoseWithCovarianceStamped` with the odometry stamp, frame `"odom"`,
position `(x, y, 0.0)`, an orientation quaternion from the estimated yaw,
and a flat 36-entry covariance.

Helpers:

- `Quaternion(x, y, z, w)`, defaulting to the identity rotation.
- `yaw_from_quaternion(q)`: rotation about z.
- `quaternion_from_rpy(roll, pitch, yaw)`: quaternion from Euler angles.
- `covariance_to_ros(sigma)`: places the `(x, y, theta)` block of `sigma`
  into a row-major 6×6 layout over `[x, y, z, roll, pitch, yaw]`, zero
  elsewhere; raises `ValueError` if `sigma` is not at least 3×3.

## What the package does not do

The node has no messaging layer. It does not subscribe to sensor topics,
synchronise streams by time, or publish results. The caller pairs odometry
and IMU samples, calls `sensor_callback`, and handles the returned pose.
There is no command-line program.