# imuattitude

Estimates pitch, roll and yaw from an MPU6500 accelerometer/gyroscope on a
Linux I2C bus, using Madgwick's IMU fusion filter.

The `imuattitude` command runs four worker threads that share one
`SharedState` object and step together on a 20 Hz frame clock:

- `FrameTimer` (`imuattitude.timer`) advances the frame counter, which wraps
  to zero after 10000, and every 100 frames prints the last control, sensor,
  display and frame times in milliseconds.
- `SensorUnit` (`imuattitude.sensors`) moves the system from ready to init,
  configures the MPU6500, sums gyro readings for 500 frames to get mean
  offsets and writes them to the chip, waits 200 frames and then takes the
  current attitude as the zero reference, and after that reads the IMU every
  frame. I2C errors in a frame are logged and the worker carries on.
- `Controller` (`imuattitude.control`) walks the system through its states
  (ready, init, calib, orient, run, error, wait), feeds the scaled gyro and
  accelerometer values to the filter and turns the quaternion into angles in
  degrees.
- `Display` (`imuattitude.display`) sends the power-up commands to the S0018
  OLED panel while the system is in the init state.

## Install

```
pip install .
```

## Run

```
imuattitude [--device /dev/i2c-1] [--frames N]
```

- `--device` — the I2C bus device (default `/dev/i2c-1`). The process needs
  read/write access to it.
- `--frames` — stop after this many frames; without it the program runs until
  interrupted with Ctrl-C.

While calibrating, orienting and running, it prints the attitude on every
frame, for example `AHRS: M:5 P:0.123000	 R:-0.456000	 Y:1.000000`
(`M` is the `SystemState` number). When all workers have stopped it prints
`All threads completed.`

## Library use

The filter can be used on its own:

```python
from imuattitude.madgwick import Madgwick

f = Madgwick()            # beta=0.08, sample_freq=20.0
f.update_imu(0.0, 0.0, 0.0, 0.0, 0.0, 1.0)
print(f.quaternion)
```

`Madgwick.update` also takes magnetometer readings and falls back to
`update_imu` when they are all zero; an all-zero accelerometer reading skips
the correction step. `Madgwick.reset` restores the identity quaternion.
`inv_sqrt` is the fast inverse square root the filter uses.

Other pieces:

- `imuattitude.i2c.I2CBus` — byte-wide `read_register` / `write_register`
  on an I2C character device, guarded by a lock and usable as a context
  manager. Failures raise `I2CError`.
- `imuattitude.registers` — register maps `HMC5883L`, `MPU6500` and `S0018`,
  and `combine_word(msb, lsb)`, which joins two bytes into a signed 16-bit
  value.
- `imuattitude.state` — `SystemState`, `SharedState` (with
  `advance_frame`) and `elapsed_ms`.
- `imuattitude.app.build_workers(state, bus)` — builds the timer, sensor,
  control and display workers; each has `step()` for one frame and
  `run(stop)` to loop until a `threading.Event` is set.

## Limitations

- The display is only powered up; nothing is drawn on it. `Display.process`
  records the current pitch, roll and yaw in `Display.frame` but does not
  send them to the panel.
- The HMC5883L compass is not used in the running system.
  `SensorUnit.init_compass` and `SensorUnit.read_compass` exist and store raw
  readings in the shared state, but the workers never call them, so the
  attitude comes from the gyroscope and accelerometer only and yaw drifts.

## Tests

```
pip install .[test]
pytest
```