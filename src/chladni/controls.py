"""Control inputs: equity, climate and surveillance.

The installation reads three social parameters, nominally in [1, 10], plus a
target particle count. Values arrive asynchronously (keyboard, dials, a
temperature sensor) and are buffered in bounded channels. Once per frame the
ControlMapper drains the channels, keeps the latest valid sample of each, and
remaps the controls into the simulation tunables:

    wave_m      = remap(equity,       1..10 -> 1..40)
    wave_n      = remap(surveillance, 1..10 -> WAVE_N_RANGE)
    walk_gain   = remap(climate,      1..10 -> 0.05..0.001)   (calmer when hot)
    target_hue  = remap(climate,      1..10 -> 0..260)
"""

import math
import queue
import threading
from dataclasses import dataclass

# --- Control domain ---
CONTROL_MIN = 1.0
CONTROL_MAX = 10.0
DEFAULT_CONTROL = 5.0

# --- Derived tunable ranges ---
WAVE_M_RANGE = (1.0, 40.0)
# Ascending. Some installation builds ran surveillance 40 -> 1 instead.
WAVE_N_RANGE = (1.0, 40.0)
WALK_GAIN_RANGE = (0.05, 0.001)
MAX_HUE = 260.0
HUE_RANGE = (0.0, MAX_HUE)

# --- Raw device scales ---
DIAL_RANGE = (0.0, 255.0)
TEMPERATURE_RANGE = (15.0, 35.0)  # degrees Celsius

# --- Channels ---
CHANNEL_SIZE = 64
CONTROL_NAMES = ("equity", "climate", "surveillance")
PARTICLES = "particles"
CHANNEL_NAMES = CONTROL_NAMES + (PARTICLES,)


def clamp(value, lo, hi):
    if lo > hi:
        lo, hi = hi, lo
    return max(lo, min(hi, value))


def remap(value, start1, stop1, start2, stop2):
    """Linearly map value from [start1, stop1] onto [start2, stop2].

    Like p5's map(): no clamping, and either range may be descending.
    """
    return start2 + (stop2 - start2) * ((value - start1) / (stop1 - start1))


def normalize_control(value):
    """Clamp a control value into [CONTROL_MIN, CONTROL_MAX]."""
    return clamp(float(value), CONTROL_MIN, CONTROL_MAX)


def dial_to_control(raw):
    """Raw 8-bit dial sample (0-255) -> control value in [1, 10]."""
    raw = clamp(float(raw), *DIAL_RANGE)
    return remap(raw, DIAL_RANGE[0], DIAL_RANGE[1], CONTROL_MIN, CONTROL_MAX)


def temperature_to_control(celsius):
    """Temperature sensor reading -> climate value in [1, 10]."""
    celsius = clamp(float(celsius), *TEMPERATURE_RANGE)
    return remap(
        celsius, TEMPERATURE_RANGE[0], TEMPERATURE_RANGE[1], CONTROL_MIN, CONTROL_MAX
    )


def _as_number(sample):
    try:
        value = float(sample)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


@dataclass
class ControlInputs:
    equity: float = DEFAULT_CONTROL
    climate: float = DEFAULT_CONTROL
    surveillance: float = DEFAULT_CONTROL


@dataclass(frozen=True)
class SimulationConfig:
    """Per-frame snapshot of the live tunables. Never mutated mid-frame."""

    equity: float
    climate: float
    surveillance: float
    wave_m: float
    wave_n: float
    walk_gain: float
    target_hue: float
    active_count: int


def map_controls(inputs, particle_count, capacity):
    """Build the SimulationConfig for one frame from the current controls."""
    equity = normalize_control(inputs.equity)
    climate = normalize_control(inputs.climate)
    surveillance = normalize_control(inputs.surveillance)

    return SimulationConfig(
        equity=equity,
        climate=climate,
        surveillance=surveillance,
        wave_m=remap(equity, CONTROL_MIN, CONTROL_MAX, *WAVE_M_RANGE),
        wave_n=remap(surveillance, CONTROL_MIN, CONTROL_MAX, *WAVE_N_RANGE),
        walk_gain=remap(climate, CONTROL_MIN, CONTROL_MAX, *WALK_GAIN_RANGE),
        target_hue=remap(climate, CONTROL_MIN, CONTROL_MAX, *HUE_RANGE),
        active_count=int(clamp(round(particle_count), 0, capacity)),
    )


class ControlChannel:
    """Bounded single-producer / single-consumer channel of raw samples.

    When full, the oldest sample is discarded so the newest always fits.
    """

    def __init__(self, maxsize=CHANNEL_SIZE):
        self._queue = queue.Queue(maxsize=maxsize)

    def put(self, sample):
        while True:
            try:
                self._queue.put_nowait(sample)
                return
            except queue.Full:
                try:
                    self._queue.get_nowait()
                except queue.Empty:
                    pass

    def drain(self, current):
        """Consume every pending sample and return the last valid one.

        Malformed samples are dropped; with nothing valid pending the current
        value is returned unchanged.
        """
        value = current
        while True:
            try:
                sample = self._queue.get_nowait()
            except queue.Empty:
                return value
            number = _as_number(sample)
            if number is not None:
                value = number

    def __len__(self):
        return self._queue.qsize()


class ControlMapper:
    """Owns the current control values and the channels that feed them."""

    def __init__(self, capacity, inputs=None, particle_count=None, channel_size=CHANNEL_SIZE):
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        self.capacity = capacity
        self.inputs = inputs if inputs is not None else ControlInputs()
        if particle_count is None:
            particle_count = capacity
        self.particle_count = int(clamp(round(particle_count), 0, capacity))
        self.channels = {name: ControlChannel(channel_size) for name in CHANNEL_NAMES}
        self._pending = {}

    def push(self, name, sample):
        self.channels[name].put(sample)
        number = _as_number(sample)
        if number is not None:
            self._pending[name] = number

    def latest(self, name):
        """Newest valid value for a channel, including samples not yet drained."""
        if name in self._pending:
            return self._pending[name]
        if name == PARTICLES:
            return self.particle_count
        return getattr(self.inputs, name)

    def update(self):
        """Drain all channels, then remap. Called once per frame."""
        self._pending.clear()
        for name in CONTROL_NAMES:
            current = getattr(self.inputs, name)
            value = self.channels[name].drain(current)
            setattr(self.inputs, name, normalize_control(value))

        count = self.channels[PARTICLES].drain(self.particle_count)
        self.particle_count = int(clamp(round(count), 0, self.capacity))

        return map_controls(self.inputs, self.particle_count, self.capacity)


# --- Device lines ---


def parse_device_line(line):
    """Parse one device line into (channel, value), or None if malformed.

    Format: "<channel> <value> [unit]" with unit "dial" for raw 0-255 samples
    and "temp" for degrees Celsius. Without a unit the value is already
    normalized (or a particle count for the "particles" channel).

        parse_device_line("equity 200 dial")   -> ("equity", 8.06...)
        parse_device_line("climate 24.5 temp") -> ("climate", 5.27...)
        parse_device_line("particles 4000")    -> ("particles", 4000.0)
    """
    parts = line.strip().lower().replace("=", " ").replace(",", " ").split()
    if len(parts) not in (2, 3):
        return None

    name = parts[0]
    if name not in CHANNEL_NAMES:
        return None

    value = _as_number(parts[1])
    if value is None:
        return None

    if len(parts) == 2:
        return name, value

    unit = parts[2]
    if name == PARTICLES:
        return None
    if unit == "dial":
        return name, dial_to_control(value)
    if unit == "temp":
        return name, temperature_to_control(value)
    return None


class DeviceListener:
    """Reads device lines from a text stream on a background thread.

    The listener is the only producer for the mapper's channels it writes to;
    the frame loop is the only consumer.
    """

    def __init__(self, stream, mapper):
        self.stream = stream
        self.mapper = mapper
        self._stop = threading.Event()
        self._thread = None

    def start(self):
        if self._thread and self._thread.is_alive():
            return

        def worker():
            print("Device listener started")
            for line in self.stream:
                if self._stop.is_set():
                    break
                parsed = parse_device_line(line)
                if parsed is None:
                    continue
                name, value = parsed
                self.mapper.push(name, value)
            print("Device listener stopped")

        self._thread = threading.Thread(target=worker, daemon=True)
        self._thread.start()

    def stop(self):
        self._stop.set()

    def join(self, timeout=None):
        if self._thread:
            self._thread.join(timeout)
