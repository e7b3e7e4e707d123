# timeline/transport.py
from dataclasses import dataclass
from config import MusicConfig


@dataclass(frozen=True)
class TransportState:
    measure: int        # 0 before the first beat, then 1-based
    beat: int           # 0 before the first beat, then 1..beats_per_measure
    last_beat_ms: float

    @property
    def started(self) -> bool:
        return self.beat > 0


class Transport:
    """Frame-driven beat clock.

    advance() is called once per rendered frame with the current time in ms.
    It fires at most one beat per call: if frames stall for longer than a beat,
    the position falls behind and catches up one beat per later call.
    Timestamps that go backwards (or NaN) count as "not enough time yet".
    """
    def __init__(self, cfg: MusicConfig, start_ms: float = 0.0):
        self.cfg = cfg
        self.measure = 0
        self.beat = 0
        self.last_beat_ms = float(start_ms)

    @property
    def state(self) -> TransportState:
        return TransportState(self.measure, self.beat, self.last_beat_ms)

    @property
    def started(self) -> bool:
        return self.beat > 0

    def advance(self, now_ms: float) -> bool:
        elapsed = now_ms - self.last_beat_ms
        if not elapsed >= self.cfg.ms_per_beat:
            return False
        if self.beat % self.cfg.beats_per_measure == 0:
            self.beat = 0
            self.measure += 1
        self.last_beat_ms = now_ms
        self.beat += 1
        return True

    def progress(self, now_ms: float) -> float:
        ratio = (now_ms - self.last_beat_ms) / self.cfg.ms_per_beat
        if not ratio > 0.0:
            return 0.0
        return min(ratio, 1.0)
