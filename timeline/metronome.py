# timeline/metronome.py
from dataclasses import dataclass
from notes.model import BeatGrid, DominantEvent
from timeline.transport import Transport


@dataclass(frozen=True)
class Frame:
    measure: int
    beat: int
    progress: float
    label: DominantEvent

    @property
    def started(self) -> bool:
        return self.beat > 0


class Metronome:
    """Joins the beat grid and the transport into one per-frame snapshot."""
    def __init__(self, grid: BeatGrid, transport: Transport):
        self.grid = grid
        self.transport = transport

    def label_at(self, measure: int, beat: int) -> DominantEvent:
        return self.grid.get(measure, beat)

    def on_frame(self, now_ms: float) -> Frame:
        self.transport.advance(now_ms)
        t = self.transport
        if not t.started:
            return Frame(t.measure, t.beat, 0.0, DominantEvent.NONE)
        return Frame(t.measure, t.beat, t.progress(now_ms), self.grid.get(t.measure, t.beat))
