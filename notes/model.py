# notes/model.py
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping


@dataclass(frozen=True)
class NoteEvent:
    pitch: int      # MIDI note number
    tick: int       # absolute tick from track start


class DominantEvent(Enum):
    """What a single beat cell shows. NONE is silence, not a lookup miss."""
    CYMBAL = 0
    SNARE = 1
    KICK = 2
    NONE = 3

    @property
    def rank(self) -> int:
        return self.value

    def outranks(self, other: "DominantEvent") -> bool:
        return self.rank < other.rank


_EMPTY: Mapping[int, DominantEvent] = MappingProxyType({})


class BeatGrid:
    """Sparse measure(1-based) -> beat(1-based) -> DominantEvent table.
    Built once by the classifier; readers only look cells up.
    """
    def __init__(self, cells: Dict[int, Dict[int, DominantEvent]]):
        self._cells = {
            m: MappingProxyType(dict(beats))
            for m, beats in cells.items() if beats
        }

    def get(self, measure: int, beat: int) -> DominantEvent:
        return self._cells.get(measure, _EMPTY).get(beat, DominantEvent.NONE)

    def measure(self, measure: int) -> Mapping[int, DominantEvent]:
        return self._cells.get(measure, _EMPTY)

    def measures(self) -> List[int]:
        return sorted(self._cells)

    @property
    def last_measure(self) -> int:
        return max(self._cells, default=0)

    def counts(self) -> Dict[DominantEvent, int]:
        out = {e: 0 for e in (DominantEvent.CYMBAL, DominantEvent.SNARE, DominantEvent.KICK)}
        for beats in self._cells.values():
            for label in beats.values():
                out[label] += 1
        return out

    def __len__(self) -> int:
        return sum(len(b) for b in self._cells.values())

    def __repr__(self) -> str:
        return f"BeatGrid(measures={len(self._cells)}, cells={len(self)})"
