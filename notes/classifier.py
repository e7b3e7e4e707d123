# ========================= notes/classifier.py =========================
import logging
from typing import Dict, Iterable, Tuple
from notes.model import NoteEvent, DominantEvent, BeatGrid
from config import MusicConfig

log = logging.getLogger(__name__)


def role_of(pitch: int, cfg: MusicConfig) -> DominantEvent:
    if pitch == cfg.cymbal_id:
        return DominantEvent.CYMBAL
    if pitch == cfg.snare_id:
        return DominantEvent.SNARE
    if pitch == cfg.kick_id:
        return DominantEvent.KICK
    return DominantEvent.NONE


def quantize(tick: int, cfg: MusicConfig) -> Tuple[int, int]:
    """Snap a tick to the (measure, beat) cell containing it, both 1-based.

    floor(tick / ticks_per_beat) is done in integers so that exact beat
    boundaries (e.g. tick 1920 in 4/4 @ 480 tpq) never land one beat early.
    """
    total_beats = (tick * cfg.beats_per_measure) // (cfg.ticks_per_quarter_note * 4)
    measure = total_beats // cfg.beats_per_measure + 1
    beat = total_beats % cfg.beats_per_measure + 1
    return measure, beat


def classify(events: Iterable[NoteEvent], cfg: MusicConfig) -> BeatGrid:
    """Reduce every beat to its dominant drum role: cymbal > snare > kick."""
    cells: Dict[int, Dict[int, DominantEvent]] = {}
    ignored = 0
    for ev in events:
        role = role_of(ev.pitch, cfg)
        if role is DominantEvent.NONE:
            ignored += 1
            continue
        measure, beat = quantize(ev.tick, cfg)
        beats = cells.setdefault(measure, {})
        current = beats.get(beat, DominantEvent.NONE)
        # 已有更高優先的就不覆蓋
        if role.outranks(current):
            beats[beat] = role

    grid = BeatGrid(cells)
    counts = grid.counts()
    log.debug("classified %d cells over %d measures (cymbal=%d snare=%d kick=%d, ignored=%d)",
              len(grid), grid.last_measure, counts[DominantEvent.CYMBAL],
              counts[DominantEvent.SNARE], counts[DominantEvent.KICK], ignored)
    return grid
