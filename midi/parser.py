# midi/parser.py
import logging
from dataclasses import dataclass
from typing import List, Optional
import mido
from notes.model import NoteEvent

log = logging.getLogger(__name__)


class MidiDecodeError(Exception):
    """The drum MIDI file could not be read; nothing was classified."""


@dataclass(frozen=True)
class DrumTrack:
    events: List[NoteEvent]
    ticks_per_beat: int     # file header resolution (ticks per quarter note)
    track_index: int


def _note_events(track: mido.MidiTrack) -> List[NoteEvent]:
    tick = 0
    out: List[NoteEvent] = []
    for msg in track:
        tick += msg.time
        if msg.type == 'note_on' and msg.velocity > 0:
            out.append(NoteEvent(pitch=msg.note, tick=tick))
    return out


def parse_drum_midi(path: str, track: Optional[int] = None) -> DrumTrack:
    try:
        mid = mido.MidiFile(path)
    except (OSError, EOFError, ValueError, KeyError, IndexError) as e:
        raise MidiDecodeError(f"cannot decode MIDI file {path!r}: {e}") from e

    if not mid.tracks:
        raise MidiDecodeError(f"{path!r} contains no tracks")

    if track is None:
        # format 1 通常把 tempo meta 放在 track 0，取第一個有音符的軌
        chosen, events = 0, []
        for i, t in enumerate(mid.tracks):
            events = _note_events(t)
            if events:
                chosen = i
                break
    else:
        if not 0 <= track < len(mid.tracks):
            raise MidiDecodeError(f"track {track} out of range: {path!r} has {len(mid.tracks)} track(s)")
        chosen, events = track, _note_events(mid.tracks[track])

    log.info("Decoded %s: track=%d events=%d tpq=%d", path, chosen, len(events), mid.ticks_per_beat)
    return DrumTrack(events=events, ticks_per_beat=mid.ticks_per_beat, track_index=chosen)
