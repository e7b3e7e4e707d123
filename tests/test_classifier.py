import itertools

import pytest

from config import MusicConfig
from notes.classifier import classify, quantize, role_of
from notes.model import BeatGrid, DominantEvent, NoteEvent

CYMBAL, SNARE, KICK = 49, 38, 36


@pytest.fixture
def cfg() -> MusicConfig:
    return MusicConfig(beats_per_measure=4, bpm=173, ticks_per_quarter_note=480)


def test_cymbal_wins_regardless_of_order(cfg):
    events = [NoteEvent(KICK, 0), NoteEvent(CYMBAL, 10), NoteEvent(SNARE, 20)]
    for perm in itertools.permutations(events):
        grid = classify(list(perm), cfg)
        assert grid.get(1, 1) is DominantEvent.CYMBAL
        assert len(grid) == 1


def test_snare_beats_kick_in_either_order(cfg):
    assert classify([NoteEvent(KICK, 5), NoteEvent(SNARE, 100)], cfg).get(1, 1) is DominantEvent.SNARE
    assert classify([NoteEvent(SNARE, 100), NoteEvent(KICK, 5)], cfg).get(1, 1) is DominantEvent.SNARE


def test_kick_alone(cfg):
    assert classify([NoteEvent(KICK, 480)], cfg).get(1, 2) is DominantEvent.KICK


def test_quantization_boundary(cfg):
    assert quantize(1919, cfg) == (1, 4)
    assert quantize(1920, cfg) == (2, 1)
    grid = classify([NoteEvent(SNARE, 1919), NoteEvent(KICK, 1920)], cfg)
    assert grid.get(1, 4) is DominantEvent.SNARE
    assert grid.get(2, 1) is DominantEvent.KICK


def test_quantize_other_meter():
    cfg = MusicConfig(beats_per_measure=3, ticks_per_quarter_note=480)
    # ticks_per_beat = 640
    assert cfg.ticks_per_beat == pytest.approx(640)
    assert quantize(639, cfg) == (1, 1)
    assert quantize(640, cfg) == (1, 2)
    assert quantize(1920, cfg) == (2, 1)


def test_unknown_pitches_ignored(cfg):
    grid = classify([NoteEvent(42, 0), NoteEvent(46, 480), NoteEvent(KICK, 960)], cfg)
    assert len(grid) == 1
    assert grid.get(1, 1) is DominantEvent.NONE
    assert grid.get(1, 3) is DominantEvent.KICK


def test_empty_events_give_empty_grid(cfg):
    grid = classify([], cfg)
    assert len(grid) == 0
    assert grid.measures() == []
    assert grid.last_measure == 0
    assert grid.get(1, 1) is DominantEvent.NONE
    assert grid.get(0, 0) is DominantEvent.NONE


def test_input_not_mutated(cfg):
    events = [NoteEvent(SNARE, 960), NoteEvent(KICK, 0)]
    before = list(events)
    classify(events, cfg)
    assert events == before


def test_custom_role_ids():
    cfg = MusicConfig(kick_id=35, snare_id=40, cymbal_id=57)
    assert role_of(57, cfg) is DominantEvent.CYMBAL
    assert role_of(40, cfg) is DominantEvent.SNARE
    assert role_of(35, cfg) is DominantEvent.KICK
    assert role_of(CYMBAL, cfg) is DominantEvent.NONE


def test_grid_measures_and_counts(cfg):
    events = [NoteEvent(CYMBAL, 0), NoteEvent(SNARE, 480), NoteEvent(KICK, 1920 * 2)]
    grid = classify(events, cfg)
    assert grid.measures() == [1, 3]
    assert 2 not in grid.measures()
    assert grid.last_measure == 3
    assert dict(grid.measure(1)) == {1: DominantEvent.CYMBAL, 2: DominantEvent.SNARE}
    assert dict(grid.measure(2)) == {}
    assert grid.counts() == {DominantEvent.CYMBAL: 1, DominantEvent.SNARE: 1, DominantEvent.KICK: 1}


def test_grid_is_read_only():
    grid = BeatGrid({1: {1: DominantEvent.KICK}})
    with pytest.raises(TypeError):
        grid.measure(1)[2] = DominantEvent.SNARE


def test_four_way_labels_are_distinct():
    labels = {DominantEvent.CYMBAL, DominantEvent.SNARE, DominantEvent.KICK, DominantEvent.NONE}
    assert len(labels) == 4
    assert DominantEvent.CYMBAL.outranks(DominantEvent.SNARE)
    assert DominantEvent.SNARE.outranks(DominantEvent.KICK)
    assert DominantEvent.KICK.outranks(DominantEvent.NONE)
    assert not DominantEvent.NONE.outranks(DominantEvent.KICK)
