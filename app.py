# app.py
import os, logging
from dataclasses import replace
from typing import Optional
import pygame
from config import AppConfig, MusicConfig
from midi.parser import parse_drum_midi
from notes.classifier import classify
from notes.model import BeatGrid, DominantEvent
from render.renderer import Renderer
from timeline.metronome import Metronome
from timeline.transport import Transport
from utils.path import resolve_midi_path

log = logging.getLogger(__name__)


class App:
    def __init__(self, cfg: AppConfig):
        self.cfg = cfg
        self.music: MusicConfig = cfg.music
        self.grid: Optional[BeatGrid] = None
        self.metronome: Optional[Metronome] = None
        self.midi_path: Optional[str] = None

    # ---------- Loading ----------
    def load(self) -> BeatGrid:
        """Decode the drum file and build the beat grid; decode errors propagate."""
        self.midi_path = resolve_midi_path(self.cfg.midi_path)
        track = parse_drum_midi(self.midi_path, self.cfg.track)

        tpq = self.cfg.tpq_override if self.cfg.tpq_override is not None else track.ticks_per_beat
        if tpq != self.music.ticks_per_quarter_note:
            self.music = replace(self.music, ticks_per_quarter_note=tpq)

        self.grid = classify(track.events, self.music)
        counts = self.grid.counts()
        log.info("Loaded %s: %d measures, cymbal=%d snare=%d kick=%d, %d ms/beat",
                 os.path.basename(self.midi_path), self.grid.last_measure,
                 counts[DominantEvent.CYMBAL], counts[DominantEvent.SNARE],
                 counts[DominantEvent.KICK], self.music.ms_per_beat)
        return self.grid

    # ---------- Main loop ----------
    def run(self):
        if self.grid is None:
            self.load()
        renderer = Renderer(self.cfg.canvas, self.cfg.frame, self.music)
        self.metronome = Metronome(self.grid, Transport(self.music, start_ms=pygame.time.get_ticks()))

        running = True
        try:
            while running:
                renderer.tick()
                for e in pygame.event.get():
                    if e.type == pygame.QUIT:
                        running = False
                    elif e.type == pygame.KEYDOWN and e.key == pygame.K_ESCAPE:
                        running = False
                if not running:
                    break

                state = self.metronome.on_frame(pygame.time.get_ticks())

                renderer.begin_frame()
                renderer.draw_frames(state)
                renderer.draw_beats(self.metronome, state)
                renderer.end_frame()
        finally:
            state = self.metronome.transport.state
            log.info("Stopped at measure %d beat %d", state.measure, state.beat)
            pygame.quit()
