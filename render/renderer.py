# render/renderer.py
import math, logging
from typing import List, NamedTuple, Sequence, Tuple
import pygame
from config import CanvasConfig, FrameConfig, MusicConfig
from notes.model import DominantEvent
from timeline.metronome import Frame, Metronome

log = logging.getLogger(__name__)

Point = Tuple[float, float]


class Cell(NamedTuple):
    row: int        # 1-based
    col: int        # 1-based, == beat
    measure: int
    current: bool


def ease_out(x: float) -> float:
    return 1.0 if x == 1 else 1 - math.pow(2, -15 * x)


def grid_origin(width: float, height: float, cols: int, rows: int, size: float, padding: float) -> Point:
    start_x = (width - cols * size - (cols - 1) * padding) / 2
    start_y = (height - rows * size - (rows - 1) * padding) / 2
    return start_x, start_y


def cell_center(origin: Point, row: int, col: int, size: float, padding: float) -> Point:
    x = origin[0] + (col - 1) * (size + padding) + size / 2
    y = origin[1] + (row - 1) * (size + padding) + size / 2
    return x, y


def rotated_square(cx: float, cy: float, side: float, angle: float) -> List[Point]:
    h = side / 2
    c, s = math.cos(angle), math.sin(angle)
    return [(cx + x * c - y * s, cy + x * s + y * c) for x, y in ((-h, -h), (h, -h), (h, h), (-h, h))]


def visible_cells(measure: int, beat: int, beats_per_measure: int, row_count: int) -> List[Cell]:
    """Cells already played in the rows on screen; future cells stay empty."""
    if beat == 0:
        return []
    current_row = (measure - 1) % row_count + 1
    out: List[Cell] = []
    for row in range(1, current_row + 1):
        row_measure = measure + row - current_row
        last_col = beat if row == current_row else beats_per_measure
        for col in range(1, last_col + 1):
            out.append(Cell(row, col, row_measure, row == current_row and col == beat))
    return out


class Renderer:
    def __init__(self, canvas: CanvasConfig, frame: FrameConfig, music: MusicConfig):
        pygame.init()
        self.canvas = canvas
        self.frame = frame
        self.music = music
        self.screen = pygame.display.set_mode((canvas.window_w, canvas.window_h))
        pygame.display.set_caption("drum metronome")
        self.font = pygame.font.SysFont("consolas", 12)
        self.clock = pygame.time.Clock()
        self.origin = grid_origin(canvas.window_w, canvas.window_h, music.beats_per_measure,
                                  frame.row_count, frame.size, frame.padding)
        log.debug("Grid origin=%r cols=%d rows=%d", self.origin, music.beats_per_measure, frame.row_count)

    def tick(self):
        self.clock.tick(self.canvas.fps)

    def begin_frame(self):
        self.screen.fill(self.canvas.background)

    def end_frame(self):
        pygame.display.flip()

    # ------- frames -------
    def draw_frames(self, state: Frame):
        f = self.frame
        for row in range(1, f.row_count + 1):
            for col in range(1, self.music.beats_per_measure + 1):
                cx, cy = cell_center(self.origin, row, col, f.size, f.padding)
                rect = pygame.Rect(0, 0, f.size, f.size)
                rect.center = (round(cx), round(cy))
                pygame.draw.rect(self.screen, f.color, rect, 1)

        text = (f"BPM: {self.music.bpm:g},  measure: {state.measure},  "
                f"beat: {state.beat}/{self.music.beats_per_measure}")
        surf = self.font.render(text, True, self.canvas.foreground)
        self.screen.blit(surf, (self.origin[0], self.origin[1] - 10 - surf.get_height()))

    # ------- beats -------
    def draw_beats(self, metronome: Metronome, state: Frame):
        f = self.frame
        for cell in visible_cells(state.measure, state.beat, self.music.beats_per_measure, f.row_count):
            rate = state.progress if cell.current else 1.0
            cx, cy = cell_center(self.origin, cell.row, cell.col, f.size, f.padding)
            side = (f.size - f.inner_padding) * ease_out(rate)
            self._draw_label(metronome.label_at(cell.measure, cell.col), cx, cy, side, rate)

    def _square(self, color, cx: float, cy: float, side: float):
        rect = pygame.Rect(0, 0, round(side), round(side))
        rect.center = (round(cx), round(cy))
        pygame.draw.rect(self.screen, color, rect)

    def _draw_label(self, label: DominantEvent, cx: float, cy: float, side: float, rate: float):
        fg, bg = self.canvas.foreground, self.canvas.background
        if label is DominantEvent.CYMBAL:
            # 一拍轉一整圈
            pygame.draw.polygon(self.screen, fg, rotated_square(cx, cy, side, rate * math.pi * 2))
        elif label is DominantEvent.SNARE:
            self._square(fg, cx, cy, side)
            self._square(bg, cx, cy, side / 1.3)
        elif label is DominantEvent.KICK:
            self._square(fg, cx, cy, side)
        else:
            self._draw_rest(cx, cy, side)

    def _draw_rest(self, cx: float, cy: float, side: float):
        f = self.frame
        rx = cx + f.size / 2 - f.padding
        ry = cy - f.size / 2 + f.padding
        end: Sequence[float] = (rx - side + f.padding / 2, ry + side - f.padding / 2)
        pygame.draw.line(self.screen, self.canvas.foreground, (rx, ry), end, 1)
