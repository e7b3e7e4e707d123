# ========================= config.py =========================
import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

Color = Tuple[int, int, int]


class ConfigError(ValueError):
    """Invalid meter/tempo/resolution or layout value."""


@dataclass(frozen=True)
class MusicConfig:
    beats_per_measure: int = 4        # 幾拍子
    bpm: float = 173.0
    ticks_per_quarter_note: int = 480
    # General MIDI drum map
    kick_id: int = 36
    snare_id: int = 38
    cymbal_id: int = 49

    def __post_init__(self):
        if self.beats_per_measure < 1:
            raise ConfigError(f"beats_per_measure must be >= 1, got {self.beats_per_measure}")
        if not (math.isfinite(self.bpm) and self.bpm > 0):
            raise ConfigError(f"bpm must be a positive number, got {self.bpm}")
        if self.ticks_per_quarter_note <= 0:
            raise ConfigError(f"ticks_per_quarter_note must be positive, got {self.ticks_per_quarter_note}")
        if self.ms_per_beat < 1:
            raise ConfigError(f"bpm {self.bpm} is too fast: beat interval rounds down to 0 ms")

    @property
    def ticks_per_beat(self) -> float:
        return self.ticks_per_quarter_note * (4 / self.beats_per_measure)

    @property
    def ms_per_beat(self) -> int:
        return math.floor((60 / self.bpm) * 1000 * (4 / self.beats_per_measure))


@dataclass
class FrameConfig:
    row_count: int = 1        # 縱向幾列（小節）
    padding: int = 3          # 格子間距
    size: int = 50
    inner_padding: int = 5    # 格子到圖形的留白
    color: Color = (204, 204, 204)

    def __post_init__(self):
        if self.row_count < 1:
            raise ConfigError(f"row_count must be >= 1, got {self.row_count}")
        if self.size <= self.inner_padding:
            raise ConfigError(f"size must exceed inner_padding ({self.inner_padding}), got {self.size}")


@dataclass
class CanvasConfig:
    window_w: int = 800
    window_h: int = 400
    fps: int = 60
    background: Color = (34, 34, 34)
    foreground: Color = (255, 255, 255)


@dataclass
class AppConfig:
    music: MusicConfig = field(default_factory=MusicConfig)
    frame: FrameConfig = field(default_factory=FrameConfig)
    canvas: CanvasConfig = field(default_factory=CanvasConfig)
    midi_path: Optional[str] = None   # None -> bundled assets/drum.mid
    track: Optional[int] = None       # None -> first track with notes
    tpq_override: Optional[int] = None  # None -> 用檔案標頭的解析度
