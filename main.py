# main.py
import sys, os
sys.path.append(os.path.dirname(__file__))  # 確保能找到 config.py

import argparse
import logging
from logging.handlers import RotatingFileHandler
from config import AppConfig, MusicConfig, FrameConfig, CanvasConfig, ConfigError
from midi.parser import MidiDecodeError
from utils.crashlog import install_crash_hooks, write_error_report, log_dir

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _init_logging(level: str = "INFO"):
    if logging.getLogger().handlers:
        return
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT, encoding="utf-8")
    log_path = os.path.join(log_dir(), "app.log")
    try:
        fh = RotatingFileHandler(log_path, maxBytes=2*1024*1024, backupCount=3, encoding="utf-8")
    except OSError as e:
        logging.warning("無法寫入 %s，只輸出到終端：%s", log_path, e)
        return
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.getLogger().addHandler(fh)


def build_parser() -> argparse.ArgumentParser:
    d, fr, cv = MusicConfig(), FrameConfig(), CanvasConfig()
    ap = argparse.ArgumentParser(description="Visual metronome driven by a drum MIDI track")
    ap.add_argument('--midi', default=None, help="drum MIDI file (default: assets/drum.mid)")
    ap.add_argument('--track', type=int, default=None, help="track index (default: first track with notes)")
    ap.add_argument('--bpm', type=float, default=d.bpm)
    ap.add_argument('--beats', type=int, default=d.beats_per_measure, help="beats per measure")
    ap.add_argument('--tpq', type=int, default=None, help="ticks per quarter note (default: from the file)")
    ap.add_argument('--kick', type=int, default=d.kick_id)
    ap.add_argument('--snare', type=int, default=d.snare_id)
    ap.add_argument('--cymbal', type=int, default=d.cymbal_id)
    ap.add_argument('--rows', type=int, default=fr.row_count, help="measures shown at once")
    ap.add_argument('--fps', type=int, default=cv.fps)
    ap.add_argument('--width', type=int, default=cv.window_w)
    ap.add_argument('--height', type=int, default=cv.window_h)
    ap.add_argument('--log-level', default="INFO", choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return ap


def config_from_args(args: argparse.Namespace) -> AppConfig:
    return AppConfig(
        music=MusicConfig(
            beats_per_measure=args.beats,
            bpm=args.bpm,
            ticks_per_quarter_note=args.tpq if args.tpq is not None else MusicConfig().ticks_per_quarter_note,
            kick_id=args.kick,
            snare_id=args.snare,
            cymbal_id=args.cymbal,
        ),
        frame=FrameConfig(row_count=args.rows),
        canvas=CanvasConfig(window_w=args.width, window_h=args.height, fps=args.fps),
        midi_path=args.midi,
        track=args.track,
        tpq_override=args.tpq,
    )


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    _init_logging(args.log_level)
    install_crash_hooks()
    logging.info("應用程式啟動")

    try:
        cfg = config_from_args(args)
        from app import App
        app = App(cfg)
        app.load()
    except (ConfigError, MidiDecodeError) as e:
        write_error_report("startup", e)
        logging.error("啟動失敗：%s", e)
        return 2

    app.run()
    return 0


if __name__ == '__main__':
    sys.exit(main())
