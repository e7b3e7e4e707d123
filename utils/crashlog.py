# utils/crashlog.py
import os, sys, faulthandler, datetime, traceback, threading, logging
from typing import Optional, TextIO

_native_file: Optional[TextIO] = None


def log_dir() -> str:
    d = os.environ.get("DRUMGRID_LOG_DIR") or os.path.join(
        os.path.dirname(getattr(sys, "_MEIPASS", os.getcwd())), "logs")
    os.makedirs(d, exist_ok=True)
    return d


def report_path(prefix: str) -> str:
    stamp = datetime.datetime.now().strftime("%Y%m%d-%H%M%S")
    return os.path.join(log_dir(), f"{prefix}-{stamp}.txt")


def _write_report(prefix: str, header: str, exc_type, exc, tb) -> str:
    path = report_path(prefix)
    with open(path, "w", encoding="utf-8") as out:
        out.write(header + "\n")
        out.write("=" * 60 + "\n")
        traceback.print_exception(exc_type, exc, tb, file=out)
    return path


def install_crash_hooks():
    """faulthandler -> native-*.txt, uncaught exceptions -> crash-*.txt"""
    global _native_file
    try:
        if _native_file is None:
            _native_file = open(report_path("native"), "w", encoding="utf-8")
        faulthandler.enable(_native_file, all_threads=True)
    except (OSError, ValueError) as e:
        # 寫不了 native log 就略過，不影響啟動
        logging.warning("faulthandler 未啟用：%s", e)
        _native_file = None

    def _hook(exc_type, exc, tb):
        try:
            _write_report("crash", "UNCAUGHT EXCEPTION", exc_type, exc, tb)
        finally:
            sys.__excepthook__(exc_type, exc, tb)
    sys.excepthook = _hook

    def _thread_hook(args):
        _hook(args.exc_type, args.exc_value, args.exc_traceback)
    threading.excepthook = _thread_hook


def write_error_report(title: str, exc: BaseException) -> str:
    return _write_report("error", f"[{title}] {type(exc).__name__}: {exc}",
                         type(exc), exc, exc.__traceback__)
