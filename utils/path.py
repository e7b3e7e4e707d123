# utils/path.py
import sys, os
from typing import Optional

DEFAULT_MIDI = os.path.join("assets", "drum.mid")


def resource_path(rel: str) -> str:
    """
    開發時回傳專案根目錄下的路徑；PyInstaller 打包後回傳展開的臨時目錄下路徑。
    """
    base = getattr(sys, "_MEIPASS", os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
    return os.path.join(base, rel)


def resolve_midi_path(arg: Optional[str]) -> str:
    """None -> bundled drum.mid; a relative path missing from cwd is tried against the bundle."""
    if not arg:
        return resource_path(DEFAULT_MIDI)
    if os.path.isabs(arg) or os.path.exists(arg):
        return arg
    bundled = resource_path(arg)
    return bundled if os.path.exists(bundled) else arg
