import fnmatch
import os

import pytest

import utils.path
from utils.path import DEFAULT_MIDI, resource_path

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def _pyproject():
    tomllib = pytest.importorskip("tomllib")
    with open(os.path.join(ROOT, "pyproject.toml"), "rb") as f:
        return tomllib.load(f)


def test_bundled_midi_exists_beside_utils():
    install_root = os.path.dirname(os.path.dirname(os.path.abspath(utils.path.__file__)))
    assert resource_path(DEFAULT_MIDI) == os.path.join(install_root, DEFAULT_MIDI)
    assert os.path.isfile(resource_path(DEFAULT_MIDI))


def test_bundled_midi_is_installed_as_package_data():
    setuptools_cfg = _pyproject()["tool"]["setuptools"]
    pkg, name = os.path.split(DEFAULT_MIDI)
    assert pkg in setuptools_cfg["packages"]
    assert "utils" in setuptools_cfg["packages"]
    patterns = setuptools_cfg["package-data"][pkg]
    assert any(fnmatch.fnmatch(name, p) for p in patterns)


def test_console_script_points_at_main():
    assert _pyproject()["project"]["scripts"]["drumgrid"] == "main:main"
