# ================================
# file: tests/test_main.py
# ================================
import os

import numpy as np

import main
from sim.arena import ArenaLayout


def _args(tmp_path, *extra):
    return ["--log-dir", str(tmp_path / "logs"),
            "--descriptor-out", str(tmp_path / "out" / "arena.txt"),
            "--speed", "0", "--time-limit", "30", *extra]


def test_headless_run_writes_outputs(tmp_path):
    npz = tmp_path / "run.npz"
    code = main.main(_args(tmp_path, "--coverage", "30", "--start", "8", "10",
                           "--save-log", str(npz)))
    assert code == 0
    assert os.path.exists(tmp_path / "out" / "arena.txt")
    assert len(os.listdir(tmp_path / "logs")) == 1
    data = np.load(str(npz))
    assert data["poses"][0, 1:3].tolist() == [7.0, 9.0]
    assert data["coverage"][:, 1].max() >= 30.0


def test_run_from_descriptor_file(tmp_path):
    layout = ArenaLayout()
    layout.set_obstacle(10, 10)
    map_path = tmp_path / "map.txt"
    map_path.write_text(layout.to_descriptor())
    code = main.main(_args(tmp_path, "--map", str(map_path), "--coverage", "20"))
    assert code == 0
    written = ArenaLayout.from_descriptor((tmp_path / "out" / "arena.txt").read_text())
    assert written.obstacles() == [(10, 10)]


def test_missing_map_is_an_exploration_error(tmp_path):
    code = main.main(_args(tmp_path, "--map", str(tmp_path / "nope.txt")))
    assert code == 2
