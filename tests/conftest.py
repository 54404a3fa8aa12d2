# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pytest


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("OMIKUJI_DATA_PATH", raising=False)
        yield p


@pytest.fixture()
def sample_csv() -> str:
    return (
        "id,title,genre1,genre2,genre3,detail1,detail2,detail3,detail4,detail5\n"
        "1,大吉,お守り,良縁あり、急ぐな,努力が実る,願い事　叶う,,待ち人　来る,,\n"
        "2,吉,筆,素直に,基礎を固めよ,,,,,\n"
        ",,,,,,,,,\n"
        "3,,鈴,,,,,,,\n"
        "4,凶,塩,控えめに,計画を立てよ,争い事　避けよ,,,,\n"
    )


@pytest.fixture()
def write_csv(temp_workdir: Path, sample_csv: str) -> Path:
    path = temp_workdir / "data" / "fortunes.csv"
    path.write_text(sample_csv, encoding="utf-8")
    return path


@pytest.fixture()
def sample_config_yaml() -> str:
    return """data_path: data/fortunes.csv
export:
  output_directory: exports
  background_color: "#ffffff"
  device_pixel_ratio: 2
  max_scale: 3
seed: 7
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "omikuji.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg
