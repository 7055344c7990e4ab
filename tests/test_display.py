import io
import json
from datetime import date

import pandas as pd
import pytest

from logic.logic_display import (
    CSV_COLUMNS,
    export_csv,
    export_filename,
    export_json,
    export_txt,
    render_plan_markdown,
    write_export,
)


def test_render_plan_markdown(sample_plan):
    md = render_plan_markdown(sample_plan)
    assert md.startswith("# Strength Builder")
    assert "## Day 1: Upper Body" in md
    assert "~45 min | Intensity: Moderate" in md
    assert "**Target muscles:** chest, back" in md
    assert "1. **Dumbbell Bench Press**: 3 sets × 8-10, rest 90 seconds (~10 min)" in md
    assert "- Warm up first" in md


def test_render_empty_plan():
    assert render_plan_markdown(None) == "No workout plan yet."


def test_export_json(sample_plan):
    assert json.loads(export_json(sample_plan)) == sample_plan


def test_export_csv(sample_plan):
    df = pd.read_csv(io.StringIO(export_csv(sample_plan)), keep_default_na=False)
    assert list(df.columns) == CSV_COLUMNS
    assert len(df) == 2
    assert df.loc[0, "Exercise"] == "Dumbbell Bench Press"
    assert df.loc[0, "Day"] == "Day 1: Upper Body"
    assert df.loc[1, "Notes"] == ""


def test_export_txt(sample_plan):
    txt = export_txt(sample_plan)
    assert txt.startswith("Strength Builder\n" + "=" * len("Strength Builder") + "\n")
    assert "Duration: ~45 min | Intensity: MODERATE" in txt
    assert "   Sets: 3 | Reps: 8-10 | Rest: 90 seconds | Duration: ~10 min" in txt
    assert "TIPS FOR SUCCESS" in txt
    assert "2. Sleep well" in txt


def test_export_filename():
    assert export_filename("csv", date(2024, 3, 9)) == "workout-plan-2024-03-09.csv"


def test_write_export(tmp_path, sample_plan):
    path = write_export(sample_plan, "json", str(tmp_path))
    assert path.endswith(".json")
    with open(path, encoding="utf-8") as f:
        assert json.load(f)["title"] == "Strength Builder"


def test_write_export_rejects_unknown_format(tmp_path, sample_plan):
    with pytest.raises(ValueError):
        write_export(sample_plan, "pdf", str(tmp_path))
