#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_cli.py
"""Tests for the command-line interface."""
import argparse

import pytest
from utils import NS_DECLS

from pptx2html.cli import (
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    build_options,
    create_parser,
    main,
)
from pptx2html.exceptions import ValidationError
from pptx2html.logging_utils import resolve_log_level
from pptx2html.options import ChartFixOptions, RenderOptions

CHART_WITH_GAP = (
    f'<c:chartSpace {NS_DECLS}><c:roundedCorners val="0"/><c:chart><c:plotArea><c:barChart>'
    '<c:gapWidth val="150"/></c:barChart></c:plotArea></c:chart></c:chartSpace>'
)


@pytest.fixture
def charts_dir(tmp_path):
    charts = tmp_path / "charts"
    charts.mkdir()
    (charts / "chart1.xml").write_text(CHART_WITH_GAP, encoding="utf-8")
    return tmp_path


@pytest.mark.cli
@pytest.mark.unit
class TestParser:
    """Test argument parsing."""

    def test_option_flags(self) -> None:
        """Test option dataclass fields become flags."""
        parsed = create_parser().parse_args(["convert", "deck.pptx", "--desired-ticks", "6", "--no-embed-images"])
        assert parsed.desired_ticks == 6
        assert parsed.embed_images is False
        assert parsed.curve_segments is None

    def test_build_options(self) -> None:
        """Test only given flags override the defaults."""
        parsed = create_parser().parse_args(["fix-charts", "ppt", "--gap-width", "100"])
        options = build_options(parsed, ChartFixOptions)
        assert options.gap_width == "100"
        assert options.legend_position == "b"

    def test_invalid_options(self) -> None:
        """Test dataclass validation errors become ValidationError."""
        parsed = argparse.Namespace(**{name: None for name in RenderOptions.__dataclass_fields__})
        parsed.desired_ticks = 0
        with pytest.raises(ValidationError):
            build_options(parsed, RenderOptions)

    def test_command_required(self) -> None:
        """Test running without a command is a usage error."""
        with pytest.raises(SystemExit):
            create_parser().parse_args([])

    def test_log_levels(self) -> None:
        """Test level names and numbers."""
        assert resolve_log_level("debug") == 10
        assert resolve_log_level(30) == 30
        assert resolve_log_level("nonsense") == 20


@pytest.mark.cli
@pytest.mark.unit
class TestConvertCommand:
    """Test the convert command."""

    def test_convert_to_file(self, chart_pptx, tmp_path, capsys) -> None:
        """Test writing the document to a file."""
        out = tmp_path / "deck.html"
        assert main(["convert", str(chart_pptx), "-o", str(out)]) == EXIT_SUCCESS
        assert 'class="chart-container"' in out.read_text(encoding="utf-8")
        assert "Slides: 1" in capsys.readouterr().err

    def test_convert_to_stdout(self, chart_pptx, capsys) -> None:
        """Test the document goes to stdout without -o."""
        assert main(["convert", str(chart_pptx)]) == EXIT_SUCCESS
        assert capsys.readouterr().out.startswith("<!DOCTYPE html>")

    def test_missing_input(self, tmp_path, capsys) -> None:
        """Test a missing file exits with the file error code."""
        assert main(["convert", str(tmp_path / "missing.pptx")]) == EXIT_FILE_ERROR
        assert "File not found" in capsys.readouterr().err

    def test_invalid_option_value(self, chart_pptx) -> None:
        """Test a rejected option exits with the validation error code."""
        assert main(["convert", str(chart_pptx), "--curve-segments", "1"]) == EXIT_VALIDATION_ERROR


@pytest.mark.cli
@pytest.mark.unit
class TestFixChartsCommand:
    """Test the fix-charts command."""

    def test_fix_charts(self, charts_dir, capsys) -> None:
        """Test charts are fixed and counted."""
        assert main(["fix-charts", str(charts_dir)]) == EXIT_SUCCESS
        assert "Charts fixed: 1" in capsys.readouterr().err
        assert 'val="219"' in (charts_dir / "charts" / "chart1.xml").read_text(encoding="utf-8")

    def test_rich_summary(self, charts_dir, capsys) -> None:
        """Test the formatted summary."""
        assert main(["fix-charts", str(charts_dir), "--rich", "--gap-width", "300"]) == EXIT_SUCCESS
        assert "Charts fixed" in capsys.readouterr().err
        assert 'val="300"' in (charts_dir / "charts" / "chart1.xml").read_text(encoding="utf-8")

    def test_missing_directory(self, tmp_path) -> None:
        """Test a missing directory exits with the file error code."""
        assert main(["fix-charts", str(tmp_path / "nowhere")]) == EXIT_FILE_ERROR

    def test_invalid_color(self, charts_dir) -> None:
        """Test a bad color exits with the validation error code."""
        assert main(["fix-charts", str(charts_dir), "--grid-color", "red"]) == EXIT_VALIDATION_ERROR
