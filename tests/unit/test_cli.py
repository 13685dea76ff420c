"""Tests for the arcglyph command line interface."""

from unittest.mock import Mock

import pytest
from typer.testing import CliRunner

from arcglyph.cli.app import MAX_BUFFER_RETRIES, _lookup_with_retry, _select_glyphs, app
from arcglyph.exceptions import BufferTooSmallError

runner = CliRunner()


@pytest.fixture(autouse=True)
def _in_tmp_dir(tmp_path, monkeypatch):
    # The default log file lands in the working directory
    monkeypatch.chdir(tmp_path)


class TestOptions:
    """Tests for option validation."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "arcglyph" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, [str(tmp_path / "missing.ttf")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_directory_rejected(self, tmp_path):
        result = runner.invoke(app, [str(tmp_path)])
        assert result.exit_code == 1

    def test_verbose_and_quiet(self, font_path):
        result = runner.invoke(app, [str(font_path), "-v", "-q"])
        assert result.exit_code == 1
        assert "--verbose and --quiet" in result.output

    def test_zero_tolerance(self, font_path):
        result = runner.invoke(app, [str(font_path), "--tolerance", "0"])
        assert result.exit_code == 1


class TestEncode:
    """Tests for the encode command."""

    def test_encode_text(self, font_path):
        result = runner.invoke(app, [str(font_path), "--text", "AO "])

        assert result.exit_code == 0, result.output
        assert "square" in result.output
        assert "bowl" in result.output
        assert "Complete" in result.output

    def test_encode_all_glyphs(self, font_path):
        result = runner.invoke(app, [str(font_path)])
        assert result.exit_code == 0, result.output
        assert "pair" in result.output

    def test_unknown_glyph_reported(self, font_path):
        result = runner.invoke(app, [str(font_path), "--glyph", "99", "--glyph", "1"])

        assert result.exit_code == 0, result.output
        assert "99" in result.output
        assert "square" in result.output

    def test_small_buffer_retried(self, font_path):
        result = runner.invoke(
            app, [str(font_path), "--glyph", "1", "--buffer-capacity", "8", "-v"]
        )

        assert result.exit_code == 0, result.output
        assert "retrying" in result.output

    def test_quiet_prints_no_table(self, font_path):
        result = runner.invoke(app, [str(font_path), "--glyph", "1", "-q"])
        assert result.exit_code == 0
        assert "square" not in result.output

    def test_invalid_font(self, tmp_path):
        path = tmp_path / "broken.ttf"
        path.write_bytes(b"definitely not a font")

        result = runner.invoke(app, [str(path)])

        assert result.exit_code == 1
        assert "Could not load font" in result.output

    def test_log_file_written(self, font_path, tmp_path):
        log_file = tmp_path / "run.log"
        result = runner.invoke(
            app, [str(font_path), "--glyph", "1", "--log-file", str(log_file)]
        )
        assert result.exit_code == 0
        assert log_file.exists()

    def test_render(self, font_path, tmp_path):
        pytest.importorskip("cairo")
        out = tmp_path / "png"

        result = runner.invoke(app, [str(font_path), "--glyph", "1", "--render", str(out)])

        assert result.exit_code == 0, result.output
        assert (out / "glyph_00001.png").exists()


class TestSelectGlyphs:
    def test_defaults_to_all(self, face):
        assert _select_glyphs(face, None, None) == [0, 1, 2, 3, 4]

    def test_dedupes_in_order(self, face):
        assert _select_glyphs(face, "OAO", [3]) == [3, 2, 1]

    def test_unmapped_char_uses_notdef(self, face):
        assert _select_glyphs(face, "Z", None) == [0]


class TestLookupWithRetry:
    """Tests for the buffer retry loop."""

    def test_grows_to_required(self):
        font = Mock()
        font.lookup_glyph.side_effect = [BufferTooSmallError(required=300, capacity=8), "record"]

        assert _lookup_with_retry(font, 1, 8, verbose=False) == "record"
        font.lookup_glyph.assert_called_with(1, buffer_capacity=300)

    def test_gives_up_after_max_retries(self):
        font = Mock()
        font.lookup_glyph.side_effect = BufferTooSmallError(required=2, capacity=1)

        with pytest.raises(BufferTooSmallError):
            _lookup_with_retry(font, 1, 1, verbose=False)

        assert font.lookup_glyph.call_count == MAX_BUFFER_RETRIES + 1
