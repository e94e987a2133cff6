"""Tests for the ImageMagick comparator."""

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from src.matcher.comparator import (
    build_compare_args,
    compare_images,
    parse_pixel_error,
)
from src.matcher.errors import FailureKind, ImageMatchError

EXPECTED = Path("/baselines/a.png")
PROCESSED = Path("/processed/a.png")


class TestParsePixelError:

    @pytest.mark.parametrize("output,expected", [
        ("0", 0),
        ("152", 152),
        ("  42\n", 42),
        ("152 (0.00231934)", 152),
        ("1.5e+06", 1),
    ])
    def test_leading_integer(self, output, expected):
        assert parse_pixel_error(output) == expected

    @pytest.mark.parametrize("output", ["", "compare: unable to open image", "nan"])
    def test_not_a_number(self, output):
        assert parse_pixel_error(output) is None


def test_compare_args():
    assert build_compare_args(EXPECTED, PROCESSED) == [
        "-metric", "ae", str(EXPECTED), str(PROCESSED), "null:",
    ]


@pytest.mark.asyncio
class TestCompareImages:
    """Tests for compare_images subprocess handling."""

    async def test_zero_pixel_error_matches(self, make_process):
        proc = make_process(0, stdout=b"", stderr=b"0")
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)) as run:
            result = await compare_images(EXPECTED, PROCESSED)

        assert result.matched is True
        assert result.pixel_error == 0
        args = run.call_args.args
        assert args[0] == "compare"
        assert list(args[1:]) == build_compare_args(EXPECTED, PROCESSED)

    async def test_positive_pixel_error_differs(self, make_process):
        proc = make_process(0, stdout=b"37")
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
            result = await compare_images(EXPECTED, PROCESSED)

        assert result.matched is False
        assert result.pixel_error == 37

    async def test_stdout_and_stderr_combined(self, make_process):
        proc = make_process(0, stdout=b"", stderr=b"12 (0.001)")
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
            result = await compare_images(EXPECTED, PROCESSED)

        assert result.pixel_error == 12

    async def test_nonzero_exit_is_mismatch(self, make_process):
        proc = make_process(1, stderr=b"image widths or heights differ")
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
            result = await compare_images(EXPECTED, PROCESSED)

        assert result.matched is False
        assert result.pixel_error is None

    async def test_launch_failure_is_tool_not_found(self):
        with patch("asyncio.create_subprocess_exec", AsyncMock(side_effect=FileNotFoundError)):
            with pytest.raises(ImageMatchError) as exc_info:
                await compare_images(EXPECTED, PROCESSED, command="magick-compare")

        assert exc_info.value.kind == FailureKind.TOOL_NOT_FOUND
        assert "magick-compare" in str(exc_info.value)
        assert "imagemagick" in str(exc_info.value)

    async def test_status_127_is_tool_not_found(self, make_process):
        proc = make_process(127, stderr=b"sh: compare: not found")
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
            with pytest.raises(ImageMatchError) as exc_info:
                await compare_images(EXPECTED, PROCESSED)

        assert exc_info.value.kind == FailureKind.TOOL_NOT_FOUND

    async def test_unparseable_output(self, make_process):
        proc = make_process(0, stdout=b"weird output")
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
            with pytest.raises(ImageMatchError) as exc_info:
                await compare_images(EXPECTED, PROCESSED)

        assert exc_info.value.kind == FailureKind.TOOL_OUTPUT_UNPARSEABLE
        assert "weird output" in str(exc_info.value)

    async def test_threshold_does_not_relax_match(self, make_process):
        proc = make_process(0, stdout=b"5")
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
            result = await compare_images(EXPECTED, PROCESSED, threshold=0.99)

        assert result.matched is False
        assert result.pixel_error == 5
