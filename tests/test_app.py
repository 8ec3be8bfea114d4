# -*- coding: utf-8 -*-
"""Tests for the CannyEdge image I/O, pipeline driver and CLI."""

import sys
from pathlib import Path

# Allow imports from src/
_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(_ROOT / "src"))

import numpy as np
import cv2
import pytest

from cannyedge.core.errors import (
    ImageDecodeError, InvalidKernelParameter, UnsupportedExtensionError,
)
from cannyedge.core.refinement import EdgeRefiner
from cannyedge.core.shapes import make_circle_square, make_uniform
from cannyedge.app.imageio import (
    export_image, load_image, split_output_path, DEFAULT_OUTPUT_DIR,
)
from cannyedge.app.pipeline import CannyPipeline, PIPELINE_PRESETS
from cannyedge.app.cli import main


def _color_image(h: int = 40, w: int = 48) -> np.ndarray:
    gray = np.ascontiguousarray(make_circle_square(64)[:h, :w])
    img = cv2.cvtColor(gray, cv2.COLOR_GRAY2BGR)
    img[:, :, 0] //= 2
    return img


@pytest.fixture
def input_png(tmp_path):
    path = tmp_path / "input.png"
    assert cv2.imwrite(str(path), _color_image())
    return path


# ============================================================
# imageio.py
# ============================================================

class TestSplitOutputPath:
    def test_bare_filename_goes_to_output_dir(self):
        assert split_output_path("edges.png") == (Path(DEFAULT_OUTPUT_DIR), "edges", "png")

    def test_directory_and_inner_dots(self):
        assert split_output_path("a/b.c.jpeg") == (Path("a"), "b.c", "jpeg")

    @pytest.mark.parametrize("output", ["noext", "image.gif", "image.PNG", ".png", "out.bmp"])
    def test_rejected(self, output):
        with pytest.raises(UnsupportedExtensionError):
            split_output_path(output)


class TestImageIO:
    def test_load_missing(self, tmp_path):
        with pytest.raises(ImageDecodeError, match="file not found"):
            load_image(tmp_path / "missing.png")

    def test_load_garbage(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"not an image at all")
        with pytest.raises(ImageDecodeError):
            load_image(path)

    def test_load_returns_bgr(self, input_png):
        img = load_image(input_png)
        assert img.shape == (40, 48, 3)
        assert img.dtype == np.uint8

    def test_load_keeps_alpha(self, tmp_path):
        img = np.full((6, 8, 4), 200, dtype=np.uint8)
        img[:, :4, 3] = 0
        path = tmp_path / "rgba.png"
        assert cv2.imwrite(str(path), img)
        loaded = load_image(path)
        assert loaded.shape == (6, 8, 4)
        gray = CannyPipeline().process_image(loaded)["gray"]
        assert not gray[:, :4].any()
        assert (gray[:, 4:] == 200).all()

    def test_load_gray_stays_2d(self, tmp_path):
        path = tmp_path / "gray.png"
        assert cv2.imwrite(str(path), make_circle_square(32))
        loaded = load_image(path)
        np.testing.assert_array_equal(loaded, make_circle_square(32))

    def test_load_16bit_high_byte(self, tmp_path):
        path = tmp_path / "deep.png"
        assert cv2.imwrite(str(path), np.full((4, 5, 3), 0x8A3C, dtype=np.uint16))
        loaded = load_image(path)
        assert loaded.dtype == np.uint8
        assert (loaded == 0x8A).all()

    def test_export_png_lossless(self, tmp_path):
        img = make_circle_square(32)
        out = export_image(img, tmp_path / "nested" / "dir", "edges", "png")
        assert out == tmp_path / "nested" / "dir" / "edges.png"
        np.testing.assert_array_equal(cv2.imread(str(out), cv2.IMREAD_GRAYSCALE), img)

    @pytest.mark.parametrize("ext", ["jpg", "jpeg"])
    def test_export_jpeg(self, tmp_path, ext):
        out = export_image(make_uniform(16, 90), tmp_path, "flat", ext)
        assert out.is_file()
        back = cv2.imread(str(out), cv2.IMREAD_GRAYSCALE)
        assert back.shape == (16, 16)
        assert np.abs(back.astype(int) - 90).max() <= 1

    def test_export_bad_extension(self, tmp_path):
        with pytest.raises(UnsupportedExtensionError):
            export_image(make_uniform(4), tmp_path, "x", "tiff")
        assert not any(tmp_path.iterdir())


# ============================================================
# pipeline.py
# ============================================================

class TestPipelineConfig:
    def test_default_preset(self):
        p = CannyPipeline()
        assert p.preset == "canny"
        assert p.params["kernel_size"] == 5
        assert p.params["sigma"] == 2.5
        assert p.params["threshold"] == pytest.approx(76.5)

    def test_unknown_preset_falls_back(self):
        p = CannyPipeline("does_not_exist")
        assert p.preset == "canny"

    @pytest.mark.parametrize("name", list(PIPELINE_PRESETS))
    def test_presets_valid(self, name):
        kernel, scalar = CannyPipeline(name).kernel()
        assert kernel.sum() == scalar

    def test_update_params_ignores_unknown(self):
        p = CannyPipeline()
        p.update_params(sigma=1.0, bogus=3)
        assert p.params["sigma"] == 1.0
        assert "bogus" not in p.params

    def test_invalid_kernel_params_rejected(self):
        p = CannyPipeline()
        with pytest.raises(InvalidKernelParameter):
            p.update_params(kernel_size=4)
        assert p.params["kernel_size"] == 5
        with pytest.raises(InvalidKernelParameter):
            p.update_params(sigma=0)
        assert p.params["sigma"] == 2.5

    def test_negative_threshold_rejected(self):
        p = CannyPipeline()
        with pytest.raises(ValueError):
            p.update_params(threshold=-1)
        assert p.params["threshold"] == pytest.approx(76.5)

    def test_non_numeric_threshold_rolled_back(self):
        p = CannyPipeline()
        with pytest.raises(TypeError):
            p.update_params(threshold="x", sigma=1.0)
        assert p.params["threshold"] == pytest.approx(76.5)
        assert p.params["sigma"] == 2.5
        p.run(make_uniform(10))


class TestPipelineRun:
    def test_run_outputs(self):
        t = make_circle_square(64)
        res = CannyPipeline().run(t)
        for key in ("smoothed", "gradient", "edges", "kernel", "kernel_scalar",
                    "nonzero", "latency_ms"):
            assert key in res
        assert res["smoothed"].shape == t.shape
        assert res["gradient"].shape == t.shape
        np.testing.assert_array_equal(res["edges"], res["gradient"])
        assert res["nonzero"] == int(np.count_nonzero(res["edges"]))
        assert res["nonzero"] > 0

    def test_smooth_only(self):
        res = CannyPipeline("smooth_only").run(make_uniform(20, 128))
        assert res["gradient"] is None
        np.testing.assert_array_equal(res["edges"], res["smoothed"])
        assert (res["edges"][2:18, 2:18] == 128).all()

    def test_input_not_modified(self):
        t = make_circle_square(64)
        before = t.copy()
        CannyPipeline().run(t)
        np.testing.assert_array_equal(t, before)

    def test_custom_refiner(self):
        class Blank(EdgeRefiner):
            name = "blank"

            def refine(self, gradient):
                return np.zeros_like(gradient)

        res = CannyPipeline(refiner=Blank()).run(make_circle_square(64))
        assert res["gradient"].any()
        assert not res["edges"].any()
        assert res["nonzero"] == 0

    def test_process_image(self):
        img = _color_image()
        res = CannyPipeline().process_image(img)
        np.testing.assert_array_equal(res["gray"], cv2.cvtColor(img, cv2.COLOR_BGR2GRAY))
        assert res["output"].shape == img.shape[:2]
        assert res["output"].dtype == np.uint8

    def test_quiet_by_default(self, capsys):
        CannyPipeline().run(make_uniform(10))
        assert capsys.readouterr().out == ""

    def test_verbose_progress(self, capsys):
        CannyPipeline(verbose=True).run(make_uniform(10))
        out = capsys.readouterr().out
        assert "> Applying gaussian filter..." in out
        assert "< Done" in out


class TestProcessFile:
    def test_png_round_trip(self, tmp_path, input_png):
        p = CannyPipeline()
        written = p.process_file(input_png, tmp_path / "out" / "edges.png")
        assert written == tmp_path / "out" / "edges.png"
        expected = p.process_image(load_image(input_png))["output"]
        np.testing.assert_array_equal(cv2.imread(str(written), cv2.IMREAD_GRAYSCALE), expected)

    def test_jpeg_output(self, tmp_path, input_png):
        written = CannyPipeline().process_file(input_png, tmp_path / "edges.jpg")
        assert written.is_file()

    def test_extension_checked_first(self, tmp_path):
        with pytest.raises(UnsupportedExtensionError):
            CannyPipeline().process_file(tmp_path / "missing.png", tmp_path / "edges.gif")

    def test_missing_input(self, tmp_path):
        with pytest.raises(ImageDecodeError):
            CannyPipeline().process_file(tmp_path / "missing.png", tmp_path / "edges.png")
        assert not (tmp_path / "edges.png").exists()


# ============================================================
# cli.py
# ============================================================

class TestCLI:
    def test_success(self, tmp_path, input_png, capsys):
        out = tmp_path / "res" / "edges.png"
        assert main([str(input_png), str(out)]) == 0
        assert out.is_file()
        stdout = capsys.readouterr().out
        assert "Script executed successfully" in stdout
        assert "> Loading Image" in stdout

    def test_bare_output_name(self, tmp_path, input_png, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert main([str(input_png), "edges.jpeg"]) == 0
        assert (tmp_path / DEFAULT_OUTPUT_DIR / "edges.jpeg").is_file()

    def test_bad_extension_aborts(self, tmp_path, input_png, capsys):
        with pytest.raises(SystemExit) as exc:
            main([str(input_png), str(tmp_path / "edges.bmp")])
        assert exc.value.code == 2
        captured = capsys.readouterr()
        assert "not allowed" in captured.err
        assert "Script initialized" not in captured.out

    def test_missing_input(self, tmp_path, capsys):
        code = main([str(tmp_path / "nope.png"), str(tmp_path / "edges.png")])
        assert code == 1
        assert "file not found" in capsys.readouterr().err

    def test_requires_two_arguments(self):
        with pytest.raises(SystemExit):
            main(["only_one.png"])
