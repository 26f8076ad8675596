"""Pipeline, image adapter and CLI tests for bevelmap."""

import numpy as np
import pytest
from PIL import Image


def _square_mask(size, lo, hi):
    grid = np.zeros((size, size), dtype=np.float32)
    grid[lo:hi, lo:hi] = 1.0
    return grid.reshape(-1)


def _write_mask(path, size=16, lo=4, hi=12):
    arr = np.zeros((size, size, 3), dtype=np.uint8)
    arr[lo:hi, lo:hi, 0] = 255
    Image.fromarray(arr, 'RGB').save(str(path))
    return path


def test_run_shapes():
    from bevelmap import run, PipelineConfig
    result = run(6, 4, np.ones(24), PipelineConfig(pass_count=3))
    assert result.bevel.shape == (24,)
    assert result.distance.shape == (24,)
    assert result.height_map.shape == (24,)
    assert result.normals.shape == (24, 3)
    assert result.height_map.dtype == np.float32


def test_run_plain_square_profile():
    from bevelmap import run
    result = run(8, 8, _square_mask(8, 2, 6))
    height = result.height_map.reshape(8, 8)

    # Edge ring sits at zero, the 2x2 core is the highest point.
    assert height[2, 2] == 0.0
    assert height[5, 3] == 0.0
    np.testing.assert_allclose(height[3:5, 3:5], 1.0)
    assert np.all(height[:2, :] == 0.0)


def test_run_sentinel_resolves_interior():
    from bevelmap import run, PipelineConfig
    config = PipelineConfig(pass_count=20, use_sentinel=True)
    result = run(16, 16, _square_mask(16, 3, 13), config)
    assert result.unresolved == 0
    height = result.height_map.reshape(16, 16)
    assert height.max() == pytest.approx(1.0)
    assert np.all(height[:3, :] == 0.0)
    assert height[8, 8] > height[4, 8] > height[3, 8]


def test_run_sentinel_unresolved_interior_is_flat_top():
    from bevelmap import run, PipelineConfig
    config = PipelineConfig(pass_count=1, use_sentinel=True)
    result = run(16, 16, _square_mask(16, 2, 14), config)
    height = result.height_map.reshape(16, 16)
    # Pixels the single pass never reached count as farthest.
    assert height[8, 8] == 1.0
    assert result.normals.min() >= 0.0
    assert result.normals.max() <= 1.0


def _soft_square(size, lo, hi, rim, interior):
    grid = np.zeros((size, size), dtype=np.float32)
    grid[lo:hi, lo:hi] = 1.0
    grid[lo + rim:hi - rim, lo + rim:hi - rim] = interior
    return grid.reshape(-1)


def test_run_sentinel_soft_interior_keeps_bevel():
    from bevelmap import run, PipelineConfig
    config = PipelineConfig(pass_count=5, use_sentinel=True)
    hard = run(40, 40, _square_mask(40, 4, 36), config)
    soft = run(40, 40, _soft_square(40, 4, 36, 2, 0.98), config)

    hard_h = hard.height_map.reshape(40, 40)
    soft_h = soft.height_map.reshape(40, 40)
    assert hard_h[20, 8] == pytest.approx(0.8, abs=1e-5)
    assert soft_h[20, 8] > 0.5 * hard_h[20, 8]
    # Pixels no pass reached stay the flat top.
    assert soft_h[20, 20] == 1.0
    assert np.all(soft_h[:4, :] == 0.0)


@pytest.mark.parametrize("use_sentinel", [False, True])
def test_run_fractional_mask_profile(use_sentinel):
    from bevelmap import run, PipelineConfig
    config = PipelineConfig(pass_count=8, use_sentinel=use_sentinel)
    result = run(16, 16, _soft_square(16, 2, 14, 1, 0.5), config)
    height = result.height_map.reshape(16, 16)
    assert height.min() >= 0.0
    assert height.max() == pytest.approx(1.0)
    assert height[8, 8] > height[8, 4] > height[8, 3]
    assert np.all(height[:2, :] == 0.0)


@pytest.mark.parametrize("use_sentinel", [False, True])
def test_run_symmetry(use_sentinel):
    from bevelmap import run, PipelineConfig
    config = PipelineConfig(pass_count=6, use_sentinel=use_sentinel)
    result = run(12, 12, _square_mask(12, 3, 9), config)

    for name in ("distance", "height_map"):
        grid = getattr(result, name).reshape(12, 12)
        np.testing.assert_allclose(grid, grid[::-1, :], atol=1e-6)
        np.testing.assert_allclose(grid, grid[:, ::-1], atol=1e-6)
        np.testing.assert_allclose(grid, grid.T, atol=1e-6)


def test_pass_scaling_equivalent_after_normalization():
    from bevelmap import run, PipelineConfig
    mask = _square_mask(14, 2, 12)
    scaled = run(14, 14, mask, PipelineConfig(
        pass_count=16, use_sentinel=True, divide_by_pass_count=True))
    unscaled = run(14, 14, mask, PipelineConfig(
        pass_count=16, use_sentinel=True, divide_by_pass_count=False))

    assert not np.allclose(scaled.distance[mask == 1],
                           unscaled.distance[mask == 1])
    np.testing.assert_allclose(scaled.height_map, unscaled.height_map,
                               atol=1e-5)
    np.testing.assert_allclose(scaled.normals, unscaled.normals, atol=1e-5)


def test_run_does_not_modify_mask():
    from bevelmap import run
    mask = _square_mask(8, 2, 6)
    before = mask.copy()
    run(8, 8, mask)
    np.testing.assert_array_equal(mask, before)


def test_run_reproducible():
    from bevelmap import run
    mask = _square_mask(10, 1, 8)
    a = run(10, 10, mask)
    b = run(10, 10, mask)
    np.testing.assert_array_equal(a.normals, b.normals)


def test_load_mask_red_channel(tmp_path):
    from bevelmap.imageio import load_mask
    path = _write_mask(tmp_path / "mask.png", size=10, lo=2, hi=5)
    width, height, mask = load_mask(path)
    assert (width, height) == (10, 10)
    grid = mask.reshape(10, 10)
    assert grid[3, 3] == 1.0
    assert grid[0, 0] == 0.0
    assert grid.sum() == 9.0

    _, _, green = load_mask(path, channel="G")
    assert green.max() == 0.0


def test_mask_from_image_rejects_unknown_channel():
    from bevelmap.imageio import mask_from_image
    with pytest.raises(ValueError):
        mask_from_image(Image.new('L', (2, 2)), channel="X")


def test_images_from_maps():
    from bevelmap.imageio import field_to_image, normals_to_image
    img = field_to_image(3, 2, [0.0, 0.5, 1.0, 2.0, -1.0, 1.0])
    assert img.mode == "L"
    assert img.size == (3, 2)
    assert list(img.getdata()) == [0, 128, 255, 255, 0, 255]

    flat_normals = np.tile([0.5, 0.5, 1.0], (6, 1))
    img = normals_to_image(3, 2, flat_normals)
    assert img.mode == "RGB"
    assert img.getpixel((2, 1)) == (128, 128, 255)


def test_normals_image_rejects_bad_shape():
    from bevelmap import FieldLengthMismatch
    from bevelmap.imageio import normals_to_image
    with pytest.raises(FieldLengthMismatch):
        normals_to_image(3, 2, np.zeros(6))
    with pytest.raises(FieldLengthMismatch):
        normals_to_image(3, 2, np.zeros((6, 2)))
    with pytest.raises(FieldLengthMismatch):
        normals_to_image(3, 2, np.zeros((5, 3)))


def test_generate_and_save(tmp_path):
    from bevelmap import generate
    from bevelmap.imageio import save_maps
    path = _write_mask(tmp_path / "mask.png")
    result = generate(path, pass_count=5, use_sentinel=True)
    paths = save_maps(result, tmp_path / "out", prefix="sq_")
    assert set(paths) == {"mask", "bevel", "distance", "height", "normal"}
    for name, p in paths.items():
        assert p.exists()
        assert p.name == f"sq_{name}.png"
        with Image.open(p) as img:
            assert img.size == (16, 16)


def test_cli(tmp_path, capsys):
    from bevelmap.__main__ import main
    path = _write_mask(tmp_path / "mask.png")
    out = tmp_path / "maps"
    code = main([str(path), "-o", str(out), "--passes", "4", "--sentinel"])
    assert code == 0
    assert (out / "normal.png").exists()
    assert "Saved 5 maps (16x16)" in capsys.readouterr().out


def test_cli_errors(tmp_path):
    from bevelmap.__main__ import main
    assert main([str(tmp_path / "missing.png")]) == 1

    path = _write_mask(tmp_path / "mask.png")
    assert main([str(path), "-o", str(tmp_path), "--passes", "0"]) == 1
