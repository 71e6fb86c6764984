import numpy as np
import pytest

from ledmapping.detection import (
    BLUE,
    PARAMETER_FLOOR,
    RED,
    BlobDetectorSettings,
    LedCountCost,
    blob_parameters,
    calibrate,
    detect_blobs,
    load_image,
    select_channel,
    threshold_image,
)


def test_threshold_image_is_binary(led_image):
    mask = threshold_image(led_image)
    assert set(np.unique(mask)) == {0, 255}
    assert np.count_nonzero(mask) == np.count_nonzero(led_image == 255)


def test_blob_parameters_raise_small_values_to_floor():
    params = blob_parameters([-5.0, 10.0, 200.0])
    assert params.minDistBetweenBlobs == pytest.approx(PARAMETER_FLOOR)
    assert params.minDistBetweenBlobs > 0
    assert params.minArea == 10.0
    assert params.maxArea == 200.0
    assert params.filterByArea
    assert not params.filterByColor
    assert not params.filterByCircularity


def test_blob_parameters_reject_wrong_length():
    with pytest.raises(ValueError):
        blob_parameters([1.0, 2.0])


def test_detect_blobs_finds_all_discs(led_image):
    keypoints = detect_blobs(led_image, [10.0, 20.0, 500.0])
    assert len(keypoints) == 6
    sizes = [kp.size for kp in keypoints]
    assert max(sizes) - min(sizes) < 1.0


def test_area_filter_removes_small_discs(led_image):
    assert len(detect_blobs(led_image, [10.0, 200.0, 500.0])) == 0


def test_threshold_setting_hides_dim_leds(led_image):
    settings = BlobDetectorSettings(threshold=255.0)
    assert len(detect_blobs(led_image, [10.0, 20.0, 500.0], settings)) == 0


def test_detect_blobs_rejects_float_image():
    with pytest.raises(ValueError):
        detect_blobs(np.zeros((10, 10)), [1.0, 1.0, 10.0])


def test_cost_on_real_detection(led_image):
    cost = LedCountCost(led_image, 6, size_weight=0.0)
    assert cost(np.array([10.0, 20.0, 500.0])) == 0.0
    assert cost(np.array([10.0, 20.0, 500.0])) == 0.0
    off_by_two = LedCountCost(led_image, 8, size_weight=0.0)
    assert off_by_two(np.array([10.0, 20.0, 500.0])) == 4.0


def test_calibrate_keeps_working_parameters(led_image):
    result, keypoints = calibrate(
        led_image,
        6,
        start=[5.0, 10.0, 150.0],
        step=40.0,
        epsilon=0.5,
        max_iterations=50,
        rng=np.random.default_rng(0),
    )
    assert result.nit <= 50
    assert len(keypoints) == 6
    assert result.fun < 1.0


def test_select_channel(led_image):
    bgr = np.zeros(led_image.shape + (3,), dtype=np.uint8)
    bgr[:, :, BLUE] = led_image
    assert np.array_equal(select_channel(bgr, BLUE), led_image)
    assert not select_channel(bgr, RED).any()
    assert select_channel(led_image) is led_image
    with pytest.raises(ValueError):
        select_channel(bgr, 3)


def test_load_image_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_image(tmp_path / "missing.png")


def test_zero_parameters_detect_nothing(led_image):
    assert detect_blobs(led_image, [0.0, 0.0, 0.0]) == ()
    assert detect_blobs(led_image, [-3.0, -1.0, -2.0]) == ()


def test_inverted_area_range_detects_nothing(led_image):
    assert detect_blobs(led_image, [10.0, 300.0, 100.0]) == ()


def test_inverted_area_range_costs_like_an_empty_image(led_image):
    cost = LedCountCost(led_image, 6, seed=0)
    value = cost(np.array([10.0, 300.0, 100.0]))
    assert 600.0 + 7.0 <= value < 600.0 + 100.0


def test_calibrate_from_default_start(led_image):
    result, keypoints = calibrate(led_image, 6, max_iterations=20, rng=np.random.default_rng(0))
    assert 1 <= result.nit <= 20
    assert result.x.shape == (3,)
    assert np.isfinite(result.fun)
    assert isinstance(keypoints, tuple)
