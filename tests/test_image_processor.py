"""Tests for stack averaging, range scanning and display normalization."""

import numpy as np
import pytest

from fex.core.errors import ZeroRangeData
from fex.core.image_loader import ImageStack
from fex.core.image_processor import ImageProcessor, ReducedImage, DisplayBuffer
from fex.core.policy import (ReductionPolicy, AVERAGE_ADDITIONAL, MINMAX_SENTINEL,
                             ZERO_RANGE_ERROR, INDEX_ROW_HEIGHT)


def make_stack(*frames):
    frames = [np.asarray(f, dtype=np.float32) for f in frames]
    height, width = frames[0].shape
    return ImageStack(width, height, frames)


def make_reduced(samples):
    samples = np.asarray(samples, dtype=np.float32)
    height, width = samples.shape
    return ReducedImage(width, height, samples, float(samples.min()), float(samples.max()))


def channels(display):
    return display.as_array()


@pytest.mark.parametrize("policy", [ReductionPolicy(), ReductionPolicy.legacy()])
def test_single_frame_reduces_to_itself(policy):
    frame = [[1.5, -2.0], [3.25, 1e6]]
    reduced = ImageProcessor(policy).reduce(make_stack(frame))

    np.testing.assert_array_equal(reduced.samples, np.asarray(frame, dtype=np.float32))
    assert reduced.frame_count == 1


def test_identical_frames_average_to_their_value():
    stack = make_stack(*[np.full((3, 2), 1234.5)] * 5)
    reduced = ImageProcessor().reduce(stack)

    np.testing.assert_array_equal(reduced.samples, np.full((3, 2), 1234.5, dtype=np.float32))


def test_total_averaging_divides_by_frame_count():
    reduced = ImageProcessor().reduce(make_stack([[0, 10]], [[10, 20]], [[20, 60]]))

    np.testing.assert_allclose(reduced.samples, [[10, 30]])


def test_additional_averaging_divides_by_frames_after_the_first():
    processor = ImageProcessor(ReductionPolicy(averaging=AVERAGE_ADDITIONAL))
    reduced = processor.reduce(make_stack([[4, 8]], [[4, 8]]))

    np.testing.assert_allclose(reduced.samples, [[8, 16]])


def test_range_bounds_every_sample():
    rng = np.random.default_rng(7)
    frames = rng.normal(100.0, 30.0, size=(4, 8, 8))
    reduced = ImageProcessor().reduce(make_stack(*frames))

    assert reduced.minimum <= reduced.samples.min()
    assert reduced.samples.max() <= reduced.maximum
    assert reduced.minimum == pytest.approx(float(reduced.samples.min()))
    assert reduced.maximum == pytest.approx(float(reduced.samples.max()))


def test_exact_range_handles_negative_data():
    reduced = ImageProcessor().reduce(make_stack([[-5.0, -1.0]]))

    assert (reduced.minimum, reduced.maximum) == (-5.0, -1.0)


def test_sentinel_range_clamps_maximum_at_zero():
    processor = ImageProcessor(ReductionPolicy(min_max=MINMAX_SENTINEL))
    reduced = processor.reduce(make_stack([[-5.0, -1.0]]))

    assert (reduced.minimum, reduced.maximum) == (-5.0, 0.0)


def test_sentinel_range_starts_minimum_at_1e12():
    processor = ImageProcessor(ReductionPolicy(min_max=MINMAX_SENTINEL))
    reduced = processor.reduce(make_stack([[np.nan]]))

    assert (reduced.minimum, reduced.maximum) == (1e12, 0.0)


def test_nan_samples_are_ignored_by_range_and_shown_black():
    processor = ImageProcessor()
    reduced, display = processor.reduce_and_normalize(make_stack([[np.nan, 2.0], [1.0, 4.0]]))

    assert (reduced.minimum, reduced.maximum) == (1.0, 4.0)
    np.testing.assert_array_equal(channels(display)[..., 0], [[0, 128], [64, 255]])


def test_infinite_samples_are_ignored_by_exact_range():
    processor = ImageProcessor()
    reduced, display = processor.reduce_and_normalize(make_stack([[1.0, np.inf], [-np.inf, 2.0]]))

    assert (reduced.minimum, reduced.maximum) == (1.0, 2.0)
    np.testing.assert_array_equal(channels(display)[..., 0], [[128, 255], [0, 255]])


def test_sentinel_range_lets_infinity_through():
    processor = ImageProcessor(ReductionPolicy(min_max=MINMAX_SENTINEL))
    reduced = processor.reduce(make_stack([[1.0, np.inf]]))

    assert reduced.maximum == np.inf


def test_zero_maximum_gives_black_buffer():
    display = ImageProcessor().normalize(make_reduced(np.zeros((3, 4))))

    assert display.pixels == bytes(3 * 4 * 3)


def test_zero_maximum_raises_with_error_policy():
    processor = ImageProcessor(ReductionPolicy(zero_range=ZERO_RANGE_ERROR))

    with pytest.raises(ZeroRangeData):
        processor.normalize(make_reduced(np.zeros((2, 2))))


def test_negative_maximum_gives_black_buffer():
    display = ImageProcessor().normalize(make_reduced([[-3.0, -1.0]]))

    assert display.pixels == bytes(6)


@pytest.mark.parametrize("k", [1, 3, 1000])
def test_uniform_maximum_maps_to_255(k):
    display = ImageProcessor().normalize(make_reduced(np.full((2, 3), 255.0 * k)))

    assert set(display.pixels) == {255}


def test_stretch_divides_by_maximum_only():
    display = ImageProcessor().normalize(make_reduced([[150.0, 300.0]]))

    # min is 150 but does not move the black point.
    np.testing.assert_array_equal(channels(display)[..., 0], [[128, 255]])


def test_stretch_rounds_to_nearest():
    display = ImageProcessor().normalize(make_reduced([[1.0, 2.0, 3.0, 1000.0]]))

    # 1/1000*255 = 0.255, 2/1000*255 = 0.51, 3/1000*255 = 0.765
    np.testing.assert_array_equal(channels(display)[0, :, 0], [0, 1, 1, 255])


def test_display_buffer_layout():
    display = ImageProcessor().normalize(make_reduced([[0.0, 51.0, 102.0], [153.0, 204.0, 255.0]]))

    assert (display.width, display.height, display.stride) == (3, 2, 9)
    assert len(display.pixels) == 2 * 3 * 3
    assert display.pixels[:9] == bytes([0, 0, 0, 51, 51, 51, 102, 102, 102])
    assert display.pixels[9:] == bytes([153, 153, 153, 204, 204, 204, 255, 255, 255])


def test_row_height_layout_leaves_unwritten_pixels_black():
    processor = ImageProcessor(ReductionPolicy(indexing=INDEX_ROW_HEIGHT))
    # 3x2 image: offsets are 0,1,2 and 2,3,4; offset 5 is never written.
    display = processor.normalize(make_reduced([[0.0, 51.0, 102.0], [102.0, 153.0, 255.0]]))

    np.testing.assert_array_equal(channels(display)[..., 0],
                                  [[0, 51, 102], [153, 255, 0]])


def test_display_buffer_checks_length():
    with pytest.raises(ValueError):
        DisplayBuffer(2, 2, bytes(5))
