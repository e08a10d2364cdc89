"""Test color filter array sampling."""

import pytest
import torch

from torch_cfa.bayer import Channel, grid_size, mosaic_channel, rgb_to_mosaic, site_masks
from torch_cfa.errors import DimensionError


def example_image() -> torch.Tensor:
  row = [(10, 20, 30), (40, 50, 60), (70, 80, 90), (100, 110, 120)]
  return torch.tensor([row] * 4, dtype=torch.uint8)


def test_mosaic_channel_table():
  """Test the fixed 2x2 pattern assignment."""
  assert mosaic_channel(0, 0) is Channel.Green
  assert mosaic_channel(1, 1) is Channel.Green
  assert mosaic_channel(1, 0) is Channel.Blue
  assert mosaic_channel(0, 1) is Channel.Red
  assert mosaic_channel(5, 2) is Channel.Blue
  assert mosaic_channel(4, 7) is Channel.Red


def test_rgb_to_mosaic_pattern():
  """Test every sample is the channel the pattern selects."""
  generator = torch.Generator().manual_seed(0)
  for height, width in [(2, 2), (5, 7), (8, 6), (3, 4)]:
    rgb = torch.randint(0, 256, (height, width, 3), dtype=torch.uint8, generator=generator)
    mosaic = rgb_to_mosaic(rgb)

    assert mosaic.shape == (height, width, 1)
    assert mosaic.dtype == torch.uint8
    for y in range(height):
      for x in range(width):
        assert mosaic[y, x, 0] == rgb[y, x, mosaic_channel(x, y).value]


def test_rgb_to_mosaic_example():
  """Test the mosaic of the 4x4 reference image."""
  mosaic = rgb_to_mosaic(example_image())[..., 0]

  even_row = [20, 60, 80, 120]
  odd_row = [10, 50, 70, 110]
  assert mosaic.tolist() == [even_row, odd_row, even_row, odd_row]


def test_rgb_to_mosaic_single_pixel():
  """Test that encoding has no minimum size."""
  rgb = torch.tensor([[[1, 2, 3]]], dtype=torch.uint8)
  assert rgb_to_mosaic(rgb).tolist() == [[[2]]]


@pytest.mark.parametrize(
  'image',
  [
    torch.zeros((4, 4), dtype=torch.uint8),
    torch.zeros((4, 4, 1), dtype=torch.uint8),
    torch.zeros((4, 4, 3), dtype=torch.float32),
  ],
)
def test_rgb_to_mosaic_rejects_bad_grids(image):
  """Test that non RGB uint8 grids are rejected."""
  with pytest.raises(DimensionError):
    rgb_to_mosaic(image)


def test_grid_size():
  """Test (width, height) reporting and the minimum size check."""
  assert grid_size(torch.zeros((3, 5, 1), dtype=torch.uint8), 1) == (5, 3)

  with pytest.raises(DimensionError) as info:
    grid_size(torch.zeros((1, 5, 1), dtype=torch.uint8), 1, min_size=2)
  assert info.value.image_size == (5, 1)


def test_site_masks_partition():
  """Test that every pixel is exactly one native site of the pattern."""
  height, width = 5, 6
  masks = site_masks(height, width, torch.device('cpu'))

  total = masks.red.int() + masks.blue.int() + masks.green_even.int() + masks.green_odd.int()
  assert torch.all(total == 1)

  for y in range(height):
    for x in range(width):
      channel = mosaic_channel(x, y)
      assert bool(masks.red[y, x]) == (channel is Channel.Red)
      assert bool(masks.blue[y, x]) == (channel is Channel.Blue)
      assert bool(masks.green[y, x]) == (channel is Channel.Green)
