"""Test boundary extension of neighbor coordinates."""

import pytest
import torch

from torch_cfa.boundary import extend_index, extended_axis, pad_extended
from torch_cfa.errors import BoundaryIndexError, DimensionError


@pytest.mark.parametrize(
  ('coordinate', 'expected'),
  [
    ((-1, -1), (1, 1)),
    ((4, -1), (2, 1)),
    ((4, 4), (2, 2)),
    ((-1, 4), (1, 2)),
    ((2, -1), (2, 1)),
    ((-1, 2), (1, 2)),
    ((2, 4), (2, 2)),
    ((4, 1), (2, 1)),
    ((3, 0), (3, 0)),
  ],
)
def test_extend_index_table(coordinate, expected):
  """Test the corner, edge and interior rules on a 4x4 image."""
  assert extend_index(*coordinate, 4, 4) == expected


def test_extend_index_interior_unchanged():
  """Test that every in-bounds coordinate maps to itself."""
  width, height = 5, 3
  for y in range(height):
    for x in range(width):
      assert extend_index(x, y, width, height) == (x, y)


def test_extend_index_non_square():
  """Test reflections use the width for x and the height for y."""
  assert extend_index(7, 3, 7, 3) == (5, 1)
  assert extend_index(-1, 3, 7, 3) == (1, 1)
  assert extend_index(6, -1, 7, 3) == (6, 1)


def test_extend_index_minimum_size():
  """Test that a 2x2 image reflects onto itself."""
  assert extend_index(-1, -1, 2, 2) == (1, 1)
  assert extend_index(2, 2, 2, 2) == (0, 0)
  assert extend_index(2, 0, 2, 2) == (0, 0)


@pytest.mark.parametrize('coordinate', [(-2, 0), (0, -2), (5, 0), (0, 5), (-2, -2), (5, -1), (-1, 6)])
def test_extend_index_out_of_range(coordinate):
  """Test that coordinates more than one pixel outside raise."""
  with pytest.raises(BoundaryIndexError) as info:
    extend_index(*coordinate, 4, 4)
  assert (info.value.x, info.value.y) == coordinate
  assert info.value.image_size == (4, 4)


@pytest.mark.parametrize('size', [(1, 4), (4, 1), (0, 0)])
def test_extend_index_too_small(size):
  """Test that images narrower than 2 pixels are rejected."""
  with pytest.raises(DimensionError):
    extend_index(0, 0, *size)


def test_extended_axis():
  """Test the per-axis index vector."""
  assert extended_axis(4).tolist() == [1, 0, 1, 2, 3, 2]
  assert extended_axis(2).tolist() == [1, 0, 1, 0]


def test_pad_extended_matches_extend_index():
  """Test that every padded cell holds the sample extend_index selects."""
  height, width = 3, 5
  grid = torch.arange(height * width, dtype=torch.int32).view(height, width)
  padded = pad_extended(grid)

  assert padded.shape == (height + 2, width + 2)
  for y in range(-1, height + 1):
    for x in range(-1, width + 1):
      ex, ey = extend_index(x, y, width, height)
      assert padded[y + 1, x + 1].item() == grid[ey, ex].item()


def test_pad_extended_keeps_channels():
  """Test that trailing channel dimensions are carried through."""
  grid = torch.zeros((4, 6, 3), dtype=torch.uint8)
  assert pad_extended(grid).shape == (6, 8, 3)
