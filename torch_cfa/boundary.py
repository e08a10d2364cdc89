"""Boundary extension for neighbor lookups one pixel past the image edge.

Out-of-range neighbors are reflected onto the second row or column rather
than the edge itself, so a 4-neighbor average of an edge pixel never counts
the same sample twice.
"""

import torch

from .errors import BoundaryIndexError, DimensionError


def check_extendable(width: int, height: int) -> None:
  if width < 2 or height < 2:
    raise DimensionError(
      f'Boundary extension needs at least 2x2 pixels, got {width}x{height}', image_size=(width, height)
    )


def extend_index(x: int, y: int, width: int, height: int) -> tuple[int, int]:
  """Map (x, y) in [-1, width] x [-1, height] to an in-bounds coordinate."""
  check_extendable(width, height)

  # corners
  if x == -1 and y == -1:
    return (1, 1)
  if x == width and y == -1:
    return (width - 2, 1)
  if x == width and y == height:
    return (width - 2, height - 2)
  if x == -1 and y == height:
    return (1, height - 2)

  inside_x = 0 <= x < width
  inside_y = 0 <= y < height

  # edges
  if y == -1 and inside_x:
    return (x, 1)
  if y == height and inside_x:
    return (x, height - 2)
  if x == -1 and inside_y:
    return (1, y)
  if x == width and inside_y:
    return (width - 2, y)

  if inside_x and inside_y:
    return (x, y)

  raise BoundaryIndexError(x, y, (width, height))


def extended_axis(size: int, device: torch.device | None = None) -> torch.Tensor:
  """Source index for each position of [-1, size] along one axis."""
  # a 2 pixel extent on the other axis keeps extend_index's checks satisfied
  indices = [extend_index(i, 0, size, 2)[0] for i in range(-1, size + 1)]
  return torch.tensor(indices, dtype=torch.long, device=device)


def pad_extended(grid: torch.Tensor) -> torch.Tensor:
  """Pad a (H, W, ...) grid by one pixel on each side using extend_index.

  Cell (y + 1, x + 1) of the result holds the sample extend_index(x, y) selects.
  """
  height, width = grid.shape[:2]
  check_extendable(width, height)

  rows = extended_axis(height, grid.device)
  cols = extended_axis(width, grid.device)
  return grid.index_select(0, rows).index_select(1, cols)


__all__ = ['check_extendable', 'extend_index', 'extended_axis', 'pad_extended']
