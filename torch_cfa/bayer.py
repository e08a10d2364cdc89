from enum import Enum
from typing import NamedTuple

from beartype import beartype
import torch

from .errors import DimensionError


class Channel(Enum):
  Red = 0
  Green = 1
  Blue = 2


def mosaic_channel(x: int, y: int) -> Channel:
  """Channel sampled by the sensor at (x, y).

  The 2x2 tile is:
      G B
      R G
  """
  match (x % 2, y % 2):
    case (0, 0) | (1, 1):
      return Channel.Green
    case (1, 0):
      return Channel.Blue
    case (0, 1):
      return Channel.Red

  raise AssertionError(f'Unreachable parity for ({x}, {y})')


@beartype
def grid_size(image: torch.Tensor, channels: int, min_size: int = 1) -> tuple[int, int]:
  """Validate a (H, W, C) uint8 pixel grid and return its (width, height)."""
  if image.ndim != 3 or image.size(2) != channels:
    raise DimensionError(f'Expected pixel grid of shape (H, W, {channels}), got {tuple(image.shape)}')
  if image.dtype != torch.uint8:
    raise DimensionError(f'Expected uint8 pixel grid, got {image.dtype}')

  height, width = image.shape[:2]
  if width < min_size or height < min_size:
    raise DimensionError(
      f'Image must be at least {min_size}x{min_size}, got {width}x{height}', image_size=(width, height)
    )
  return width, height


class SiteMasks(NamedTuple):
  """Boolean (H, W) masks of the native sites of each channel."""

  red: torch.Tensor
  blue: torch.Tensor
  green_even: torch.Tensor  # x and y both even
  green_odd: torch.Tensor  # x and y both odd

  @property
  def green(self) -> torch.Tensor:
    return self.green_even | self.green_odd


def site_masks(height: int, width: int, device: torch.device) -> SiteMasks:
  ys = torch.arange(height, device=device).unsqueeze(1) % 2
  xs = torch.arange(width, device=device).unsqueeze(0) % 2

  return SiteMasks(
    red=(xs == 0) & (ys == 1),
    blue=(xs == 1) & (ys == 0),
    green_even=(xs == 0) & (ys == 0),
    green_odd=(xs == 1) & (ys == 1),
  )


@beartype
def rgb_to_mosaic(rgb: torch.Tensor) -> torch.Tensor:
  """Sample an RGB image through the color filter array.

  Args:
      rgb: RGB tensor of shape (H, W, 3), uint8

  Returns:
      Mosaic tensor of shape (H, W, 1), uint8
  """
  grid_size(rgb, 3)

  mosaic = torch.empty(rgb.shape[:2], dtype=rgb.dtype, device=rgb.device)
  mosaic[0::2, 0::2] = rgb[0::2, 0::2, Channel.Green.value]  # G (even rows, even cols)
  mosaic[0::2, 1::2] = rgb[0::2, 1::2, Channel.Blue.value]   # B (even rows, odd cols)
  mosaic[1::2, 0::2] = rgb[1::2, 0::2, Channel.Red.value]    # R (odd rows, even cols)
  mosaic[1::2, 1::2] = rgb[1::2, 1::2, Channel.Green.value]  # G (odd rows, odd cols)

  return mosaic.unsqueeze(-1)


__all__ = ['Channel', 'SiteMasks', 'grid_size', 'mosaic_channel', 'rgb_to_mosaic', 'site_masks']
