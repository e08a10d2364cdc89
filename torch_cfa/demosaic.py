"""Sequential demosaic of the GBRG color filter array."""

from beartype import beartype
import numpy as np
import torch

from .bayer import Channel, grid_size, mosaic_channel
from .boundary import check_extendable, extend_index

TWO = np.float32(2.0)
FOUR = np.float32(4.0)

# up-left, up-right, down-left, down-right
DIAGONALS = ((-1, -1), (1, -1), (-1, 1), (1, 1))


class MosaicAccessor:
  """Bounds-checked reads from an (H, W, 1) mosaic."""

  def __init__(self, pixels: np.ndarray):
    self.pixels = pixels
    self.height, self.width = pixels.shape[:2]

  def sample(self, x: int, y: int) -> int:
    ex, ey = extend_index(x, y, self.width, self.height)
    return int(self.pixels[ey, ex, 0])

  def neighbour_mean(self, x: int, y: int) -> int:
    """Truncated mean of the four orthogonal neighbors."""
    total = self.sample(x - 1, y) + self.sample(x + 1, y) + self.sample(x, y - 1) + self.sample(x, y + 1)
    return total // 4


class RgbAccessor:
  """Bounds-checked reads from an (H, W, 3) buffer."""

  def __init__(self, pixels: np.ndarray):
    self.pixels = pixels
    self.height, self.width = pixels.shape[:2]

  def sample(self, x: int, y: int) -> np.ndarray:
    ex, ey = extend_index(x, y, self.width, self.height)
    return self.pixels[ey, ex].astype(np.float32)

  def ratio(self, x: int, y: int, channel: Channel) -> np.float32:
    """Ratio of a chroma channel to green at (x, y); inf or nan where green is zero."""
    pixel = self.sample(x, y)
    return pixel[channel.value] / pixel[Channel.Green.value]


def saturate(value: np.float32) -> int:
  """Convert a float intensity to [0, 255], mapping nan to 0 and truncating."""
  if np.isnan(value):
    return 0
  return int(min(max(value, 0.0), 255.0))


def mean2(t0: np.float32, t1: np.float32, green: np.float32) -> int:
  return saturate((t0 + t1) / TWO * green)


def mean4(t0: np.float32, t1: np.float32, t2: np.float32, t3: np.float32, green: np.float32) -> int:
  return saturate((t0 + t1 + t2 + t3) / FOUR * green)


def separate_green(mosaic: MosaicAccessor) -> np.ndarray:
  """Pass 1: full green plane, red and blue only at their native sites."""
  separated = np.zeros((mosaic.height, mosaic.width, 3), dtype=np.uint8)

  for y in range(mosaic.height):
    for x in range(mosaic.width):
      sample = mosaic.sample(x, y)
      channel = mosaic_channel(x, y)

      if channel is Channel.Green:
        separated[y, x, Channel.Green.value] = sample
      else:
        separated[y, x, channel.value] = sample
        separated[y, x, Channel.Green.value] = mosaic.neighbour_mean(x, y)

  return separated


def reconstruct_chroma(separated: RgbAccessor) -> np.ndarray:
  """Pass 2: interpolate red and blue as green-weighted neighbor ratios."""
  rgb = np.empty((separated.height, separated.width, 3), dtype=np.uint8)

  def diagonal_mean(x: int, y: int, channel: Channel, green: np.float32) -> int:
    return mean4(*(separated.ratio(x + dx, y + dy, channel) for dx, dy in DIAGONALS), green)

  for y in range(separated.height):
    for x in range(separated.width):
      pixel = separated.pixels[y, x]
      red, green, blue = int(pixel[0]), int(pixel[1]), int(pixel[2])
      g = np.float32(green)

      match (x % 2, y % 2):
        case (0, 0):
          blue = mean2(separated.ratio(x - 1, y, Channel.Blue), separated.ratio(x + 1, y, Channel.Blue), g)
          red = mean2(separated.ratio(x, y - 1, Channel.Red), separated.ratio(x, y + 1, Channel.Red), g)
        case (1, 1):
          blue = mean2(separated.ratio(x, y - 1, Channel.Blue), separated.ratio(x, y + 1, Channel.Blue), g)
          red = mean2(separated.ratio(x - 1, y, Channel.Red), separated.ratio(x + 1, y, Channel.Red), g)
        case (1, 0):
          red = diagonal_mean(x, y, Channel.Red, g)
        case (0, 1):
          blue = diagonal_mean(x, y, Channel.Blue, g)

      rgb[y, x] = (red, green, blue)

  return rgb


@beartype
def demosaic(mosaic: torch.Tensor) -> torch.Tensor:
  """
  Reconstruct an RGB image from a mosaic, one pixel at a time.

  Args:
      mosaic: Mosaic tensor of shape (H, W, 1), uint8, at least 2x2

  Returns:
      RGB tensor of shape (H, W, 3), uint8, on the mosaic's device
  """
  grid_size(mosaic, 1, min_size=2)

  separated = separate_green(MosaicAccessor(mosaic.cpu().numpy()))
  with np.errstate(divide='ignore', invalid='ignore'):
    rgb = reconstruct_chroma(RgbAccessor(separated))

  return torch.from_numpy(rgb).to(mosaic.device)


class SequentialDemosaic:
  """Single threaded demosaic with shape validation."""

  @beartype
  def __init__(self, image_size: tuple[int, int]):
    width, height = image_size
    check_extendable(width, height)
    self._image_size = image_size

  def __repr__(self) -> str:
    return f'SequentialDemosaic({self._image_size[0]}x{self._image_size[1]})'

  def process(self, mosaic: torch.Tensor) -> torch.Tensor:
    width, height = self._image_size
    expected_shape = (height, width, 1)
    if tuple(mosaic.shape) != expected_shape:
      raise RuntimeError(f'SequentialDemosaic input shape {tuple(mosaic.shape)} != expected {expected_shape}')
    return demosaic(mosaic)

  @property
  def image_size(self) -> tuple[int, int]:
    return self._image_size


__all__ = ['SequentialDemosaic', 'demosaic']
