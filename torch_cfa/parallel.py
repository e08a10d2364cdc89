"""Data-parallel demosaic: each pass is one elementwise tensor map."""

from contextlib import contextmanager

from beartype import beartype
import torch

from .bayer import Channel, SiteMasks, grid_size, site_masks
from .boundary import check_extendable, pad_extended


@contextmanager
def intra_op_threads(num_threads: int):
  """Temporarily resize torch's intra-op pool; 0 keeps the current size."""
  if num_threads <= 0:
    yield
    return

  previous = torch.get_num_threads()
  torch.set_num_threads(num_threads)
  try:
    yield
  finally:
    torch.set_num_threads(previous)


def saturate(values: torch.Tensor) -> torch.Tensor:
  return torch.nan_to_num(values, nan=0.0, posinf=255.0).clamp(0, 255).to(torch.uint8)


def separate_green(mosaic: torch.Tensor, masks: SiteMasks) -> torch.Tensor:
  """Pass 1: full green plane, red and blue only at their native sites."""
  samples = mosaic[..., 0].to(torch.int32)
  padded = pad_extended(samples)

  neighbours = padded[1:-1, :-2] + padded[1:-1, 2:] + padded[:-2, 1:-1] + padded[2:, 1:-1]
  zeros = torch.zeros_like(samples)

  red = torch.where(masks.red, samples, zeros)
  green = torch.where(masks.green, samples, neighbours // 4)
  blue = torch.where(masks.blue, samples, zeros)
  return torch.stack((red, green, blue), dim=-1).to(torch.uint8)


def reconstruct_chroma(separated: torch.Tensor, masks: SiteMasks) -> torch.Tensor:
  """Pass 2: interpolate red and blue as green-weighted neighbor ratios."""
  height, width = separated.shape[:2]
  padded = pad_extended(separated.to(torch.float32))

  red_ratio = padded[..., Channel.Red.value] / padded[..., Channel.Green.value]
  blue_ratio = padded[..., Channel.Blue.value] / padded[..., Channel.Green.value]

  def at(ratio: torch.Tensor, dx: int, dy: int) -> torch.Tensor:
    return ratio[1 + dy : 1 + dy + height, 1 + dx : 1 + dx + width]

  def diagonal(ratio: torch.Tensor) -> torch.Tensor:
    return at(ratio, -1, -1) + at(ratio, 1, -1) + at(ratio, -1, 1) + at(ratio, 1, 1)

  native = separated.to(torch.float32)
  green = native[..., Channel.Green.value]

  red = torch.where(
    masks.green_even,
    (at(red_ratio, 0, -1) + at(red_ratio, 0, 1)) / 2 * green,
    torch.where(
      masks.green_odd,
      (at(red_ratio, -1, 0) + at(red_ratio, 1, 0)) / 2 * green,
      torch.where(masks.red, native[..., Channel.Red.value], diagonal(red_ratio) / 4 * green),
    ),
  )

  blue = torch.where(
    masks.green_even,
    (at(blue_ratio, -1, 0) + at(blue_ratio, 1, 0)) / 2 * green,
    torch.where(
      masks.green_odd,
      (at(blue_ratio, 0, -1) + at(blue_ratio, 0, 1)) / 2 * green,
      torch.where(masks.blue, native[..., Channel.Blue.value], diagonal(blue_ratio) / 4 * green),
    ),
  )

  return torch.stack((saturate(red), separated[..., Channel.Green.value], saturate(blue)), dim=-1)


class ParallelDemosaic:
  """Data-parallel demosaic with shape validation."""

  @beartype
  def __init__(
    self,
    device: torch.device,
    image_size: tuple[int, int],
    *,
    num_threads: int = 0,
  ):
    width, height = image_size
    check_extendable(width, height)
    if num_threads < 0:
      raise ValueError(f'num_threads must be >= 0, got {num_threads}')

    self.device = device
    self.num_threads = num_threads
    self._image_size = image_size
    self._masks = site_masks(height, width, device)

  def __repr__(self) -> str:
    return f'ParallelDemosaic({self._image_size[0]}x{self._image_size[1]}, num_threads={self.num_threads})'

  def process(self, mosaic: torch.Tensor) -> torch.Tensor:
    width, height = self._image_size
    expected_shape = (height, width, 1)
    if tuple(mosaic.shape) != expected_shape:
      raise RuntimeError(f'ParallelDemosaic input shape {tuple(mosaic.shape)} != expected {expected_shape}')
    grid_size(mosaic, 1, min_size=2)

    with intra_op_threads(self.num_threads):
      separated = separate_green(mosaic.to(self.device), self._masks)
      # pass 2 only consumes the materialized pass 1 tensor; on CUDA its kernels queue behind pass 1
      return reconstruct_chroma(separated, self._masks)

  @property
  def image_size(self) -> tuple[int, int]:
    return self._image_size


@beartype
def parallel_demosaic(mosaic: torch.Tensor, *, num_threads: int = 0) -> torch.Tensor:
  """
  Reconstruct an RGB image from a mosaic with data-parallel tensor passes.

  Bit-identical to `demosaic` for the same input.

  Args:
      mosaic: Mosaic tensor of shape (H, W, 1), uint8, at least 2x2
      num_threads: Intra-op threads for this call (0 for torch's default)

  Returns:
      RGB tensor of shape (H, W, 3), uint8, on the mosaic's device
  """
  width, height = grid_size(mosaic, 1, min_size=2)
  return ParallelDemosaic(mosaic.device, (width, height), num_threads=num_threads).process(mosaic)


__all__ = ['ParallelDemosaic', 'intra_op_threads', 'parallel_demosaic']
