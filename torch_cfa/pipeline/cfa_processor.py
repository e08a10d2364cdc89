"""Mosaic and demosaic pipeline with configurable settings."""

from pathlib import Path

from beartype import beartype
import torch

from torch_cfa.bayer import grid_size, rgb_to_mosaic
from torch_cfa.demosaic import SequentialDemosaic
from torch_cfa.parallel import ParallelDemosaic

from .config import CfaSettings, Demosaicer


class ImageSizeMismatchError(Exception):
  """Raised when image size does not match expected dimensions."""

  def __init__(self, message: str, image_size: tuple[int, int]):
    super().__init__(message)
    self.image_size = image_size


@beartype
class CfaProcessor:
  @beartype
  def __init__(
    self,
    image_size: tuple[int, int],
    settings: CfaSettings,
    device: torch.device = torch.device('cpu'),
  ):
    """Initialize the pipeline for a fixed image size.

    Args:
        image_size: Image dimensions as (width, height)
        settings: Processing settings
        device: Device the parallel demosaic runs on
    """
    self.device = device
    self.image_size = image_size
    self.settings = settings
    self.workspace = self._create_workspace(settings)

  def __repr__(self) -> str:
    return (
      f'CfaProcessor('
      f'size={self.image_size}, '
      f'device={self.device}, '
      f'demosaic={self.settings.demosaic.name}, '
      f'num_threads={self.settings.num_threads})'
    )

  @staticmethod
  def from_settings_file(path: Path, image_size: tuple[int, int], device: torch.device = torch.device('cpu')):
    return CfaProcessor(image_size, CfaSettings.load_json(path), device=device)

  def _create_workspace(self, settings: CfaSettings) -> SequentialDemosaic | ParallelDemosaic:
    match settings.demosaic:
      case Demosaicer.sequential:
        return SequentialDemosaic(self.image_size)
      case Demosaicer.parallel:
        return ParallelDemosaic(self.device, self.image_size, num_threads=settings.num_threads)

    raise AssertionError(f'Invalid demosaic method: {settings.demosaic}')

  def update_settings(self, settings: CfaSettings):
    old_settings = self.settings
    self.settings = settings

    def changed(*attrs: str) -> bool:
      return any(getattr(old_settings, attr) != getattr(settings, attr) for attr in attrs)

    if changed('demosaic', 'num_threads'):
      self.workspace = self._create_workspace(settings)

  def _check_size(self, image: torch.Tensor, channels: int):
    size = grid_size(image, channels)
    if size != self.image_size:
      raise ImageSizeMismatchError(
        f'Image size mismatch: expected {self.image_size[0]}x{self.image_size[1]}, got {size[0]}x{size[1]}',
        image_size=self.image_size,
      )

  @beartype
  def mosaic(self, rgb: torch.Tensor) -> torch.Tensor:
    self._check_size(rgb, 3)
    return rgb_to_mosaic(rgb)

  @beartype
  def demosaic(self, mosaic: torch.Tensor) -> torch.Tensor:
    self._check_size(mosaic, 1)
    return self.workspace.process(mosaic)

  @beartype
  def process(self, rgb: torch.Tensor) -> tuple[torch.Tensor, torch.Tensor]:
    """Run an RGB image through the color filter array and back.

    Returns:
        (mosaic, reconstructed) tensors of shape (H, W, 1) and (H, W, 3)
    """
    mosaic = self.mosaic(rgb)
    return mosaic, self.demosaic(mosaic)
