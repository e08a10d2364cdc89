from pathlib import Path

from beartype import beartype
import numpy as np
from PIL import Image
import torch

from .bayer import grid_size


@beartype
def load_image(image_path: Path, device: torch.device = torch.device('cpu')) -> torch.Tensor:
  """Load an image file as an RGB pixel grid.

  Returns:
      RGB tensor of shape (H, W, 3), uint8
  """
  if not image_path.exists():
    raise FileNotFoundError(f'Image not found: {image_path}')

  img = Image.open(image_path).convert('RGB')
  return torch.from_numpy(np.array(img, dtype=np.uint8)).to(device)


@beartype
def load_mosaic(image_path: Path, device: torch.device = torch.device('cpu')) -> torch.Tensor:
  """Load a grayscale image file as a mosaic.

  Returns:
      Mosaic tensor of shape (H, W, 1), uint8
  """
  if not image_path.exists():
    raise FileNotFoundError(f'Image not found: {image_path}')

  img = Image.open(image_path).convert('L')
  return torch.from_numpy(np.array(img, dtype=np.uint8)).unsqueeze(-1).to(device)


@beartype
def save_image(image_path: Path, image: torch.Tensor) -> None:
  """Save a (H, W, 1) mosaic or (H, W, 3) RGB pixel grid."""
  channels = image.size(-1) if image.ndim == 3 else 0
  grid_size(image, 1 if channels == 1 else 3)

  pixels = image.cpu().numpy()
  if channels == 1:
    Image.fromarray(pixels[..., 0]).save(image_path)
  else:
    Image.fromarray(pixels).save(image_path)
