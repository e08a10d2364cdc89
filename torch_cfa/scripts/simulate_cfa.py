import argparse
from pathlib import Path
import sys

import torch

from torch_cfa.demosaic import demosaic
from torch_cfa.parallel import parallel_demosaic
from torch_cfa.pipeline.cfa_processor import CfaProcessor
from torch_cfa.pipeline.config import CfaSettings, Demosaicer
from torch_cfa.utilities import load_image, save_image


def settings_from_args(args) -> CfaSettings:
  if args.settings is not None:
    settings = CfaSettings.load_json(args.settings)
  else:
    settings = CfaSettings()

  overrides = {}
  if args.sequential:
    overrides['demosaic'] = Demosaicer.sequential
  if args.threads is not None:
    overrides['num_threads'] = args.threads

  return CfaSettings.model_validate({**settings.model_dump(), **overrides})


def simulate(image_path: Path, output_dir: Path, settings: CfaSettings, args) -> tuple[Path, Path]:
  """Mosaic an image, demosaic it again and write both results."""
  print(f'Loading image: {image_path}')
  rgb = load_image(image_path)
  height, width = rgb.shape[:2]
  print(f'Image size: {width}x{height}')

  processor = CfaProcessor((width, height), settings)
  print(processor)

  mosaic, reconstructed = processor.process(rgb)

  if args.compare:
    sequential = demosaic(mosaic)
    parallel = parallel_demosaic(mosaic, num_threads=settings.num_threads)
    if not torch.equal(sequential, parallel):
      mismatched = (sequential != parallel).any(dim=-1).sum().item()
      raise RuntimeError(f'Sequential and parallel demosaic differ at {mismatched} pixels')
    print('Sequential and parallel demosaic agree')

  output_dir.mkdir(parents=True, exist_ok=True)
  mosaic_path = output_dir / f'{image_path.stem}_bayer_mosaic.png'
  demosaic_path = output_dir / f'{image_path.stem}_bayer_demosaic.png'
  save_image(mosaic_path, mosaic)
  save_image(demosaic_path, reconstructed)
  print(f'Wrote {mosaic_path}')
  print(f'Wrote {demosaic_path}')

  if args.show:
    from torch_cfa.scripts.util import display_mosaic, display_rgb

    display_mosaic('Mosaic', mosaic)
    display_rgb('Demosaic', reconstructed)

  return mosaic_path, demosaic_path


def main(argv: list[str] | None = None):
  parser = argparse.ArgumentParser(description='Simulate a Bayer color filter array on an image')
  parser.add_argument('image', type=Path, help='Input image path')
  parser.add_argument('--output-dir', type=Path, default=None, help='Output directory (default: next to the image)')
  parser.add_argument('--settings', type=Path, default=None, help='CfaSettings JSON file')

  parser.add_argument('--sequential', action='store_true', help='Use the sequential demosaic')
  parser.add_argument('--threads', type=int, default=None, help='Demosaic threads (0 for torch default)')

  parser.add_argument('--compare', action='store_true', help='Check sequential and parallel demosaic agree')
  parser.add_argument('--show', action='store_true', help='Display the mosaic and the reconstruction')
  args = parser.parse_args(argv)

  output_dir = args.output_dir if args.output_dir is not None else args.image.parent

  try:
    simulate(args.image, output_dir, settings_from_args(args), args)
  except Exception as e:
    print(f'Error: {e}')
    return 1

  return 0


if __name__ == '__main__':
  sys.exit(main())
