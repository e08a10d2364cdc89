"""Bayer color filter array simulation with PyTorch."""

# Import all modules
from . import (
  bayer,
  boundary,
  demosaic,
  errors,
  parallel,
)
from .bayer import Channel, mosaic_channel, rgb_to_mosaic
from .boundary import extend_index, pad_extended
from .demosaic import SequentialDemosaic
from .demosaic import demosaic as sequential_demosaic
from .errors import BoundaryIndexError, CfaError, DimensionError
from .parallel import ParallelDemosaic, parallel_demosaic

__all__ = [
  # Errors
  'BoundaryIndexError',
  'CfaError',
  # Color filter array
  'Channel',
  'DimensionError',
  # Demosaicing
  'ParallelDemosaic',
  'SequentialDemosaic',
  # Submodules
  'bayer',
  'boundary',
  'demosaic',
  'errors',
  'extend_index',
  'mosaic_channel',
  'pad_extended',
  'parallel',
  'parallel_demosaic',
  'rgb_to_mosaic',
  'sequential_demosaic',
]
