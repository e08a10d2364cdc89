"""Exceptions raised on CFA contract violations."""


class CfaError(Exception):
  """Base class for mosaic and demosaic contract violations."""


class DimensionError(CfaError, ValueError):
  """Raised when a pixel grid has an unusable shape, dtype or size."""

  def __init__(self, message: str, image_size: tuple[int, int] | None = None):
    super().__init__(message)
    self.image_size = image_size


class BoundaryIndexError(CfaError, IndexError):
  """Raised when a neighbor lookup reaches more than one pixel past the image."""

  def __init__(self, x: int, y: int, image_size: tuple[int, int]):
    width, height = image_size
    super().__init__(
      f'Index error: index range should be [-1, {width}] x [-1, {height}], got (x={x}, y={y})'
    )
    self.x = x
    self.y = y
    self.image_size = image_size


__all__ = ['BoundaryIndexError', 'CfaError', 'DimensionError']
