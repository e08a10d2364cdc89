import cv2
import numpy as np
import torch


def display_rgb(k: str, rgb_image: torch.Tensor | np.ndarray):
  if isinstance(rgb_image, torch.Tensor):
    rgb_image = rgb_image.cpu().numpy()
  cv2.namedWindow(k, cv2.WINDOW_NORMAL)

  # loop until 'q' is pressed or the window is closed
  cv2.imshow(k, cv2.cvtColor(rgb_image, cv2.COLOR_RGB2BGR))
  while cv2.waitKey(1) & 255 != ord('q') and cv2.getWindowProperty(k, cv2.WND_PROP_VISIBLE) >= 1:
    pass

  cv2.destroyAllWindows()


def display_mosaic(k: str, mosaic: torch.Tensor):
  """Show a (H, W, 1) mosaic as a grayscale image."""
  gray = mosaic[..., 0].cpu().numpy()
  display_rgb(k, cv2.cvtColor(gray, cv2.COLOR_GRAY2RGB))
