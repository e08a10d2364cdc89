from setuptools import find_namespace_packages, setup

setup(
  name='torch-cfa',
  version='0.1.0',
  description='Bayer color filter array mosaic and demosaic simulation with PyTorch',
  python_requires='>=3.11',
  packages=find_namespace_packages(include=['torch_cfa', 'torch_cfa.*']),
  install_requires=[
    'beartype',
    'numpy>=2',
    'opencv-python',
    'pillow',
    'pydantic>=2',
    'torch',
  ],
  extras_require={
    'test': ['pytest'],
  },
)
