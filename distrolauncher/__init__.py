"""distrolauncher: install Linux root filesystem images as WSL distributions.

Supports two artifact encodings:
  - tar streams (plain, gzip, zstd, xz), handed to the runtime as-is
  - raw ``ext4.vhdx`` block images (optionally gzip-compressed), installed
    through the placeholder/relocate/patch protocol
Sources may be local files or ``http(s)://`` URLs with optional SHA-256
verification.
"""

__version__ = "1.0.0"
__author__ = "distrolauncher contributors"
__description__ = "Install root filesystem images as WSL distribution instances"
__url__ = "https://github.com/distrolauncher/distrolauncher"

from distrolauncher.core.pipeline import install
from distrolauncher.models.install import InstallRequest

__all__ = ["install", "InstallRequest", "__version__"]
