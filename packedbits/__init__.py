"""Top-level package for packedbits."""

from loguru import logger

from packedbits.bitmap import Bitmap  # noqa: F401
from packedbits.exceptions import (  # noqa: F401
    ArgumentInvalidError,
    ArgumentRangeError,
    BitmapError,
)

try:
    import importlib.metadata as importlib_metadata
except ImportError:
    import importlib_metadata

__version__ = importlib_metadata.version(__name__)

logger.disable(__name__)
