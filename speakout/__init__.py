"""speakout: deliver recognized text to the Linux clipboard or focused window."""

from speakout.__version__ import __version__

__all__ = ['__version__']
