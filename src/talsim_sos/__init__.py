# src/talsim_sos/__init__.py
from .talsim_sos_version import __version__

__all__ = ["__version__"]
