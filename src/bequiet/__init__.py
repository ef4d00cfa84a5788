"""Temporary suppression and capturing of the output of the running process."""

from .host import *
from .quiet import *

__all__ = [name for name in globals().keys() if not name.startswith("_")]
