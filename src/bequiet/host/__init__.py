"""Buffers, output primitives and advice of the running process."""

from ._advice import *
from ._buffers import *
from ._primitives import *

__all__ = [name for name in globals().keys() if not name.startswith("_")]
