"""Suppression and capturing of output."""

from ._be_quiet import *
from ._config import *
from ._funcall import *
from ._interception import *
from ._silence_process import *

__all__ = [name for name in globals().keys() if not name.startswith("_")]
