from . import mf
