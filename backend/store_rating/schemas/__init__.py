"""
Schema module initialization.
Exports all schema classes from submodules for convenient imports.
"""
from .common import *
from .auth import *
from .admin import *
from .rating import *
