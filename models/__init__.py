# This file makes the models directory a Python package 
from .translation import Translation
from .verse import Verse

__all__ = [
    'Translation',
    'Verse',
]
