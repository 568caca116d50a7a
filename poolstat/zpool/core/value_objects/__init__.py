"""Core value objects"""

from .size_value import SizeValue

__all__ = [
    'SizeValue'
]
