"""
Code generators.
"""

from .base import Generator, GeneratedFile
from .dispatch import DispatchCase, DispatchGenerator

__all__ = [
    "Generator",
    "GeneratedFile",
    "DispatchCase",
    "DispatchGenerator",
]
