"""CLI package for Library Circulation"""
from .main import cli

__all__ = ['cli']
