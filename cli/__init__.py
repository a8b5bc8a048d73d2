"""CLI package for the Lending Library"""
from .main import cli

__all__ = ['cli']
