"""
Core client components.
"""
from .thread_pool import run_in_thread

__all__ = ['run_in_thread']
