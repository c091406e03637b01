# Path: ppo_index/output/__init__.py
"""
ppo_index Output Package

OUTPUT layer: serializes extraction records to the result stream.
"""

from .record_writer import RecordWriter

__all__ = ['RecordWriter']
