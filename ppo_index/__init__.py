# Path: ppo_index/__init__.py
"""
ppo_index - Price Transparency Index Extractor

Streams Transparency in Coverage table-of-contents files and extracts
plan descriptions, PPO file locations and EIN-correlated match records
without loading the document into memory.
"""

__version__ = '1.0.0'
