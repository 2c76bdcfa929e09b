"""
Plexi Anti-Nuke
===============

Discord bot that detects bursts of destructive administrative actions,
punishes the executor and restores deleted roles and channels.
"""

__version__ = "1.0.0"
