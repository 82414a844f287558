"""Rockwater - rock-and-water task scheduling."""

__version__ = "0.1.0"
