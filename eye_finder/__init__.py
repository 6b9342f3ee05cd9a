"""Heuristic eye and pupil localization for still face images."""

__version__ = "0.1"
