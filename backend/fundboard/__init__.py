"""Fundboard — donor/investor dashboard backend.

Invariants:
    - Package root contains no executable code (no import side-effects)
"""
