"""
SuhbatAI - AI-driven mock interview coach.
"""

__version__ = '1.0.0'
