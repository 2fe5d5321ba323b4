"""
News ticker dashboard.

Headline ticker engine, playlist video player and the small Flask backend
that serves the news endpoint and the dashboard assets.
"""

__version__ = "1.0.0"
