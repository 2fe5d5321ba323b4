"""
Shared helpers for the Flask web interface: error codes and structured responses.
"""
