"""
Flask web interface: news endpoint, health check and the dashboard page.
"""
