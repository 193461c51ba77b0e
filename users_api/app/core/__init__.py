"""
Core infrastructure shared by the services and routes.
"""
