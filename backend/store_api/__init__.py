"""
Restaurant catalog REST API.
"""
