"""
Core infrastructure: settings, logging, security helpers, error
taxonomy and the entity store shared by every service.
"""
