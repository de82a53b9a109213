"""
Version 1 of the API.

Bundles the auth, profile, jobs, applications and statistics
endpoints served under ``/api/v1``.
"""
