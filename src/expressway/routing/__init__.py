"""Routing — path templates, structural matching, and the route registry.

Routes are registered during setup and frozen before the host starts
serving requests.
"""
