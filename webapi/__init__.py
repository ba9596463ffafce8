"""
Web API for Punto Tactics.
"""
