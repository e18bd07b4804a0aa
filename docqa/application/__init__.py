"""
Application layer: service wiring and orchestration services.
"""
