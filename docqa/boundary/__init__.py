"""
Boundary layer: database, vector store and model backend adapters.
"""
