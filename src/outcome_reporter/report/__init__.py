"""Request validation and query construction.

Pure functions: nothing here touches the database or the network.
"""
