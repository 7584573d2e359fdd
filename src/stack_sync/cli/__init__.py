"""
Command line interface for stack-sync.
"""
