"""
Core package: configuration, exception taxonomy and logging.
"""
