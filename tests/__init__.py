"""
Only the root tests directory carries an __init__.py, so pytest treats tests/ as
a package. Subdirectories rely on namespace packages (PEP 420).
"""
