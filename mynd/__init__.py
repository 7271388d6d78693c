"""
FILE: mynd/__init__.py
PURPOSE: Personal todo list: an ordered list of todos kept in one local file
"""

__version__ = "0.1.0"
