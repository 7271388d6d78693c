"""
FILE: mynd/core/__init__.py
PURPOSE: Todo model, persistence and the ordered todo store
"""
