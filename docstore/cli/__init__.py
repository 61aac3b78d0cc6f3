"""
DocStore CLI - inspection of document classes and attribute types.

Usage:
    docstore types
    docstore hints myapp.models:House
    docstore choices myapp.models:House construction
    docstore schema myapp.models:House
"""

__version__ = "0.1.0"
__cli_name__ = "docstore"
