"""
Corretaje - Core Package

Property listings and contact inquiries API, with in-memory and
relational storage backends.
"""

__version__ = "2.0.0"
