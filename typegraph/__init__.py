"""
typegraph: render an abstract type graph to Python source.
"""

__version__ = "0.1.0"
