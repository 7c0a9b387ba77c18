"""
Tour Knowledge Service

Knowledge retrieval for the tour assistant
- keyword normalisation (English / Polish)
- structured catalogue search and booking statistics
- semantic search with per-document diversification
"""

__version__ = "1.0.0"
__author__ = "Walkative! AI Team"
