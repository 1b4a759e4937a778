"""
flatstore: single-file data server
Built with FastAPI + Uvicorn
"""

__version__ = "1.0.0"
