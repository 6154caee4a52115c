"""
FastAPI application for the movie-reviews backend.
"""
