"""
Command-line entrypoints for the movie-reviews backend.
"""
