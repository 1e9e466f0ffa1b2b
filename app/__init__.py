"""Cataloog BP: TMDB catalogues for Stremio."""
