"""Booking drafts built from favorites and the project cache."""
