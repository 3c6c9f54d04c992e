"""Remote catalog access and the local project cache."""
