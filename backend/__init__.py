"""Media helper backend packages."""
