"""Market-making practice drills."""
