"""Settlement engine for home poker games and shared expenses."""
