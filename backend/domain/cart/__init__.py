"""Cart domain - per-customer shopping cart bound to one restaurant."""
