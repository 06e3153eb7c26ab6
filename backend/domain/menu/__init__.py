"""Menu domain - customizable plates, variant generation and pricing."""
