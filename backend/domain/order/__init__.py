"""Order domain - checked-out carts and their fulfilment status."""
