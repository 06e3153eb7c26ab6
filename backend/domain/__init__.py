"""Domain layer for the ordering core.

Menus, plate customization, meal subscriptions and shopping carts,
decoupled from transport and storage.
"""
