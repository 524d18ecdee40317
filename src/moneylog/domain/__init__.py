"""Domain layer for moneylog application."""
