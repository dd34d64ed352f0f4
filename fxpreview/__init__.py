"""Frame drivers: the headless hashing runner and the terminal player."""
