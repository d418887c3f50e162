"""Option loading from files and the environment."""
