"""Install configuration loading."""
