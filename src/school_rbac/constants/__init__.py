"""Static permission catalog and built-in roles."""
