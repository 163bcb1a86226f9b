"""Declaration tree providers."""
