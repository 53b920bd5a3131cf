"""Lucky draw administration toolkit."""
