"""Application service modules."""
