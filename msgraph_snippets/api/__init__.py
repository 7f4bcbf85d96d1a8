"""HTTP surface for the snippet catalogs."""
