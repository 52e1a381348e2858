"""VMware inventory models and derivations."""
