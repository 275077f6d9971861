"""HTTP API for the fundcalc calculator."""
