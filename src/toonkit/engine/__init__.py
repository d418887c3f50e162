"""Encoding pipeline: normalization, quoting, array/object rendering."""
