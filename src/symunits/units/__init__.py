"""Unit labels and the text parser; the lazy ``u`` namespace lives on ``symunits``."""
