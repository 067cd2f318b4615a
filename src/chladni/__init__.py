"""Chladni plate particle field driven by equity, climate and surveillance."""
