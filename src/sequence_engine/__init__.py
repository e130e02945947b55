"""Sequence engine — composes pose sequences and plays them back."""
