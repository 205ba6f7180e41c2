"""Doctors Portal booking backend."""
