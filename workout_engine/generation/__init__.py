"""Workout content generation: prompt composition, retry ladder, validation."""
