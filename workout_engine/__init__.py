"""Personalized workout generation pipeline.

Turns a user profile into validated daily workout payloads and orchestrates
a full Monday-aligned week of them with persisted per-day status.
"""
