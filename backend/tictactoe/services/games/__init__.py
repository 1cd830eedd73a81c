"""Game domain services: board evaluation, room codes, match flow and the
idle-room reaper.

This package holds the match logic that socket handlers call into, keeping
transport concerns separated from core game mechanics.
"""
