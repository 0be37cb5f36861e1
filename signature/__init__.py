"""
Signature assets.

Stores user-created signature images (PNG/JPEG bytes plus natural size) as
one JSON collection in the per-user app-data directory.
"""
