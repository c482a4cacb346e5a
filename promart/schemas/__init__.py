"""Pydantic schemas package.

Folder intent:
  common.py        — CamelModel base + HealthResponse / MessageResponse
  account.py       — register / login / profile / OTP DTOs
  listing.py       — listing responses, moderation bodies, dashboard stats
  notification.py  — inbox responses
  content.py       — blog posts and contact messages
"""
