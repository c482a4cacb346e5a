"""Routers package — HTTP endpoint definitions, all mounted under /api.

Files:
  accounts.py       — /auth, /otp, /companies (profile)
  listings.py       — /listings (submit, edit, browse)
  admin.py          — /admin (moderation, dashboard, accounts)
  notifications.py  — /notifications (inbox)
  content.py        — /blogs, /contact

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to promart/services/.
"""
