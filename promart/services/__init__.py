"""Services package — all business logic lives here, never in routers.

Files:
  listings.py       — listing moderation workflow (state machine + notification fan-out)
  files.py          — file-metadata records and lenient kept-file / feature parsers
  mailer.py         — console / SMTP email backends behind the Mailer protocol
  accounts.py       — registration, login, profile, password change
  admin.py          — dashboard counts, account moderation, company deletion
  notifications.py  — notification inbox
  otp.py            — email one-time codes
  content.py        — blog posts and contact messages

Rule: routers call services, services call repositories, repositories call the DB.
      No SQLAlchemy queries in routers. No FastAPI imports in services.
"""
