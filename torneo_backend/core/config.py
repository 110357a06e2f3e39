import os

# =====================================
# Global configuration for La Masía F&C
# =====================================

# --- Absolute database path ---
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DB_PATH = os.path.join(BASE_DIR, "torneo.db")
DATABASE_URL = f"sqlite:///{DB_PATH}"

# SQL echo for the engine (noisy, keep off outside debugging)
DB_ECHO = False

# OWNER_BOOTSTRAP_EMAIL:
# Profile with this email is promoted to "owner" every time its session
# is resolved. Set to None to disable the bootstrap.
OWNER_BOOTSTRAP_EMAIL = "admin@torneo.com"

# NOTIFICATION_POPUPS:
# Whether system-level popups may be shown for viewers who granted
# permission. Persisted Notification rows are written regardless.
NOTIFICATION_POPUPS = True

# Popups kept in memory per process (oldest dropped first)
POPUP_HISTORY = 100

# AUTO_SEED:
# When True, an empty database is filled with the demo tournament on startup.
AUTO_SEED = True

# Header carrying the opaque session token
SESSION_HEADER = "X-Session-Token"

# Broadcast sentinel for notifications
BROADCAST = "all"
