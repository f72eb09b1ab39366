from pathlib import Path


# Project root
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent

# Runtime output
LOG_DIR = BASE_DIR / 'logs'
DATA_DIR = BASE_DIR / 'data'

# Admin override audit trail (only written when LOG_TO_FILE is on)
AUDIT_LOG_FILENAME = 'admin_audit.log'
