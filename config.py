"""
Configuration settings for the HRM System
"""
import os
from pathlib import Path

# Base directory
BASE_DIR = Path(__file__).parent.absolute()

# Application identity (used to locate the per-user data directory)
APP_NAME = "HRM System"
APP_IDENTIFIER = os.environ.get('HRM_APP_IDENTIFIER', 'com.hrm.system')

# Database configuration
# Leave DATA_DIR empty to use the platform application data directory
DATA_DIR = os.environ.get('HRM_DATA_DIR', '')
DB_FILENAME = 'hrm_system.db'

# Flask configuration
SECRET_KEY = os.environ.get('HRM_SECRET_KEY', 'change-this-to-a-random-secret-key-in-production')
DEBUG = os.environ.get('HRM_DEBUG', 'False').lower() == 'true'
HOST = os.environ.get('HRM_HOST', '127.0.0.1')
PORT = int(os.environ.get('HRM_PORT', 5000))

# Logging configuration
LOG_DIR = os.path.join(BASE_DIR, 'logs')
LOG_FILE = os.environ.get('HRM_LOG_FILE', os.path.join(LOG_DIR, 'app.log'))
LOG_LEVEL = os.environ.get('HRM_LOG_LEVEL', 'INFO')

# Employee record configuration
WORKING_STATUSES = ('active', 'resign')
MARITAL_STATUSES = ('single', 'married', 'divorced', 'widowed')
RECENT_DAYS = 30  # Window for "recent" joinings/resignations on the dashboard
