"""
Centralized configuration for all modules
"""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Application name (used for the logger namespace and User-Agent)
APP_NAME = os.environ.get('APP_NAME', 'NuancedRating')

# ==================== RATINGS SOURCE ====================

# Title pages live under /title/<id>/, ratings pages under /title/<id>/ratings
IMDB_BASE_URL = os.environ.get('IMDB_BASE_URL', 'https://www.imdb.com')

# Request timeouts
REQUEST_TIMEOUT = int(os.environ.get('REQUEST_TIMEOUT', 10))  # seconds

USER_AGENT = os.environ.get('USER_AGENT', f'{APP_NAME}/1.0')

# ==================== CACHE ====================

# SQLite file backing the persistent result cache
CACHE_DATABASE_PATH = os.environ.get('CACHE_DATABASE_PATH', './rating_cache.db')

# Computed ratings are reused for 2 hours
CACHE_TTL_SECONDS = int(os.environ.get('CACHE_TTL_SECONDS', 7200))

CACHE_KEY_PREFIX = 'normscore|'

# SQLite cache size in MB
DB_CACHE_SIZE_MB = int(os.environ.get('DB_CACHE_SIZE_MB', 16))

# ==================== AUDIENCE ESTIMATION ====================

# Reviewers are roughly 81% male / 19% female while cinema audiences are
# close to 50/50, so female vote counts are scaled up by this factor.
FEMALE_BOOST_FACTOR = float(os.environ.get('FEMALE_BOOST_FACTOR', 4.27))

# Under-18 voters must rate a title this much higher than everyone
# for it to be flagged as aimed at children
CHILD_SCORE_RATIO_THRESHOLD = float(os.environ.get('CHILD_SCORE_RATIO_THRESHOLD', 1.05))

# Male/female share ratio thresholds for the audience label
AUDIENCE_SKEW_THRESHOLDS = [
    (3.0, 'squarely for men', 'squarely for women'),
    (2.0, 'mostly for men', 'mostly for women'),
    (1.2, 'slightly angled toward a male audience', 'slightly angled toward a female audience'),
]
AUDIENCE_NEUTRAL_LABEL = 'for both men and women alike'

# ==================== LOGGING ====================

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
LOG_FILE = os.environ.get('LOG_FILE') or None

# ==================== SERVER ====================

HOST = os.environ.get('HOST', '127.0.0.1')
PORT = int(os.environ.get('PORT', 5000))
