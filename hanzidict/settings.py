"""
Settings and configuration for hanzidict.
"""

import os
from pathlib import Path

# Data directory paths
PACKAGE_DIR = Path(__file__).parent
DATA_DIR = PACKAGE_DIR / "data"

# Compiled dictionary - defaults to data/hanzidict.db
DEFAULT_DB_PATH = DATA_DIR / "hanzidict.db"

# Environment variable for custom dictionary path
DB_PATH = Path(os.environ.get("HANZIDICT_DB_PATH", DEFAULT_DB_PATH))

# Build inputs (user must download these)
CEDICT_PATH = Path(os.environ.get("CEDICT_PATH", DATA_DIR / "cedict_ts.u8"))
HSK_PATH = Path(os.environ.get("HSK_PATH", DATA_DIR / "hsk.tsv"))

# Download URL for CC-CEDICT
CEDICT_URL = "https://www.mdbg.net/chinese/export/cedict/cedict_1_0_ts_utf-8_mdbg.txt.gz"

# Debug mode
DEBUG = os.environ.get("HANZIDICT_DEBUG", "").lower() in ("1", "true", "yes")

# Bumped whenever the compiled table layout or key conventions change
FORMAT_VERSION = 1

# Longest character run tried by the segmenter
SEGMENT_WINDOW = 20

# Longest English phrase (in words) tried as a single key
ENGLISH_WINDOW = 4

# Longest pinyin syllable ("zhuang") plus a tone digit
PINYIN_WINDOW = 7

# Multi-word English keys are stored with this between words
ENGLISH_KEY_DELIMITER = "%20"

